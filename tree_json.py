"""Convert derivation trees into JSON-serializable structures.

This module provides `tree_to_json(node)` which returns nested dicts/lists
describing a `ParseNode` tree, and `symbols_to_json(table)` for the symbol
table. Leaves record the token kind and text; productions record their name,
their computed type (if any) and their children.
"""

from typing import Any, Dict, List, Optional

from parse_tree import NodeKind, ParseNode
from symbols import SymbolTable


def tree_to_json(node: Optional[ParseNode]) -> Any:
    if node is None:
        return None

    if node.kind == NodeKind.TOKEN and node.token is not None:
        return {
            "node_type": "Token",
            "kind": str(node.token.kind),
            "text": node.token.text,
        }

    data: Dict[str, Any] = {
        "node_type": "Production",
        "name": node.name,
        "children": [tree_to_json(c) for c in node.children],
    }
    if node.symbol_type is not None:
        data["symbol_type"] = str(node.symbol_type)
    return data


def symbols_to_json(table: SymbolTable) -> List[Dict[str, str]]:
    return [{"name": name, "type": str(type_)} for name, type_ in table.items()]
