"""Tests for derivation-tree recording, printing, JSON and Graphviz output."""

import json

from checker import check, parse
from parse_tree import NodeKind
from pretty_printer import PrettyPrinter
from symbols import SymbolTable, SymbolType
from tree_json import symbols_to_json, tree_to_json
from tree_viz import render_tree_dot
from tests.utils import check_body, program

BODY = "int identifier:x ; identifier:x = identifier:x + int_literal:1 ;"


def test_no_tree_by_default():
    assert check_body(BODY).tree is None


def test_tree_covers_every_token():
    tokens = program(BODY)
    result = check(tokens, record_tree=True)
    assert result.tree.name == "program"
    assert [str(t) for t in result.tree.leaves()] == tokens


def test_expression_nodes_are_typed():
    result = check_body(BODY, record_tree=True)
    (expr,) = result.tree.find_all("expr")
    assert expr.symbol_type == SymbolType.INT
    values = expr.find_all("expr_value")
    assert [v.symbol_type for v in values] == [SymbolType.INT, SymbolType.INT]


def test_parse_only_tree_is_untyped():
    result = parse(program(BODY), record_tree=True)
    assert all(n.symbol_type is None for n in result.tree.walk())
    assert len(result.tree.find_all("stmt")) == 2


def test_partial_tree_on_failure():
    result = check_body("int identifier:x ; if ( identifier:x ) ;", record_tree=True)
    assert not result.ok
    (cond,) = result.tree.find_all("condition")
    assert cond.children[0].symbol_type == SymbolType.INT
    assert result.tree.find_all("then_part") == []


def test_pretty_print_tree():
    result = check_body("cout << endl ;", record_tree=True)
    text = PrettyPrinter.print_tree(result.tree)
    lines = text.splitlines()
    assert lines[0] == "program"
    assert "  'void'" in lines
    assert "      output" in lines
    assert PrettyPrinter.print_tree(None) == "<no tree>"


def test_pretty_print_symbols():
    table = SymbolTable([("x", SymbolType.INT), ("rate", SymbolType.REAL)])
    assert PrettyPrinter.print_symbols(table) == "x    : int\nrate : real"
    assert PrettyPrinter.print_symbols(SymbolTable()) == "(no variables)"


def test_tree_json_is_serializable():
    result = check_body(BODY, record_tree=True)
    data = tree_to_json(result.tree)
    json.dumps(data)
    assert data["node_type"] == "Production"
    assert data["name"] == "program"
    assert data["children"][0] == {"node_type": "Token", "kind": "keyword", "text": "void"}
    assert tree_to_json(None) is None
    assert symbols_to_json(result.symbols) == [{"name": "x", "type": "int"}]


def test_tree_viz_dot_source():
    result = check_body(BODY, record_tree=True)
    dot = render_tree_dot(result.tree, title="success")
    src = dot.source
    assert "program" in src
    assert "identifier:x" in src
    assert "expr : int" in src
    nodes = sum(1 for _ in result.tree.walk())
    assert src.count("->") == nodes - 1


def test_tree_leaf_kinds():
    result = check_body(";", record_tree=True)
    kinds = {n.kind for n in result.tree.walk()}
    assert kinds == {NodeKind.PRODUCTION, NodeKind.TOKEN}
