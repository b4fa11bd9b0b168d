from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional, TextIO

from checker import build_symbol_table, check, parse, typecheck
from diagnostics import Result
from pretty_printer import PrettyPrinter
from tokens import Token, decode_tokens
from tree_json import symbols_to_json, tree_to_json
from tree_viz import write_and_render


def read_tokens(stream: TextIO) -> List[Token]:
    """Read wire-form tokens, one per line; blank lines are skipped."""
    lines = (line.rstrip("\r\n") for line in stream)
    return decode_tokens(line for line in lines if line.strip())


def run_staged(tokens: List[Token], *, record_tree: bool = False) -> Result:
    """parse -> build_symbol_table -> typecheck, stopping at the first failure."""
    result = parse(tokens, record_tree=record_tree)
    if not result.ok:
        return result
    result, symbols = build_symbol_table(tokens, record_tree=record_tree)
    if not result.ok:
        return result
    return typecheck(tokens, symbols, record_tree=record_tree)


def process_tokens(
    tokens: List[Token],
    *,
    staged: bool = False,
    print_tokens: bool = False,
    print_tree: bool = False,
    print_symbols: bool = False,
    dump_tree_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
) -> Result:
    """Check one program and print the requested stages followed by the result."""
    if print_tokens:
        print(PrettyPrinter.print_tokens(tokens))

    record_tree = print_tree or bool(dump_tree_path) or bool(viz_path)
    if staged:
        result = run_staged(tokens, record_tree=record_tree)
    else:
        result = check(tokens, record_tree=record_tree)

    if print_tree:
        print("\nDerivation:")
        print(PrettyPrinter.print_tree(result.tree))

    if print_symbols:
        print("\nSymbols:")
        print(PrettyPrinter.print_symbols(result.symbols))

    if dump_tree_path:
        export = {
            "result": result.render(),
            "symbols": symbols_to_json(result.symbols),
            "warnings": list(result.warnings),
            "tree": tree_to_json(result.tree),
        }
        try:
            with open(dump_tree_path, "w", encoding="utf-8") as fh:
                json.dump(export, fh, indent=2)
            print(f"Wrote derivation JSON to {dump_tree_path}")
        except OSError as e:
            print(f"Failed to write derivation JSON to {dump_tree_path}: {e}")

    if viz_path:
        try:
            out = write_and_render(result.tree, viz_path, fmt=viz_format, title=result.render())
            print(f"Wrote derivation visualization to {out}")
        except Exception as e:
            # missing Graphviz binaries surface here; the check result stands
            print(f"Failed to render derivation visualization to {viz_path}: {e}")

    print(result.render())
    return result


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Syntax, semantic and type check a tokenized simple C program"
    )
    parser.add_argument(
        "--file", "-f", dest="file", help="Path to token file (default: stdin)"
    )
    parser.add_argument(
        "--staged",
        dest="staged",
        action="store_true",
        help="Run parse, symbol table and type check as separate passes",
    )
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--print-tree",
        dest="print_tree",
        action="store_true",
        help="Print the derivation tree",
    )
    parser.add_argument(
        "--print-symbols",
        dest="print_symbols",
        action="store_true",
        help="Print the symbol table",
    )
    parser.add_argument(
        "--dump-tree", dest="dump_tree", help="Path to write derivation JSON"
    )
    parser.add_argument(
        "--viz-tree",
        dest="viz_tree",
        help="Path (without extension) to write Graphviz visualization of the derivation",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )
    parser.add_argument(
        "--verbose", "-v", dest="verbose", action="store_true", help="Log each production"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as fh:
                tokens = read_tokens(fh)
        except OSError as e:
            print(f"Failed to read file {args.file}: {e}")
            return 1
    else:
        tokens = read_tokens(sys.stdin)

    result = process_tokens(
        tokens,
        staged=args.staged,
        print_tokens=args.print_tokens,
        print_tree=args.print_tree,
        print_symbols=args.print_symbols,
        dump_tree_path=args.dump_tree,
        viz_path=args.viz_tree,
        viz_format=args.viz_format,
    )
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
