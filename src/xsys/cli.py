"""
xsys — command-line tool for expert-system sources.

Usage:
  xsys -i diagnostics.xsys                     write output.html
  xsys -i diagnostics.xsys -t json -o rules    write rules.json
  xsys -i diagnostics.xsys --answer no_boot=yes
                                               print the selected result
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from xsys import __version__
from xsys.analyzer import analyze_program
from xsys.backends import generate_html
from xsys.errors import ParseError
from xsys.evaluator import NO, YES
from xsys.parser import parse_string
from xsys.serialization import program_to_json, program_to_yaml

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

OUTPUT_TYPES = ("html", "json", "yaml")


def _answer(value: str) -> Tuple[str, str]:
    name, sep, answer = value.partition("=")
    name, answer = name.strip(), answer.strip().lower()
    if not sep or not name or answer not in (YES, NO):
        raise argparse.ArgumentTypeError(
            f"expected NAME={YES} or NAME={NO}, got {value!r}"
        )
    return name, answer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xsys",
        description="Generate HTML, JSON or YAML from an .xsys expert-system source.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"xsys {__version__}"
    )
    parser.add_argument(
        "-i", "--input", required=True,
        help="Input file with .xsys extension",
    )
    parser.add_argument(
        "-T", "--title", default="Expert System",
        help="Page heading for HTML output (default: %(default)s)",
    )
    parser.add_argument(
        "-t", "--type", choices=OUTPUT_TYPES, default="html",
        help="Output type (default: %(default)s)",
    )
    parser.add_argument(
        "-o", "--output", default="output",
        help="Output file name without extension (default: %(default)s)",
    )
    parser.add_argument(
        "--strict", action="store_true",
        help="Reject rules naming undeclared statements or results",
    )
    parser.add_argument(
        "-a", "--answer", action="append", type=_answer, default=[],
        metavar="NAME=yes|no",
        help="Answer a statement and print the selected result instead of writing a file",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    return parser


def _render(program, args) -> str:
    if args.type == "json":
        return program_to_json(program)
    if args.type == "yaml":
        return program_to_yaml(program)
    return generate_html(program, title=args.title)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.endswith(".xsys"):
        err_console.print("[red]Input file must have a .xsys extension.[/red]")
        return 1

    input_path = os.path.abspath(args.input)
    if not os.path.exists(input_path):
        err_console.print(f"[red]Input file not found:[/red] {escape(input_path)}")
        return 1

    with open(input_path, encoding="utf-8") as f:
        text = f.read()

    try:
        program = parse_string(text, strict=args.strict)
    except ParseError as e:
        err_console.print(f"[red]Syntax Error:[/red] {escape(str(e))}")
        return 1

    if not args.strict:
        for warning in analyze_program(program).warnings:
            err_console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")

    if args.answer:
        selected = program.select(dict(args.answer))
        if selected is None:
            console.print("[yellow]No result selected.[/yellow]")
        else:
            console.print(f"Result: {escape(selected)}")
        return 0

    output_name = f"{args.output}.{args.type}"
    with open(output_name, "w", encoding="utf-8") as f:
        f.write(_render(program, args))
    console.print(f"File generated: {escape(output_name)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
