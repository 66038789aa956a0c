"""Command-line entry point: ``apidecl [APIS_PATH | URL]``."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from apidecl.codegen import generate_declarations
from apidecl.config import DeclareConfig
from apidecl.declare import declare, load_source
from apidecl.errors import ApiDeclError

_URL_PREFIXES = ("http://", "https://")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apidecl",
        description="Generate TypeScript declarations (.d.ts) for an apis object.",
    )
    parser.add_argument(
        "apis_path",
        nargs="?",
        help=(
            "apis source: a .json file, a .py module defining 'apis', a directory, "
            "or an http(s) URL serving JSON (default: src/apis)."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Target .d.ts path (default: next to the source).",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Overwrite an existing target without prompting.",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the declarations instead of writing a file.",
    )
    return parser


def main(argv: Sequence[str] | None = None, *, console: Console | None = None) -> int:
    load_dotenv(Path.cwd() / ".env")
    args = build_arg_parser().parse_args(argv)
    console = console or Console()
    source = args.apis_path
    is_url = bool(source) and source.startswith(_URL_PREFIXES)
    config = DeclareConfig.from_env(
        apis_path=None if is_url else source,
        apis_url=source if is_url else None,
        output_path=args.output,
        assume_yes=args.yes,
    )

    try:
        if args.stdout:
            # Not through rich: declarations contain [brackets] rich reads as markup.
            sys.stdout.write(generate_declarations(load_source(config)))
            sys.stdout.write("\n")
        else:
            declare(config, console=console)
    except ApiDeclError as e:
        console.print(f"[red]Error loading {escape(config.source)}:[/red]")
        console.print(escape(str(e)))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
