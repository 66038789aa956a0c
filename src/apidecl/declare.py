"""Load an apis source, generate its declarations and write them to disk."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from apidecl.codegen import generate_declarations
from apidecl.config import DeclareConfig
from apidecl.loader import fetch_apis, load_apis
from apidecl.writer import write_declarations


def load_source(config: DeclareConfig) -> Any:
    """Load the raw apis object from ``config.apis_url`` or ``config.apis_path``."""
    if config.apis_url:
        return asyncio.run(fetch_apis(config.apis_url))
    return load_apis(config.apis_path)


def declare(config: DeclareConfig, *, console: Console | None = None) -> Path | None:
    """Run the full workflow for one apis source.

    Returns:
        The written ``.d.ts`` path, or None if overwriting was declined.

    Raises:
        ApiDeclError: If the source cannot be loaded or is malformed.
    """
    console = console or Console()
    code = generate_declarations(load_source(config))

    target = config.default_output_path()
    existed = target.exists()

    def confirm(message: str) -> bool:
        return Confirm.ask(message, console=console)

    written = write_declarations(code, target, confirm=confirm, overwrite=config.assume_yes)
    relative = escape(os.path.relpath(target))
    if not written:
        console.print(f"[yellow]Kept existing declarations -> {relative}[/yellow]")
        return None

    action = "overwrote" if existed else "generated"
    console.print(f"[green]Successfully {action} API declarations -> {relative}[/green]\n")
    return target
