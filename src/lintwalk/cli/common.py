from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from lintwalk.config import WalkerConfig
from lintwalk.core.walker import FileWalker

console = Console()


def load_walker(paths: list[Path]) -> FileWalker:
    try:
        config = WalkerConfig.from_env()
    except ValidationError as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from None

    walker = FileWalker.from_paths(paths, config)
    if not walker:
        console.print("[red]No files to lint were found.[/red]")
        raise typer.Exit(1)
    return walker
