from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from lintwalk.cli.common import console, load_walker
from lintwalk.core.files import SourceFile

PathsArgument = Annotated[list[Path], typer.Argument(help="Files or directories to load.")]


def _column(entry: SourceFile, line_start: int, byte_offset: int) -> int:
    """1-based character column of ``byte_offset`` on the line starting at ``line_start``."""
    return len(entry.source_bytes[line_start:byte_offset].decode("utf-8", errors="replace")) + 1


def files(paths: PathsArgument) -> None:
    """Load files and list them with their ids."""
    walker = load_walker(paths)

    table = Table(show_lines=False)
    for header in ("id", "name", "kind", "lines", "bytes"):
        table.add_column(header)
    for entry in sorted(walker, key=lambda f: f.file_id):
        table.add_row(
            str(entry.file_id),
            entry.display_name,
            entry.kind.value,
            str(entry.line_index.line_count),
            str(entry.line_index.length),
        )
    console.print(table)
    console.print(f"({len(walker)} files)")


def locate(
    path: Annotated[Path, typer.Argument(help="Source file.")],
    offset: Annotated[int, typer.Argument(help="Byte offset into the file.", min=0)],
) -> None:
    """Translate a byte offset into a 1-based line and column."""
    if not path.is_file():
        console.print(f"[red]{escape(str(path))} is not a file.[/red]", soft_wrap=True)
        raise typer.Exit(1)

    walker = load_walker([path])
    entry = next(iter(walker))

    if offset > entry.line_index.length:
        console.print(f"[red]Offset {offset} is past the end of {entry.display_name}.[/red]")
        raise typer.Exit(1)

    line = entry.line_index_for(offset)
    line_range = entry.line_range(line)
    assert line_range is not None
    column = _column(entry, line_range.start, offset)
    console.print(f"{entry.display_name}:{line + 1}:{column}", soft_wrap=True, highlight=False, markup=False)
    console.print(f"line bytes: {line_range.start}..{line_range.stop}")
    console.print((entry.line_text(line) or "").rstrip("\r\n"), markup=False, highlight=False, soft_wrap=True)


def parse(paths: PathsArgument) -> None:
    """Parse files and report syntax errors."""
    walker = load_walker(paths)

    error_count = 0
    for entry in sorted(walker, key=lambda f: f.file_id):
        parsed = entry.parse()
        for error in parsed.errors:
            line = entry.line_index_for(error.start_byte)
            start = entry.line_start(line)
            assert start is not None
            console.print(
                f"{entry.display_name}:{line + 1}:{_column(entry, start, error.start_byte)}: {error.message}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
        error_count += len(parsed.errors)

    if error_count:
        console.print(f"[red]{error_count} error(s)[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Parsed {len(walker)} file(s) without errors[/green]")
