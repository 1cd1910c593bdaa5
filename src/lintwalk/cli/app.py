from typing import Annotated

import typer

from lintwalk.cli.files import files, locate, parse
from lintwalk.cli.logs import configure_logging
from lintwalk.cli.watch import watch

app = typer.Typer(
    name="lintwalk",
    help="lintwalk CLI — load JavaScript sources and map byte offsets to lines.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _main(
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity.")] = 0,
) -> None:
    configure_logging(verbose)


app.command("files")(files)
app.command("locate")(locate)
app.command("parse")(parse)
app.command("watch")(watch)


def main() -> None:
    app()
