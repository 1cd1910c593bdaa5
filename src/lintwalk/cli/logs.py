import logging

from rich.console import Console
from rich.logging import RichHandler


def _verbose_to_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbose: int = 0) -> None:
    """Send log records to stderr through rich; -v adds INFO, -vv adds DEBUG."""
    logging.root.handlers.clear()
    handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(level=_verbose_to_level(verbose), handlers=[handler])
