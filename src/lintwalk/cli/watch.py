import asyncio

from lintwalk.cli.common import console, load_walker
from lintwalk.cli.files import PathsArgument
from lintwalk.watcher.watchfiles_adapter import WatchfilesWatcher, refresh_on_change


def watch(paths: PathsArgument) -> None:
    """Load files, then reload them whenever they change on disk."""
    walker = load_walker(paths)
    directory = next((p for p in paths if p.is_dir()), paths[0].parent)

    async def _run() -> None:
        watcher = WatchfilesWatcher(
            directory,
            refresh_on_change(walker),
            extensions=walker.config.linted_extensions,
        )
        await watcher.start()
        try:
            await watcher.wait()
        finally:
            await watcher.stop()

    console.print(f"[green]Watching[/green] {directory} ({len(walker)} files)")
    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("Stopped.")
