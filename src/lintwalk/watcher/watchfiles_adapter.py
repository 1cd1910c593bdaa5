from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Collection, Coroutine
from pathlib import Path
from typing import Any

from watchfiles import awatch

from lintwalk.config import DEFAULT_LINTED_EXTENSIONS
from lintwalk.core.walker import FileWalker

logger = logging.getLogger(__name__)


def _is_linted_file(path: Path, extensions: Collection[str] = DEFAULT_LINTED_EXTENSIONS) -> bool:
    return path.suffix.removeprefix(".") in extensions


def refresh_on_change(walker: FileWalker) -> Callable[[set[Path]], Coroutine[Any, Any, None]]:
    """Build a watcher callback that refreshes ``walker`` for every changed path."""

    async def _on_change(paths: set[Path]) -> None:
        for path in sorted(paths):
            await asyncio.to_thread(walker.refresh, path)

    return _on_change


class WatchfilesWatcher:
    """Watch a directory for source-file changes and trigger a callback.

    Implements the ``FileWatcherPort`` protocol.
    """

    def __init__(
        self,
        directory: str | Path,
        on_change: Callable[[set[Path]], Coroutine[Any, Any, None]],
        extensions: Collection[str] = DEFAULT_LINTED_EXTENSIONS,
    ) -> None:
        self._directory = Path(directory)
        self._on_change = on_change
        self._extensions = frozenset(extensions)
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._watch())
        logger.info("Watcher started for %s", self._directory)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Watcher stopped for %s", self._directory)

    async def wait(self) -> None:
        if self._task is not None:
            await self._task

    async def _watch(self) -> None:
        async for changes in awatch(self._directory):
            paths = {Path(p) for _, p in changes if _is_linted_file(Path(p), self._extensions)}
            if paths:
                logger.info("Detected changes in %d file(s)", len(paths))
                try:
                    await self._on_change(paths)
                except Exception:
                    logger.exception("Error in watcher callback")
