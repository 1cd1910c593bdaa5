"""Tests for the watchfiles watcher adapter."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from lintwalk.core.walker import FileWalker
from lintwalk.watcher.watchfiles_adapter import (
    WatchfilesWatcher,
    _is_linted_file,
    refresh_on_change,
)


class TestIsLintedFile:
    def test_javascript_file(self) -> None:
        assert _is_linted_file(Path("bar.js")) is True

    def test_module_file(self) -> None:
        assert _is_linted_file(Path("bar.mjs")) is True

    def test_unsupported_typescript(self) -> None:
        assert _is_linted_file(Path("baz.ts")) is False

    def test_unsupported_no_extension(self) -> None:
        assert _is_linted_file(Path("Makefile")) is False

    def test_custom_extensions(self) -> None:
        assert _is_linted_file(Path("baz.ts"), {"ts"}) is True


class TestWatchfilesWatcher:
    def test_implements_protocol(self) -> None:
        from lintwalk.core.ports.watcher import FileWatcherPort

        callback = AsyncMock()
        watcher: FileWatcherPort = WatchfilesWatcher("/tmp", callback)
        assert hasattr(watcher, "start")
        assert hasattr(watcher, "stop")

    @pytest.mark.asyncio
    async def test_start_creates_task(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("lintwalk.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            assert watcher._task is not None
            await watcher.stop()
            assert watcher._task is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)
        await watcher.stop()

    @pytest.mark.asyncio
    async def test_double_start_is_noop(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("lintwalk.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _empty_async_iter()
            await watcher.start()
            task1 = watcher._task
            await watcher.start()
            assert watcher._task is task1
            await watcher.stop()

    @pytest.mark.asyncio
    async def test_callback_receives_linted_files(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        changes = {(1, "/tmp/foo.mjs"), (2, "/tmp/bar.txt"), (1, "/tmp/baz.js")}

        with patch("lintwalk.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_called_once()
        paths = callback.call_args[0][0]
        assert paths == {Path("/tmp/foo.mjs"), Path("/tmp/baz.js")}

    @pytest.mark.asyncio
    async def test_callback_not_called_for_unlinted_only(self) -> None:
        callback = AsyncMock()
        watcher = WatchfilesWatcher("/tmp", callback)

        changes = {(1, "/tmp/readme.txt"), (2, "/tmp/Makefile")}

        with patch("lintwalk.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter(changes)
            await watcher.start()
            await asyncio.sleep(0.05)
            await watcher.stop()

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_callback_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        callback = AsyncMock(side_effect=RuntimeError("boom"))
        watcher = WatchfilesWatcher("/tmp", callback)

        with patch("lintwalk.watcher.watchfiles_adapter.awatch") as mock_awatch:
            mock_awatch.return_value = _single_change_iter({(1, "/tmp/a.js")})
            await watcher.start()
            await asyncio.sleep(0.05)
            assert watcher._task is not None
            assert not watcher._task.done()
            await watcher.stop()

        assert "Error in watcher callback" in caplog.text


@pytest.mark.asyncio
async def test_refresh_on_change_reloads_tracked_files(
    make_tree: Callable[[dict[str, str | bytes]], Path],
) -> None:
    root = make_tree({"a.js": "old\n"})
    walker = FileWalker.from_paths([root])
    (entry,) = walker

    (root / "a.js").write_text("new\nnew\n", encoding="utf-8")
    await refresh_on_change(walker)({root / "a.js"})

    assert entry.source == "new\nnew\n"
    assert entry.line_index.line_count == 3


@pytest.mark.asyncio
async def test_refresh_on_change_reads_off_the_event_loop_thread(
    make_tree: Callable[[dict[str, str | bytes]], Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    root = make_tree({"a.js": "a\n"})
    walker = FileWalker.from_paths([root])
    loop_thread = threading.get_ident()
    refresh_threads: list[int] = []
    monkeypatch.setattr(walker, "refresh", lambda path: refresh_threads.append(threading.get_ident()))

    await refresh_on_change(walker)({root / "a.js"})

    assert len(refresh_threads) == 1
    assert refresh_threads[0] != loop_thread


async def _empty_async_iter() -> AsyncIterator[Any]:
    """Async iterator that never yields, just blocks until cancelled."""
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
    yield  # make it an async generator  # pragma: no cover


async def _single_change_iter(changes: set[tuple[int, str]]) -> AsyncIterator[set[tuple[int, str]]]:
    """Async iterator that yields one set of changes then blocks."""
    yield changes
    try:
        await asyncio.sleep(3600)
    except asyncio.CancelledError:
        return
