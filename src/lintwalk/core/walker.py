"""The file table: concurrent, filtered loading of source files and id-keyed lookups."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from lintwalk.config import WalkerConfig
from lintwalk.core.ids import FileId
from lintwalk.core.files import SourceFile

logger = logging.getLogger(__name__)


def _read_source(path: Path) -> str:
    # Decode without newline translation so offsets match the bytes on disk.
    return path.read_bytes().decode("utf-8")


class FileWalker:
    """Owns every loaded ``SourceFile``, keyed by file id.

    Implements the ``Files`` lookup protocol used by the diagnostics renderer.
    Loading and refreshing must be driven by one owner; the lookups are safe to
    call from several readers as long as nothing is loading at the same time.
    """

    def __init__(self, config: WalkerConfig | None = None) -> None:
        self.config = config or WalkerConfig()
        self.files: dict[FileId, SourceFile] = {}

    @classmethod
    def empty(cls, config: WalkerConfig | None = None) -> FileWalker:
        return cls(config)

    @classmethod
    def from_paths(cls, paths: Iterable[str | os.PathLike[str]], config: WalkerConfig | None = None) -> FileWalker:
        """Build a walker from root paths, skipping any unreadable files or dirs."""
        walker = cls(config)
        walker.load_files(paths)
        return walker

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _is_ignored(self, name: str) -> bool:
        return name in self.config.ignored

    def _is_linted(self, path: Path) -> bool:
        return path.suffix.removeprefix(".") in self.config.linted_extensions

    def _walk(self, root: Path) -> Iterator[Path]:
        if self._is_ignored(root.name):
            return
        if not root.is_dir():
            if root.exists():
                yield root
            return

        for dirpath, dirnames, filenames in os.walk(root):
            # prune in place so ignored directories are never descended into
            dirnames[:] = [d for d in dirnames if not self._is_ignored(d)]
            for filename in filenames:
                if not self._is_ignored(filename):
                    yield Path(dirpath) / filename

    def candidates(self, paths: Iterable[str | os.PathLike[str]]) -> Iterator[Path]:
        """Lazily yield every loadable file below ``paths``."""
        for root in paths:
            for path in self._walk(Path(root)):
                if self._is_linted(path):
                    yield path

    def _load_one(self, path: Path) -> SourceFile | None:
        try:
            source = _read_source(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("failed to read file %s: %s", path, exc)
            return None
        return SourceFile.from_disk(source, path)

    def load_batch(self, paths: Iterable[str | os.PathLike[str]]) -> dict[FileId, SourceFile]:
        """Read every candidate file concurrently without touching the table."""
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            loaded = list(pool.map(self._load_one, self.candidates(paths)))
        return {file.file_id: file for file in loaded if file is not None}

    def load_files(self, paths: Iterable[str | os.PathLike[str]]) -> list[FileId]:
        """Load files below ``paths`` into the table and return their new ids."""
        batch = self.load_batch(paths)
        self.files.update(batch)
        logger.info("Loaded %d file(s)", len(batch))
        return list(batch)

    def merge(self, other: FileWalker | dict[FileId, SourceFile]) -> None:
        """Absorb the records of another walker or batch; ids never collide."""
        batch = other.files if isinstance(other, FileWalker) else other
        self.files.update(batch)

    def refresh(self, path: str | os.PathLike[str]) -> SourceFile | None:
        """Reload the source of the tracked file with the same file name as ``path``.

        Matching is by final path component only, so two tracked files that
        share a name in different directories cannot be told apart here.
        Returns the refreshed record, or None if nothing was updated.
        """
        path = Path(path)
        target = next(
            (f for f in self.files.values() if f.path is not None and f.path.name == path.name),
            None,
        )
        if target is None:
            return None
        try:
            source = _read_source(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("failed to reload the source code at `%s`: %s", path, exc)
            return None
        target.replace_content(source)
        logger.debug("Refreshed file %d from %s", target.file_id, path)
        return target

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, file_id: FileId) -> SourceFile | None:
        return self.files.get(file_id)

    def name(self, file_id: FileId) -> str | None:
        entry = self.files.get(file_id)
        return entry.display_name if entry is not None else None

    def source(self, file_id: FileId) -> str | None:
        entry = self.files.get(file_id)
        return entry.source if entry is not None else None

    def source_bytes(self, file_id: FileId) -> bytes | None:
        entry = self.files.get(file_id)
        return entry.source_bytes if entry is not None else None

    def line_index(self, file_id: FileId, byte_index: int) -> int | None:
        entry = self.files.get(file_id)
        return entry.line_index_for(byte_index) if entry is not None else None

    def line_range(self, file_id: FileId, line_index: int) -> range | None:
        entry = self.files.get(file_id)
        return entry.line_range(line_index) if entry is not None else None

    def line_text(self, file_id: FileId, line_index: int) -> str | None:
        entry = self.files.get(file_id)
        return entry.line_text(line_index) if entry is not None else None

    def line_start(self, file_id: FileId, line_index: int) -> int | None:
        entry = self.files.get(file_id)
        return entry.line_start(line_index) if entry is not None else None

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, file_id: object) -> bool:
        return file_id in self.files

    def __iter__(self) -> Iterator[SourceFile]:
        return iter(self.files.values())
