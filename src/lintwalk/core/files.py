"""A single source file: its text, identity, and line index."""

from dataclasses import dataclass
from pathlib import Path

from lintwalk.core.ids import VIRTUAL_FILE_ID, FileId, issue_file_id
from lintwalk.core.kinds import FileKind
from lintwalk.core.line_index import LineIndex
from lintwalk.core.parse import parse_module, parse_script
from lintwalk.models import ParsedFile


@dataclass(frozen=True)
class _Snapshot:
    source: str
    encoded: bytes
    line_index: LineIndex

    @classmethod
    def of(cls, source: str) -> "_Snapshot":
        encoded = source.encode("utf-8")
        return cls(source, encoded, LineIndex(encoded))


class SourceFile:
    """A concrete (on-disk) or virtual (non-disk) JavaScript file.

    The source text and its line index live in one immutable snapshot that is
    replaced as a whole, so readers always see a matching pair.
    """

    def __init__(
        self,
        source: str,
        name: str,
        path: Path | None,
        file_id: FileId,
        kind: FileKind,
    ) -> None:
        self.file_id = file_id
        self.name = name
        self.path = path
        self.kind = kind
        self._snapshot = _Snapshot.of(source)

    @classmethod
    def from_disk(cls, source: str, path: Path) -> "SourceFile":
        return cls(
            source=source,
            name=path.name,
            path=path,
            file_id=issue_file_id(),
            kind=FileKind.from_path(path),
        )

    @classmethod
    def virtual(cls, source: str, name: str = "<virtual>", kind: FileKind = FileKind.SCRIPT) -> "SourceFile":
        return cls(source=source, name=name, path=None, file_id=VIRTUAL_FILE_ID, kind=kind)

    @property
    def source(self) -> str:
        return self._snapshot.source

    @property
    def source_bytes(self) -> bytes:
        """UTF-8 encoding of ``source``; every offset and range indexes into this."""
        return self._snapshot.encoded

    @property
    def line_index(self) -> LineIndex:
        return self._snapshot.line_index

    @property
    def display_name(self) -> str:
        return str(self.path) if self.path is not None else self.name

    def replace_content(self, source: str) -> None:
        self._snapshot = _Snapshot.of(source)

    def line_start(self, line_index: int) -> int | None:
        return self._snapshot.line_index.line_start(line_index)

    def line_index_for(self, byte_index: int) -> int:
        return self._snapshot.line_index.line_index_for(byte_index)

    def line_range(self, line_index: int) -> range | None:
        return self._snapshot.line_index.line_range(line_index)

    def line_text(self, line_index: int) -> str | None:
        snapshot = self._snapshot
        line_range = snapshot.line_index.line_range(line_index)
        if line_range is None:
            return None
        return snapshot.encoded[line_range.start : line_range.stop].decode("utf-8")

    def resolve_position(self, line: int, column: int) -> int | None:
        """Byte offset of a 0-based ``line``/``column``; the column is not bounds checked."""
        start = self.line_start(line)
        if start is None:
            return None
        return start + column

    def parse(self) -> ParsedFile:
        """Parse with the module or script entry point depending on ``kind``."""
        snapshot = self._snapshot
        if self.kind is FileKind.MODULE:
            return parse_module(snapshot.source, self.file_id)
        return parse_script(snapshot.source, self.file_id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceFile):
            return NotImplemented
        return (
            self.file_id == other.file_id
            and self.name == other.name
            and self.path == other.path
            and self.kind == other.kind
            and self.source == other.source
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SourceFile(file_id={self.file_id}, name={self.name!r}, kind={self.kind.value})"
