from bisect import bisect_right
from collections.abc import Iterator


class LineIndex:
    """Byte offsets of the first character of every line in a text buffer.

    Offsets are measured in the UTF-8 encoding of the text, which is what
    tree-sitter and the diagnostics renderer use for spans.
    """

    __slots__ = ("_starts", "_length")

    def __init__(self, text: str | bytes) -> None:
        encoded = text.encode("utf-8") if isinstance(text, str) else text
        self._starts: tuple[int, ...] = tuple(self._compute(encoded))
        self._length = len(encoded)

    # TODO: recognize \r, U+2028 and U+2029 as line terminators
    @staticmethod
    def compute(text: str) -> Iterator[int]:
        return LineIndex._compute(text.encode("utf-8"))

    @staticmethod
    def _compute(encoded: bytes) -> Iterator[int]:
        yield 0
        pos = encoded.find(b"\n")
        while pos != -1:
            yield pos + 1
            pos = encoded.find(b"\n", pos + 1)

    @property
    def starts(self) -> tuple[int, ...]:
        return self._starts

    @property
    def line_count(self) -> int:
        return len(self._starts)

    @property
    def length(self) -> int:
        return self._length

    def line_start(self, line_index: int) -> int | None:
        """Return the offset where ``line_index`` begins.

        One past the last line maps to the end of the text so the final line
        still has a range; anything further is out of range and yields None.
        """
        if line_index < 0:
            return None
        if line_index < len(self._starts):
            return self._starts[line_index]
        if line_index == len(self._starts):
            return self._length
        return None

    def line_index_for(self, byte_index: int) -> int:
        return bisect_right(self._starts, byte_index) - 1

    def line_range(self, line_index: int) -> range | None:
        start = self.line_start(line_index)
        if start is None:
            return None
        end = self.line_start(line_index + 1)
        if end is None:
            return None
        return range(start, end)

    def __len__(self) -> int:
        return len(self._starts)

    def __repr__(self) -> str:
        return f"LineIndex(lines={len(self._starts)}, length={self._length})"
