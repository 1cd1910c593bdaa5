from typing import Protocol


class Files(Protocol):
    """Lookups the diagnostics renderer needs; every method returns None for an unknown id.

    Byte offsets and line ranges index the UTF-8 encoding of the source
    (``source(id).encode("utf-8")``), not the ``str`` itself.
    """

    def name(self, file_id: int) -> str | None: ...

    def source(self, file_id: int) -> str | None: ...

    def line_index(self, file_id: int, byte_index: int) -> int | None: ...

    def line_range(self, file_id: int, line_index: int) -> range | None: ...
