"""Process-wide source file identifiers."""

import threading

FileId = int

# 0 is reserved for "no file" (virtual files) and is never issued
VIRTUAL_FILE_ID: FileId = 0


class _FileIdCounter:
    def __init__(self, start: int = 1) -> None:
        self._next = start
        self._lock = threading.Lock()

    def issue(self) -> FileId:
        with self._lock:
            file_id = self._next
            self._next += 1
        return file_id


_COUNTER = _FileIdCounter()


def issue_file_id() -> FileId:
    """Return a fresh identifier, distinct from every one issued before in this process."""
    return _COUNTER.issue()
