from enum import Enum
from pathlib import Path

_MODULE_EXTENSION = "mjs"


class FileKind(str, Enum):
    """Whether a file is parsed as a classic script or as an ES module."""

    SCRIPT = "script"
    MODULE = "module"

    @classmethod
    def from_path(cls, path: Path) -> "FileKind":
        if path.suffix.removeprefix(".") == _MODULE_EXTENSION:
            return cls.MODULE
        return cls.SCRIPT
