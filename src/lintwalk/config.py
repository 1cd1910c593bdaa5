import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IGNORED: frozenset[str] = frozenset({"node_modules"})
DEFAULT_LINTED_EXTENSIONS: frozenset[str] = frozenset({"js", "mjs"})


class WalkerConfig(BaseModel):
    """Which paths the file walker prunes and which files it loads."""

    model_config = ConfigDict(frozen=True)

    ignored: frozenset[str] = DEFAULT_IGNORED
    linted_extensions: frozenset[str] = DEFAULT_LINTED_EXTENSIONS
    max_workers: int | None = Field(default=None, ge=1)

    @field_validator("linted_extensions", mode="before")
    @classmethod
    def _strip_dots(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(ext).strip().removeprefix(".") for ext in value)
        return value

    @classmethod
    def from_env(cls) -> "WalkerConfig":
        values: dict[str, object] = {}
        # empty values are treated as unset
        ignored = _split_list(os.getenv("LINTWALK_IGNORED", ""))
        if ignored:
            values["ignored"] = ignored
        extensions = _split_list(os.getenv("LINTWALK_EXTENSIONS", ""))
        if extensions:
            values["linted_extensions"] = extensions
        max_workers = os.getenv("LINTWALK_MAX_WORKERS", "").strip()
        if max_workers:
            values["max_workers"] = max_workers
        return cls.model_validate(values)


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]
