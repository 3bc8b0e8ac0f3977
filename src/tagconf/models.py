"""Data models for tagconf."""

from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any
from typing import Union

Value = Union[bool, int, float, str, list["Value"]]


class Section(Mapping[str, Value]):
    """Read-only mapping of keys to typed values for one config section.

    Undefined keys resolve to None through ``get``; item access raises
    KeyError like any other mapping.
    """

    def __init__(self, name: str, entries: Mapping[str, Value] | None = None):
        self.name = name
        self._entries: dict[str, Value] = dict(entries or {})

    def __getitem__(self, key: str) -> Value:
        # Lists are copied so the section stays read-only
        return _copy_value(self._entries[key])

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Section({self.name!r}, {self._entries!r})"

    def get(self, key: str, default: Value | None = None) -> Value | None:
        """Get value for key, or default (None) when the key is undefined."""
        if key not in self._entries:
            return default
        return self[key]

    def to_dict(self) -> dict[str, Value]:
        """Return a plain dict copy of the section entries."""
        return {key: _copy_value(value) for key, value in self._entries.items()}


class Document(Mapping[str, Section]):
    """Read-only result of loading a config file.

    Maps section names to Section objects in declaration order.

    Example:
        ```python
        config = load("app.conf", overrides=["production"])
        config["ftp"]["path"]
        config.lookup("ftp.path")
        ```
    """

    def __init__(self, sections: Mapping[str, Section] | None = None):
        self._sections: dict[str, Section] = dict(sections or {})

    def __getitem__(self, name: str) -> Section:
        return self._sections[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __repr__(self) -> str:
        return f"Document({list(self._sections)!r})"

    def lookup(self, path: str, default: Value | None = None) -> Value | None:
        """Resolve a dotted ``section.key`` path.

        Both section names and keys may contain dots, so every split point is
        tried from left to right and the first defined entry wins.

        Args:
            path: Dotted path, e.g. ``"ftp.path"``
            default: Returned when the section or key is undefined

        Returns:
            The stored value, or default
        """
        split = path.find(".")
        while split != -1:
            section = self._sections.get(path[:split])
            key = path[split + 1 :]
            if section is not None and key in section:
                return section[key]
            split = path.find(".", split + 1)
        return default

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return plain nested dicts for every section."""
        return {name: section.to_dict() for name, section in self._sections.items()}


def _copy_value(value: Value) -> Value:
    if isinstance(value, list):
        return [_copy_value(item) for item in value]
    return value


class Scope(Enum):
    """Settings scope enumeration.

    Determines which settings file to target for write operations.
    """

    USER = "user"
    PROJECT = "project"
    LOCAL = "local"


@dataclass(frozen=True)
class ConfigPaths:
    """Paths to the three override settings scopes.

    Applications inject these paths to decide where the active override
    tags are configured.

    Attributes:
        user: Path to user-global settings file (required)
        project: Path to project settings file (optional)
        local: Path to local (machine-specific) settings file (optional)
    """

    user: Path
    project: Path | None = None
    local: Path | None = None
