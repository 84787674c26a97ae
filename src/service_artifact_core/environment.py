"""Read-only view over the process environment and working directory."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class Environment:
    """
    Snapshot of environment variables plus the working directory.

    Handlers only ever read from it. Instances are hashable so a run can
    key its cached SCM context on the environment it was resolved for.
    """
    variables: Mapping[str, str] = field(default_factory=dict)
    cwd: Path = field(default_factory=Path.cwd)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))
        object.__setattr__(self, "cwd", Path(self.cwd))

    @classmethod
    def from_os(cls, cwd: Optional[Path] = None) -> "Environment":
        return cls(variables=dict(os.environ), cwd=cwd or Path.cwd())

    def __hash__(self) -> int:
        return hash((frozenset(self.variables.items()), str(self.cwd)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Environment):
            return NotImplemented
        return self.cwd == other.cwd and dict(self.variables) == dict(other.variables)

    def get(self, key: str) -> Optional[str]:
        """Return the value for key; unset and blank values are both None."""
        value = self.variables.get(key)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def has_dir(self, name: str) -> bool:
        return self._resolve(name).is_dir()

    def has_file(self, name: str) -> bool:
        return self._resolve(name).is_file()

    def find_upwards(self, name: str) -> Optional[Path]:
        """Find name in the working directory or the closest parent holding it."""
        try:
            start = self.cwd.resolve()
        except OSError:
            return None
        for parent in [start] + list(start.parents):
            candidate = parent / name
            try:
                if candidate.exists():
                    return candidate
            except OSError:
                # Unreadable parents end the search.
                return None
        return None

    def _resolve(self, name: str) -> Path:
        path = Path(name)
        if not path.is_absolute():
            path = self.cwd / path
        return path
