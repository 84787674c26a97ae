"""SCM handler base types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from ..environment import Environment


class ScmKind(str, Enum):
    """Source-control systems a handler can detect."""
    GERRIT = "gerrit"  # review system layered on git
    GIT = "git"


class ScmHandler(ABC):
    """
    Strategy object for detecting and querying one SCM kind.

    Subclasses must not raise for routine absence: ``is_available`` answers
    False and ``revision`` answers None when the SCM is not present or its
    tooling fails.
    """

    kind: ScmKind

    def __init__(self, environment: Environment, priority: int = 0):
        self._environment = environment
        self.priority = priority

    @classmethod
    def build(cls, environment: Environment, priority: int = 0) -> "ScmHandler":
        """Construct the handler from the variables it declares."""
        return cls(environment, priority=priority)

    @property
    def environment(self) -> Environment:
        return self._environment

    @abstractmethod
    def is_available(self) -> bool:
        """Probe for this SCM's markers."""

    @property
    @abstractmethod
    def revision(self) -> Optional[str]:
        """Current commit/change identifier, or None."""

    @abstractmethod
    def annotated_version(self, base_version: str) -> str:
        """Append SCM-derived qualifiers to base_version."""

    @property
    def branch(self) -> Optional[str]:
        return None

    @property
    def dirty(self) -> Optional[bool]:
        """Whether the working tree has local changes; None when unknown."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, cwd={str(self._environment.cwd)!r})"
