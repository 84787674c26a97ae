"""Gerrit review-system handler."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..environment import Environment
from .base import ScmHandler, ScmKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GerritSettings:
    """Variables injected by the Jenkins Gerrit Trigger."""
    change_number: Optional[str] = None
    patchset_number: Optional[str] = None
    patchset_revision: Optional[str] = None
    branch: Optional[str] = None

    VARIABLES = (
        "GERRIT_CHANGE_NUMBER",
        "GERRIT_PATCHSET_NUMBER",
        "GERRIT_PATCHSET_REVISION",
        "GERRIT_BRANCH",
    )

    @classmethod
    def from_environment(cls, environment: Environment) -> "GerritSettings":
        return cls(
            change_number=environment.get("GERRIT_CHANGE_NUMBER"),
            patchset_number=environment.get("GERRIT_PATCHSET_NUMBER"),
            patchset_revision=environment.get("GERRIT_PATCHSET_REVISION"),
            branch=environment.get("GERRIT_BRANCH"),
        )


class GerritHandler(ScmHandler):
    """Detects a build triggered by a Gerrit change."""

    kind = ScmKind.GERRIT

    def __init__(
        self,
        environment: Environment,
        priority: int = 0,
        settings: Optional[GerritSettings] = None,
    ):
        super().__init__(environment, priority=priority)
        self.settings = settings or GerritSettings.from_environment(environment)

    def is_available(self) -> bool:
        available = bool(self.settings.change_number and self.settings.patchset_revision)
        logger.debug(f"Gerrit change marker present: {available}")
        return available

    @property
    def revision(self) -> Optional[str]:
        return self.settings.patchset_revision

    @property
    def branch(self) -> Optional[str]:
        return self.settings.branch

    @property
    def change_number(self) -> Optional[str]:
        return self.settings.change_number

    @property
    def patchset_number(self) -> str:
        return self.settings.patchset_number or "1"

    def annotated_version(self, base_version: str) -> str:
        if not self.change_number:
            return base_version
        return f"{base_version}+gerrit.{self.change_number}.{self.patchset_number}"
