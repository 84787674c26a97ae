"""Annotated versions and the VERSION metadata record."""

from __future__ import annotations

import json
import logging
import socket
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .scm.base import ScmHandler
from .scm.selector import ScmContext

logger = logging.getLogger(__name__)


def annotate_version(base_version: str, context: Optional[ScmContext]) -> str:
    """
    Combine base_version with SCM-derived qualifiers.

    Falls back to base_version unchanged when there is no SCM context or the
    handler fails while formatting.
    """
    if context is None or context.handler is None:
        return base_version
    try:
        return context.handler.annotated_version(base_version)
    except Exception as exc:
        logger.warning(f"Annotating version with {context.handler!r} failed: {exc}")
        return base_version


@dataclass(frozen=True)
class VersionMetadata:
    """Build metadata packed next to a service artifact."""
    build_date: datetime
    version: str
    name: str
    revision: Optional[str]
    built_on: str

    def to_dict(self) -> Dict[str, Any]:
        # Key order is part of the file format.
        return {
            "buildDate": self.build_date.isoformat(timespec="seconds"),
            "version": self.version,
            "name": self.name,
            "revision": self.revision,
            "builtOn": self.built_on,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VersionMetadata":
        return cls(
            build_date=datetime.fromisoformat(data["buildDate"]),
            version=data["version"],
            name=data["name"],
            revision=data.get("revision"),
            built_on=data["builtOn"],
        )

    def write(self, path: Path) -> Path:
        """Write the record as pretty JSON, replacing any previous file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json() + "\n", encoding="utf-8")
        return path


def local_hostname() -> str:
    return socket.gethostname()


def build_version_metadata(
    project_name: str,
    version: str,
    handler: Optional[ScmHandler],
    now: Optional[datetime] = None,
    hostname: Optional[str] = None,
) -> VersionMetadata:
    revision = None
    if handler is not None:
        try:
            revision = handler.revision
        except Exception as exc:
            logger.warning(f"Reading revision from {handler!r} failed: {exc}")
    return VersionMetadata(
        build_date=now or datetime.now(timezone.utc),
        version=version,
        name=project_name,
        revision=revision,
        built_on=hostname or local_hostname(),
    )
