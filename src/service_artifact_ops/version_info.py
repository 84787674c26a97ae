"""
version_info.py - Resolve SCM context and produce VERSION metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from service_artifact_core.config import ServiceArtifactConfig
from service_artifact_core.environment import Environment
from service_artifact_core.scm.selector import resolve_scm_context
from service_artifact_core.version import (
    VersionMetadata,
    annotate_version,
    build_version_metadata,
)


@dataclass
class ScmReport:
    """What SCM detection found, for display."""
    kind: Optional[str]
    revision: Optional[str]
    branch: Optional[str]
    dirty: Optional[bool]
    base_version: str
    version: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def collect_scm_report(
    environment: Environment,
    base_version: str,
    disabled: Iterable[str] = (),
) -> ScmReport:
    context = resolve_scm_context(environment, disabled=disabled)
    handler = context.handler
    return ScmReport(
        kind=context.kind.value if context.kind else None,
        revision=context.revision,
        branch=handler.branch if handler else None,
        dirty=handler.dirty if handler else None,
        base_version=base_version,
        version=annotate_version(base_version, context),
    )


def build_metadata(
    project_root: Path,
    config: ServiceArtifactConfig,
    environment: Environment,
) -> VersionMetadata:
    context = resolve_scm_context(environment, disabled=config.scm.disabled)
    return build_version_metadata(
        config.project_name(project_root),
        annotate_version(config.version, context),
        context.handler,
    )


def write_version_info(
    project_root: Path,
    config: ServiceArtifactConfig,
    environment: Environment,
    out: Optional[Path] = None,
) -> Tuple[Path, VersionMetadata]:
    """Write the VERSION file; it is regenerated on every call."""
    metadata = build_metadata(project_root, config, environment)
    path = out or config.version_path(project_root)
    return metadata.write(path), metadata
