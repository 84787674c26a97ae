"""ServiceArtifact: the object a build script talks to."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import ServiceArtifactConfig
from .environment import Environment
from .scm.base import ScmHandler
from .scm.selector import HandlerSelector, ScmContext
from .version import VersionMetadata, annotate_version, build_version_metadata

logger = logging.getLogger(__name__)


class ServiceArtifact:
    """
    Version and metadata for one service artifact.

    The SCM handler is looked up lazily on first use and cached for the
    lifetime of the object.
    """

    def __init__(
        self,
        name: str,
        environment: Optional[Environment] = None,
        config: Optional[ServiceArtifactConfig] = None,
        selector: Optional[HandlerSelector] = None,
    ):
        self.name = name
        self.environment = environment or Environment.from_os()
        self.config = config or ServiceArtifactConfig()
        self._selector = selector or HandlerSelector(
            self.environment, disabled=self.config.scm.disabled
        )

    @property
    def scm_context(self) -> ScmContext:
        return self._selector.resolve()

    @property
    def scm_handler(self) -> Optional[ScmHandler]:
        return self.scm_context.handler

    def version(self, base_version: Optional[str] = None) -> str:
        """Return the annotated version for base_version (configured version by default)."""
        if base_version is None:
            base_version = self.config.version
        return annotate_version(base_version, self.scm_context)

    def version_metadata(self, version: Optional[str] = None) -> VersionMetadata:
        return build_version_metadata(
            self.name,
            version if version is not None else self.version(),
            self.scm_handler,
        )

    def write_version_info(self, path: Path, version: Optional[str] = None) -> Path:
        metadata = self.version_metadata(version)
        logger.debug(f"Writing version info for {self.name} {metadata.version} to {path}")
        return metadata.write(path)

    def distribution_name(self, version: Optional[str] = None) -> str:
        """Top-level directory name inside the packed distribution archives."""
        if version is None:
            version = self.version()
        return f"{self.name}-{version}"
