"""SCM detection and version derivation for service artifacts."""

from .artifact import ServiceArtifact
from .config import ServiceArtifactConfig, load_config
from .environment import Environment
from .errors import ConfigError, ServiceArtifactError
from .scm import ScmContext, ScmHandler, ScmKind, reset_scm_cache, resolve_scm_context
from .version import VersionMetadata, annotate_version, build_version_metadata

__all__ = [
    "ConfigError",
    "Environment",
    "ScmContext",
    "ScmHandler",
    "ScmKind",
    "ServiceArtifact",
    "ServiceArtifactConfig",
    "ServiceArtifactError",
    "VersionMetadata",
    "annotate_version",
    "build_version_metadata",
    "load_config",
    "reset_scm_cache",
    "resolve_scm_context",
]
