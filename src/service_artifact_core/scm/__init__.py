"""SCM detection for service artifacts."""

from .base import ScmHandler, ScmKind
from .gerrit import GerritHandler, GerritSettings
from .git import GitHandler, GitRunner, GitSettings
from .selector import (
    DEFAULT_HANDLERS,
    HandlerSelector,
    ScmContext,
    reset_scm_cache,
    resolve_scm_context,
)

__all__ = [
    "DEFAULT_HANDLERS",
    "GerritHandler",
    "GerritSettings",
    "GitHandler",
    "GitRunner",
    "GitSettings",
    "HandlerSelector",
    "ScmContext",
    "ScmHandler",
    "ScmKind",
    "reset_scm_cache",
    "resolve_scm_context",
]
