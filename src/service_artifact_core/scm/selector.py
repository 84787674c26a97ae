"""Handler selection with per-run memoization."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple, Type

from ..environment import Environment
from .base import ScmHandler, ScmKind
from .gerrit import GerritHandler
from .git import GitHandler

logger = logging.getLogger(__name__)

# Priority order: review system first, then plain git.
DEFAULT_HANDLERS: Tuple[Type[ScmHandler], ...] = (
    GerritHandler,
    GitHandler,
)


@dataclass(frozen=True)
class ScmContext:
    """Result of handler selection for one run."""
    handler: Optional[ScmHandler] = None

    @property
    def available(self) -> bool:
        return self.handler is not None

    @property
    def kind(self) -> Optional[ScmKind]:
        return self.handler.kind if self.handler is not None else None

    @property
    def revision(self) -> Optional[str]:
        if self.handler is None:
            return None
        try:
            return self.handler.revision
        except Exception as exc:
            logger.warning(f"Reading revision from {self.handler!r} failed: {exc}")
            return None


def _probe(handler_cls: Type[ScmHandler], environment: Environment, priority: int) -> Optional[ScmHandler]:
    try:
        handler = handler_cls.build(environment, priority=priority)
        if handler.is_available():
            return handler
    except Exception as exc:
        logger.warning(f"SCM probe {handler_cls.__name__} failed, treating as unavailable: {exc}")
    return None


class HandlerSelector:
    """
    Lazily picks the first available handler and caches it.

    States: unresolved, then resolved to a handler or to none. Once resolved
    the selector never probes again. The lock makes the first resolution win
    for concurrent callers so external probes run at most once.
    """

    def __init__(
        self,
        environment: Environment,
        handlers: Sequence[Type[ScmHandler]] = DEFAULT_HANDLERS,
        disabled: Iterable[str] = (),
    ):
        self.environment = environment
        skip = {ScmKind(kind) for kind in disabled}
        self.handlers: Tuple[Type[ScmHandler], ...] = tuple(
            h for h in handlers if h.kind not in skip
        )
        self._lock = threading.Lock()
        self._context: Optional[ScmContext] = None

    @property
    def resolved(self) -> bool:
        return self._context is not None

    def resolve(self) -> ScmContext:
        context = self._context
        if context is not None:
            return context
        with self._lock:
            if self._context is None:
                self._context = self._select()
            return self._context

    def _select(self) -> ScmContext:
        for priority, handler_cls in enumerate(self.handlers):
            handler = _probe(handler_cls, self.environment, priority)
            if handler is not None:
                logger.debug(f"Selected SCM handler {handler!r}")
                return ScmContext(handler=handler)
        logger.debug("No SCM handler available")
        return ScmContext()


_selectors: Dict[Tuple[Environment, Tuple[str, ...]], HandlerSelector] = {}
_selectors_lock = threading.Lock()


def resolve_scm_context(environment: Environment, disabled: Iterable[str] = ()) -> ScmContext:
    """
    Resolve the SCM context for environment.

    Returns the same ScmContext for the same environment for the rest of the
    process, until reset_scm_cache() is called.
    """
    key = (environment, tuple(sorted(disabled)))
    with _selectors_lock:
        selector = _selectors.get(key)
        if selector is None:
            selector = HandlerSelector(environment, disabled=key[1])
            _selectors[key] = selector
    return selector.resolve()


def reset_scm_cache() -> None:
    with _selectors_lock:
        _selectors.clear()
