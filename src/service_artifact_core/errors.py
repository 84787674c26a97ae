"""Error types for service artifact resolution."""


class ServiceArtifactError(Exception):
    """Base class for errors surfaced to callers."""


class ConfigError(ServiceArtifactError):
    """Raised when the service artifact configuration cannot be loaded."""

    def __init__(self, message: str, path=None):
        self.path = path
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)


class ProbeFailure(Exception):
    """
    Raised inside handlers when an SCM probe fails.

    Never escapes a handler; callers see an unavailable handler or an
    absent revision instead.
    """
