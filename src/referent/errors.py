"""Error taxonomy shared by the extraction and transformation pipeline."""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "NetworkError",
    "NoContentError",
    "PipelineError",
    "UpstreamFormatError",
    "UpstreamHttpError",
    "UpstreamTimeout",
    "ValidationError",
    "classify_status",
]


class PipelineError(Exception):
    """Base class for every failure surfaced to pipeline callers.

    Each error carries a stable ``code`` for machine consumption, a
    human-readable ``message`` and, where an upstream service answered, the
    upstream ``status_code``. ``http_status`` is the status the HTTP layer
    should answer with.
    """

    code = "PIPELINE_ERROR"
    http_status = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class ValidationError(PipelineError):
    """The request itself is malformed (empty content, unknown action, ...)."""

    code = "VALIDATION_ERROR"
    http_status = 400


class NoContentError(ValidationError):
    """Extraction produced no usable article body."""

    code = "NO_CONTENT"
    http_status = 422


class ConfigurationError(PipelineError):
    """The service is missing configuration it needs, e.g. the API credential."""

    code = "CONFIGURATION_ERROR"
    http_status = 500


class NetworkError(PipelineError):
    """The remote host could not be reached."""

    code = "NETWORK_ERROR"
    http_status = 502


class UpstreamTimeout(PipelineError):
    """A remote call did not answer within its timeout budget."""

    code = "TIMEOUT"
    http_status = 504


class UpstreamHttpError(PipelineError):
    """A remote service answered with a non-success status."""

    code = "LOAD_ERROR"

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message, status_code=status_code)
        if code is not None:
            self.code = code

    @property
    def http_status(self) -> int:  # type: ignore[override]
        if self.status_code and 400 <= self.status_code < 600:
            return self.status_code
        return 502

    @classmethod
    def from_status(cls, status_code: int, message: str) -> "UpstreamHttpError":
        """Classify ``status_code`` into ``NOT_FOUND``, ``SERVER_ERROR`` or ``LOAD_ERROR``."""

        return cls(message, status_code=status_code, code=classify_status(status_code))


def classify_status(status_code: int) -> str:
    """Map a non-success HTTP status onto a user-facing error code."""

    if status_code == 404:
        return "NOT_FOUND"
    if status_code >= 500:
        return "SERVER_ERROR"
    return "LOAD_ERROR"


class UpstreamFormatError(PipelineError):
    """A remote service answered successfully but with an unusable payload."""

    code = "NO_RESULT"
    http_status = 502
