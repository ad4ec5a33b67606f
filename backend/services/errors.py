"""Error taxonomy for the analysis pipeline.

Every failure carries a tier. The HTTP layer only looks at the tier:
BAD_REQUEST becomes a 400, everything else a 500.
"""

from enum import Enum


class ErrorTier(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    INTERNAL = "INTERNAL"


class MatchError(Exception):
    """Base class for all pipeline failures.

    Attributes:
        message: Human-readable description, surfaced to the caller verbatim
        tier: Classification used by the transport layer
    """

    tier: ErrorTier = ErrorTier.INTERNAL

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def is_bad_request(self) -> bool:
        return self.tier is ErrorTier.BAD_REQUEST


class DocumentValidationError(MatchError):
    """Malformed, oversized or unreadable document. User-correctable."""

    tier = ErrorTier.BAD_REQUEST


class ExtractionError(MatchError):
    """The PDF parser could not read structurally valid-looking bytes."""


class AdmissionRejected(MatchError):
    """Local sliding-window rate limit refused the request."""


class ConfigurationError(MatchError):
    """The selected endpoint variant is missing its credential."""


class RemoteRateLimited(MatchError):
    """The model endpoint answered HTTP 429."""


class TransportError(MatchError):
    """Network failure, timeout or non-success HTTP status from the model endpoint."""


class InvalidResponseShape(MatchError):
    """Successful HTTP response without a candidate text part."""


class ParseError(MatchError):
    """No JSON object could be recovered from the model reply."""


class AnalysisFailure(MatchError):
    """The single classified error raised by the orchestrator."""

    def __init__(self, message: str, tier: ErrorTier = ErrorTier.INTERNAL):
        super().__init__(message)
        self.tier = tier

    @classmethod
    def from_error(cls, error: Exception) -> "AnalysisFailure":
        if isinstance(error, AnalysisFailure):
            return error
        if isinstance(error, MatchError):
            return cls(error.message, error.tier)
        return cls(str(error) or "Analysis failed", ErrorTier.INTERNAL)
