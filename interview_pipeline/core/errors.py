"""
Error taxonomy for the interview pipeline.

Every error carries the originating component, the provider identifier and
the underlying status so callers can decide between retrying, surfacing the
error, or marking the result as degraded.
"""

from enum import Enum
from typing import Any


class InputErrorReason(str, Enum):
    """Why media input was rejected."""

    EMPTY = "empty"
    TOO_LARGE = "too_large"
    UNSUPPORTED_FORMAT = "unsupported_format"
    MALFORMED = "malformed"


class ProviderErrorReason(str, Enum):
    """Why a remote provider call failed."""

    FAILED = "failed"
    TIMEOUT = "timeout"
    AUTH_INVALID = "auth_invalid"
    QUOTA_EXCEEDED = "quota_exceeded"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    UNSUPPORTED_FORMAT = "unsupported_format"


class PipelineError(Exception):
    """Base class for all pipeline errors."""

    def __init__(
        self,
        message: str,
        component: str | None = None,
        provider: str | None = None,
        status: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.component = component
        self.provider = provider
        self.status = status

    @property
    def kind(self) -> str:
        """Taxonomy name of the error."""
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        """Context for logging and for the caller's retry decision."""
        return {
            "error": self.kind,
            "message": self.message,
            "component": self.component,
            "provider": self.provider,
            "status": self.status,
        }

    def __str__(self) -> str:
        origin = "/".join(part for part in (self.component, self.provider) if part)
        return f"[{origin}] {self.message}" if origin else self.message


class InputError(PipelineError):
    """Empty, oversized, malformed or unsupported media."""

    def __init__(self, message: str, reason: InputErrorReason, **context: Any):
        super().__init__(message, **context)
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason.value
        return data


class ProviderUnavailable(PipelineError):
    """Provider is missing credentials or configuration."""


class ProviderError(PipelineError):
    """Remote call failed, timed out, was rejected or exceeded quota."""

    def __init__(
        self,
        message: str,
        reason: ProviderErrorReason = ProviderErrorReason.FAILED,
        **context: Any,
    ):
        super().__init__(message, **context)
        self.reason = reason

    @property
    def retryable(self) -> bool:
        """Whether retrying the same call could succeed."""
        return self.reason in (
            ProviderErrorReason.FAILED,
            ProviderErrorReason.TIMEOUT,
            ProviderErrorReason.QUOTA_EXCEEDED,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["reason"] = self.reason.value
        data["retryable"] = self.retryable
        return data


class ParseError(PipelineError):
    """Provider output is not in the expected structured shape."""

    def __init__(self, message: str, raw_output: str = "", **context: Any):
        super().__init__(message, **context)
        self.raw_output = raw_output


class AggregationInProgressError(PipelineError):
    """An assessment for the same interview is already being generated."""
