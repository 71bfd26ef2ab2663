"""core.exceptions

Centralised exception hierarchy for *gpt_bridge*.

Each error carries an `error_kind` tag so that the dispatcher can turn a
caught exception into a classified `Failure` without scattering
classification logic throughout business code.
"""

from __future__ import annotations

from typing import ClassVar

# ---------------------------------------------------------------------------
# Base class with error classification
# ---------------------------------------------------------------------------


class GPTBridgeError(Exception):
    """Base class for all *gpt_bridge* domain errors."""

    #: Classification reported to callers; overridden by subclasses.
    error_kind: ClassVar[str] = 'InternalError'

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.__class__.__name__)


# ---------------------------------------------------------------------------
# Concrete error classes
# ---------------------------------------------------------------------------


class ParameterValidationError(GPTBridgeError):
    """Caller arguments violate the tool input schema."""

    error_kind: ClassVar[str] = 'ValidationError'

    def __init__(self, message: str | None = None, *, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class UpstreamError(GPTBridgeError):
    """Network failure, non-success status or malformed upstream payload."""

    error_kind: ClassVar[str] = 'UpstreamError'


class ConfigurationError(GPTBridgeError):
    """Raised at startup when required configuration is missing. Fatal."""

    error_kind: ClassVar[str] = 'ConfigurationError'
