"""Shared exception hierarchy for sdtw_barycenter.

All exceptions inherit from ``BarycenterError`` which carries:

- ``error_code``: a machine-readable uppercase string (e.g. ``"SHAPE_MISMATCH"``)
- ``context``: an optional dict of structured metadata for diagnostics
"""

from __future__ import annotations

from typing import Any


class BarycenterError(RuntimeError):
    """Base class for all sdtw_barycenter exceptions.

    Parameters
    ----------
    message:
        Human-readable error description.
    error_code:
        Machine-readable code such as ``"INVALID_SMOOTHING"``.
        Defaults to ``"BARYCENTER_ERROR"``.
    context:
        Optional dict of structured metadata (series index, shapes, etc.)
        that will be included in log records.
    """

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str = "BARYCENTER_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error_code: str = error_code
        self.context: dict[str, Any] = context or {}


class ValidationError(BarycenterError):
    """Raised when caller input fails validation rules."""

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str = "VALIDATION_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, context=context)


class InvalidSmoothingError(ValidationError):
    """Raised when gamma is not a finite value strictly greater than zero."""

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str = "INVALID_SMOOTHING",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, context=context)


class ShapeMismatchError(ValidationError):
    """Raised when sequences, weights or scratch buffers disagree in shape.

    Always raised before any scratch buffer is written.
    """

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str = "SHAPE_MISMATCH",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, context=context)


class NumericOverflowError(BarycenterError):
    """Raised when finite checking is enabled and a result is NaN or infinite."""

    def __init__(
        self,
        message: str = "",
        *,
        error_code: str = "NUMERIC_OVERFLOW",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code=error_code, context=context)
