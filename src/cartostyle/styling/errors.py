"""Errors raised by the styling engine.

Every error carries a ``context`` dict with the attribute, sample size,
method or ramp involved so callers can build a user-facing message without
re-deriving it.
"""

from __future__ import annotations

from typing import Any


class StylingError(ValueError):
    """Base class for styling engine failures."""

    code = "styling_error"

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = {key: value for key, value in context.items() if value is not None}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, **self.context}


class InvalidInputError(StylingError):
    """Empty sample, no finite values, or an out-of-range parameter."""

    code = "invalid_input"


class UnknownRampError(StylingError):
    """The requested colour ramp is not in the ramp table."""

    code = "unknown_ramp"


class NoNumericDataError(StylingError):
    """The requested attribute has no finite numeric values in the sample."""

    code = "no_numeric_data"
