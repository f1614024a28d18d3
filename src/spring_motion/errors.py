"""Structured errors raised by spring construction."""

from __future__ import annotations
from typing import Any


class InvalidParameterError(ValueError):
    """Raised when a spring is built from an out-of-range or inconsistent field.

    ``parameter`` names the offending field (``"strength"``, ``"dampness"`` or
    ``"at_rest"``) and ``value`` holds what the caller passed.
    """

    def __init__(self, message: str, *, parameter: str, value: Any):
        super().__init__(message)
        self.parameter = parameter
        self.value = value
