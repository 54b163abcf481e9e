"""
errors.py — The library's single error type

Every violated precondition (non-finite amount, negative rate, non-integer
term, unknown currency, division by zero, empty list) raises MonieError.
There is only one type: cases are told apart by their message.

MonieError extends ValueError, so callers that already catch ValueError
keep working.
"""

from __future__ import annotations


class MonieError(ValueError):
    """Invalid input to a money operation."""

    code: str = "MONIE_UTILS_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"MonieError({self.message!r})"
