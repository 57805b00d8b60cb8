"""Typed failures raised by the statistical tests.

Every error is detected by upfront validation, before any statistic is
computed. They derive from :class:`ValueError` so callers treating bad input
generically keep working.
"""

from typing import Any


class NistTestError(ValueError):
    """Base error for a test that refused to run on the given input."""

    def __init__(
        self,
        message: str,
        *,
        test_name: str | None = None,
        observed: Any = None,
        expected: Any = None,
    ) -> None:
        super().__init__(f'{test_name}: {message}' if test_name else message)
        self.test_name = test_name
        self.observed = observed
        self.expected = expected


class InvalidInputError(NistTestError):
    """Raised when the sequence is empty or contains symbols other than '0' and '1'."""


class UnsupportedLengthError(NistTestError):
    """Raised when the sequence is shorter than the absolute floor of a test."""


class InvalidParameterError(NistTestError):
    """Raised when a caller supplied parameter (template length, block count) is out of range."""


__all__ = [
    'InvalidInputError',
    'InvalidParameterError',
    'NistTestError',
    'UnsupportedLengthError',
]
