"""Errors raised by the band calculator.

All of them are ``ValueError`` subclasses so callers that already guard
indicator calls with ``except ValueError`` keep working.
"""

from __future__ import annotations


class BandError(ValueError):
    """Base class for band calculation failures."""


class MismatchedLengthError(BandError):
    """Price and timestamp sequences differ in length."""

    def __init__(self, prices_len: int, times_len: int) -> None:
        self.prices_len = prices_len
        self.times_len = times_len
        super().__init__(
            f"prices and times must have the same length "
            f"(got {prices_len} prices, {times_len} times)"
        )


class InsufficientDataError(BandError):
    """Input is shorter than the configured window."""

    def __init__(self, required: int, actual: int) -> None:
        self.required = required
        self.actual = actual
        super().__init__(
            f"Not enough data: need at least {required} samples, got {actual}"
        )


class DegenerateWindowError(BandError):
    """Window too small for a sample standard deviation (n - 1 <= 0)."""

    def __init__(self, size: int) -> None:
        self.size = size
        super().__init__(
            f"Window of {size} sample(s) is degenerate: sample variance needs at least 2"
        )
