"""Rolling Bollinger Band calculation over typical-price series."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, Optional, Sequence

import numpy as np
import pandas as pd

from bb_bands.bands.band_record import BandRecord
from bb_bands.bands.errors import (
    DegenerateWindowError,
    InsufficientDataError,
    MismatchedLengthError,
)
from bb_bands.bands.window_stats import band_values, compute_window, resolve_dtype

if TYPE_CHECKING:
    from bb_bands.config import Config

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 20
DEFAULT_MULTIPLIER = 2.0

__all__ = [
    "BandCalculator",
    "band_values",
    "compute_window",
    "rolling_bands",
    "semi_rolling_bands",
]


def _check_window(window_size: int, multiplier: float) -> None:
    if isinstance(window_size, bool) or not isinstance(window_size, (int, np.integer)):
        raise ValueError(f"window_size must be an integer, got {window_size!r}")
    if window_size < 2:
        raise DegenerateWindowError(int(window_size))
    if multiplier < 0:
        raise ValueError(f"multiplier must be non-negative, got {multiplier}")


def _check_params(length: int, window_size: int, multiplier: float) -> None:
    _check_window(window_size, multiplier)
    if length < window_size:
        raise InsufficientDataError(required=int(window_size), actual=length)


def _window_bounds(length: int, window_size: int) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` slice bounds of each full trailing window.

    ``end`` is exclusive, so ``prices[start:end]`` holds exactly
    *window_size* samples ending at index ``end - 1``.
    """
    for end in range(window_size, length + 1):
        yield end - window_size, end


def rolling_bands(
    prices: Sequence[float],
    times: Sequence[int],
    window_size: int = DEFAULT_WINDOW_SIZE,
    multiplier: float = DEFAULT_MULTIPLIER,
    padded: bool = False,
    dtype: Any = np.float64,
) -> list[Optional[BandRecord]]:
    """Compute a BandRecord for every full trailing window of *prices*.

    Args:
        prices: Typical prices, oldest first.
        times: Unix-epoch timestamps aligned with *prices*.
        window_size: Samples per window (inclusive of both ends).
        multiplier: Standard deviations between the average and each band.
        padded: Prepend ``window_size - 1`` ``None`` markers so the result
            lines up index-for-index with *prices*.
        dtype: ``"float32"``/``"float64"`` or the numpy type.

    Returns:
        ``len(prices) - window_size + 1`` records, or ``len(prices)`` entries
        when *padded*.

    Raises:
        MismatchedLengthError: If *prices* and *times* differ in length.
        DegenerateWindowError: If *window_size* < 2.
        InsufficientDataError: If fewer than *window_size* prices are given.
    """
    if len(prices) != len(times):
        raise MismatchedLengthError(len(prices), len(times))
    _check_params(len(prices), window_size, multiplier)
    ftype = resolve_dtype(dtype)
    values = np.asarray(prices, dtype=ftype)
    stamps = [int(t) for t in times]

    bands: list[Optional[BandRecord]] = [None] * (window_size - 1) if padded else []
    for start, end in _window_bounds(len(values), window_size):
        bands.append(
            BandRecord.from_window(
                values[start:end], stamps[start:end], multiplier=multiplier, dtype=ftype
            )
        )
    return bands


def semi_rolling_bands(
    prices: Sequence[float],
    window_size: int = DEFAULT_WINDOW_SIZE,
    multiplier: float = DEFAULT_MULTIPLIER,
    padded: bool = True,
    with_mean: bool = False,
    dtype: Any = np.float64,
) -> list[Optional[tuple[float, ...]]]:
    """Rolling bands as plain tuples, without timestamps.

    Each entry is ``(bolu, bold)``, or ``(ma, bolu, bold)`` with
    *with_mean*. Window alignment and padding follow :func:`rolling_bands`.

    Raises:
        DegenerateWindowError: If *window_size* < 2.
        InsufficientDataError: If fewer than *window_size* prices are given.
    """
    _check_params(len(prices), window_size, multiplier)
    ftype = resolve_dtype(dtype)
    values = np.asarray(prices, dtype=ftype)

    bands: list[Optional[tuple[float, ...]]] = [None] * (window_size - 1) if padded else []
    for start, end in _window_bounds(len(values), window_size):
        bands.append(
            band_values(values[start:end], multiplier=multiplier, with_mean=with_mean, dtype=ftype)
        )
    return bands


class BandCalculator:
    """Bollinger Bands with a fixed window, multiplier and output shape.

    Usage::

        calc = BandCalculator(window_size=20, multiplier=2.0)
        records = calc.compute(prices, times)
        enriched = calc.calculate(df)
    """

    # Columns added by calculate()
    BAND_COLUMNS = ["tp", "bb_middle", "bb_sd", "bb_upper", "bb_lower"]

    def __init__(
        self,
        window_size: int = DEFAULT_WINDOW_SIZE,
        multiplier: float = DEFAULT_MULTIPLIER,
        padded: bool = False,
        dtype: Any = "float64",
    ) -> None:
        _check_window(window_size, multiplier)
        self.window_size = int(window_size)
        self.multiplier = multiplier
        self.padded = padded
        self.dtype = resolve_dtype(dtype)

    @classmethod
    def from_config(cls, config: "Config") -> "BandCalculator":
        config.validate()
        return cls(
            window_size=config.WINDOW_SIZE,
            multiplier=config.MULTIPLIER,
            padded=config.PADDED,
            dtype=config.PRECISION,
        )

    def compute(
        self, prices: Sequence[float], times: Sequence[int]
    ) -> list[Optional[BandRecord]]:
        """Band records for *prices*/*times*. See :func:`rolling_bands`."""
        bands = rolling_bands(
            prices,
            times,
            window_size=self.window_size,
            multiplier=self.multiplier,
            padded=self.padded,
            dtype=self.dtype,
        )
        logger.debug(
            "Computed %d band entries from %d samples (n=%d, m=%.2f)",
            len(bands), len(prices), self.window_size, self.multiplier,
        )
        return bands

    def compute_tuples(
        self, prices: Sequence[float], with_mean: bool = False
    ) -> list[Optional[tuple[float, ...]]]:
        """Band tuples for *prices*. See :func:`semi_rolling_bands`."""
        return semi_rolling_bands(
            prices,
            window_size=self.window_size,
            multiplier=self.multiplier,
            padded=self.padded,
            with_mean=with_mean,
            dtype=self.dtype,
        )

    def calculate(self, df: pd.DataFrame) -> pd.DataFrame:
        """Add band columns to an OHLC *df* (copy returned).

        Rows before the first full window hold NaN.

        Raises:
            ValueError: If required columns are missing.
            InsufficientDataError: If *df* is shorter than the window.
        """
        self._validate(df)
        if len(df) < self.window_size:
            raise InsufficientDataError(required=self.window_size, actual=len(df))
        df = df.copy()

        df["tp"] = ((df["high"] + df["low"] + df["close"]) / 3.0).astype(self.dtype)
        rolling = df["tp"].rolling(window=self.window_size)
        df["bb_middle"] = rolling.mean()
        df["bb_sd"] = rolling.std(ddof=1)

        df["bb_upper"] = df["bb_middle"] + self.multiplier * df["bb_sd"]
        df["bb_lower"] = df["bb_middle"] - self.multiplier * df["bb_sd"]

        return df

    @staticmethod
    def _validate(df: pd.DataFrame) -> None:
        required = {"high", "low", "close"}
        missing = required - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {missing}")
