"""Mean / sample standard deviation of a single price window."""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from bb_bands.bands.errors import DegenerateWindowError

PRECISIONS: dict[str, Any] = {"float32": np.float32, "float64": np.float64}


def resolve_dtype(dtype: Any) -> Any:
    """Map ``"float32"``/``"float64"`` (or the numpy types) to a numpy float type."""
    if isinstance(dtype, str):
        try:
            return PRECISIONS[dtype]
        except KeyError:
            raise ValueError(
                f"Unsupported precision {dtype!r}. Available: {list(PRECISIONS)}"
            ) from None
    resolved = np.dtype(dtype).type
    if resolved not in (np.float32, np.float64):
        raise ValueError(f"Unsupported precision {dtype!r}. Available: {list(PRECISIONS)}")
    return resolved


def compute_window(
    window: Sequence[float],
    multiplier: float = 2.0,
    dtype: Any = np.float64,
) -> tuple[float, float, float, float]:
    """Return ``(mean, sd, bolu, bold)`` for one window.

    Two-pass mean then Bessel-corrected variance,
    ``sum((x - mean)^2) / (len(window) - 1)``, evaluated in *dtype*.

    float32 rounds the inputs themselves, so its ``sd`` drifts from the
    float64 value as the price level grows relative to the spread: around
    1e-6 relative at prices near 100, a few 1e-5 at BTC-scale prices
    (~23000) with minute-bar volatility. Use float64 there.

    Raises:
        DegenerateWindowError: If *window* has fewer than 2 values.
    """
    ftype = resolve_dtype(dtype)
    arr = np.asarray(window, dtype=ftype)
    size = arr.size
    if size < 2:
        raise DegenerateWindowError(size)

    mean = arr.sum(dtype=ftype) / ftype(size)
    dev = arr - mean
    variance = (dev * dev).sum(dtype=ftype) / ftype(size - 1)
    sd = math.sqrt(float(variance))

    mean = float(mean)
    m = float(multiplier)
    return mean, sd, mean + m * sd, mean - m * sd


def band_values(
    window: Sequence[float],
    multiplier: float = 2.0,
    with_mean: bool = False,
    dtype: Any = np.float64,
) -> tuple[float, ...]:
    """Compact band tuple: ``(bolu, bold)``, or ``(ma, bolu, bold)`` with *with_mean*."""
    ma, _, bolu, bold = compute_window(window, multiplier=multiplier, dtype=dtype)
    if with_mean:
        return ma, bolu, bold
    return bolu, bold
