"""BandRecord: one Bollinger Band value derived from a trailing window."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import numpy as np

from bb_bands.bands.errors import MismatchedLengthError
from bb_bands.bands.window_stats import compute_window


@dataclass(frozen=True)
class BandRecord:
    """Bollinger Band values for a single window.

    Built only through :meth:`from_window`; every field is a plain scalar
    copied out of the source sequences.
    """

    time: int          # Unix epoch of the last sample in the window
    ma: float          # moving average
    sd: float          # sample standard deviation (n - 1 divisor)
    bolu: float        # upper band: ma + m * sd
    bold: float        # lower band: ma - m * sd
    n: int             # samples in the window
    m: float = 2.0     # number of standard deviations

    @classmethod
    def from_window(
        cls,
        prices: Sequence[float],
        times: Sequence[int],
        multiplier: float = 2.0,
        dtype: Any = np.float64,
    ) -> "BandRecord":
        """Build a record from an explicit window slice.

        ``n`` is the length of *prices* and ``time`` is the last entry of
        *times*.

        Raises:
            DegenerateWindowError: If *prices* holds fewer than 2 values.
            MismatchedLengthError: If *prices* and *times* differ in length.
        """
        if len(prices) != len(times):
            raise MismatchedLengthError(len(prices), len(times))

        ma, sd, bolu, bold = compute_window(prices, multiplier=multiplier, dtype=dtype)
        return cls(
            time=int(times[-1]),
            ma=ma,
            sd=sd,
            bolu=bolu,
            bold=bold,
            n=len(prices),
            m=float(multiplier),
        )

    @property
    def width(self) -> float:
        return self.bolu - self.bold

    def to_dict(self) -> dict[str, Any]:
        """Plain dict of the record fields, for printing or JSON."""
        return asdict(self)
