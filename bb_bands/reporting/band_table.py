"""Render band records as a printable table."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from tabulate import tabulate

from bb_bands.bands.band_record import BandRecord

HEADERS = ["Time (UTC)", "MA", "SD", "Upper", "Lower", "n", "m"]


def format_band_table(
    records: Iterable[Optional[BandRecord]],
    tablefmt: str = "grid",
    floatfmt: str = ".4f",
) -> str:
    """Tabulate *records*, skipping ``None`` padding markers."""
    rows = [
        [
            datetime.fromtimestamp(r.time, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            r.ma,
            r.sd,
            r.bolu,
            r.bold,
            r.n,
            r.m,
        ]
        for r in records
        if r is not None
    ]
    return tabulate(rows, headers=HEADERS, tablefmt=tablefmt, floatfmt=floatfmt)
