"""Load OHLC candles from CSV or parquet files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"time", "high", "low", "close"}


class CandleLoader:
    """Read candle files and turn them into (typical price, time) samples.

    Usage::

        loader = CandleLoader()
        df = loader.load("data/BTC_minute.csv", limit=100)
        prices, times = loader.to_samples(df)
    """

    def load(self, path: str | Path, limit: Optional[int] = None) -> pd.DataFrame:
        """Load candles sorted as stored, keeping the first *limit* rows.

        ``.parquet`` files are read with pyarrow; anything else is parsed
        as CSV with a header row. Datetime ``time`` values are converted to
        Unix-epoch seconds.

        Raises:
            FileNotFoundError: If *path* does not exist.
            ValueError: If required columns are missing.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No data file at {path}")

        if path.suffix == ".parquet":
            df = pd.read_parquet(path, engine="pyarrow")
        else:
            df = pd.read_csv(path, nrows=limit)

        self._validate(df)
        if limit is not None:
            df = df.head(limit)

        df = df.reset_index(drop=True)
        df["time"] = _to_epoch_seconds(df["time"])
        logger.info("Loaded %d candles from %s", len(df), path)
        return df

    @staticmethod
    def typical_price(df: pd.DataFrame) -> pd.Series:
        """(high + low + close) / 3 for every row."""
        return (df["high"] + df["low"] + df["close"]) / 3.0

    def to_samples(self, df: pd.DataFrame) -> tuple[list[float], list[int]]:
        """Return ``(typical_prices, times)`` as plain lists, oldest first."""
        self._validate(df)
        prices = self.typical_price(df).astype(float).tolist()
        times = [int(t) for t in _to_epoch_seconds(df["time"])]
        return prices, times

    @staticmethod
    def _validate(df: pd.DataFrame) -> None:
        missing = REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {missing}")


def _to_epoch_seconds(times: pd.Series) -> pd.Series:
    if pd.api.types.is_object_dtype(times) or pd.api.types.is_string_dtype(times):
        times = pd.to_datetime(times, utc=True)
    if pd.api.types.is_datetime64_any_dtype(times):
        stamps = times.dt.tz_localize("UTC") if times.dt.tz is None else times
        return (stamps - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(seconds=1)
    return times.astype("int64")
