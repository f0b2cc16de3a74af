"""Build Plotly candlestick charts with optional Bollinger Band overlay."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
import plotly.graph_objects as go
import plotly.io as pio

from bb_bands.bands.band_record import BandRecord


class ChartBuilder:
    """Create candlestick figures from candle DataFrames and band records."""

    PLOTLY_CONFIG = {"displayModeBar": True, "responsive": True}
    REQUIRED_COLUMNS = {"time", "open", "high", "low", "close"}

    @classmethod
    def validate(cls, df: pd.DataFrame) -> None:
        """Raise ValueError if *df* cannot be drawn as candlesticks."""
        missing = cls.REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns for chart: {missing}")

    def figure(
        self,
        df: pd.DataFrame,
        records: Optional[Iterable[Optional[BandRecord]]] = None,
        title: str = "BTC-USD Price",
    ) -> go.Figure:
        """Candlestick figure for *df*, with band lines when *records* is given.

        Raises:
            ValueError: If *df* lacks OHLC or time columns.
        """
        self.validate(df)

        fig = go.Figure()
        fig.add_trace(go.Candlestick(
            x=_as_datetimes(df["time"]),
            open=df["open"],
            high=df["high"],
            low=df["low"],
            close=df["close"],
            name="Price",
            increasing_line_color="#22c55e",
            decreasing_line_color="#ef4444",
        ))

        bands = [r for r in (records or []) if r is not None]
        if bands:
            x = _as_datetimes(pd.Series([r.time for r in bands]))
            for label, values, style in (
                ("Upper", [r.bolu for r in bands], dict(color="#6366f1", width=1)),
                ("MA", [r.ma for r in bands], dict(color="#f59e0b", width=1, dash="dot")),
                ("Lower", [r.bold for r in bands], dict(color="#6366f1", width=1)),
            ):
                fig.add_trace(go.Scatter(x=x, y=values, mode="lines", name=label, line=style))

        fig.update_layout(
            title=title,
            xaxis_title="Time (UTC)",
            yaxis_title="Price",
            xaxis_rangeslider_visible=False,
            template="plotly_white",
            height=768,
            width=1024,
            margin=dict(l=40, r=20, t=60, b=40),
        )
        return fig

    def candlestick(
        self,
        df: pd.DataFrame,
        records: Optional[Iterable[Optional[BandRecord]]] = None,
        title: str = "BTC-USD Price",
    ) -> str:
        """Build the candlestick chart. Returns Plotly JSON string."""
        return pio.to_json(self.figure(df, records=records, title=title))

    def save_html(
        self,
        df: pd.DataFrame,
        path: str | Path,
        records: Optional[Iterable[Optional[BandRecord]]] = None,
        title: str = "BTC-USD Price",
    ) -> Path:
        """Write the chart as a standalone HTML file. Returns the path."""
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        fig = self.figure(df, records=records, title=title)
        fig.write_html(str(out), config=self.PLOTLY_CONFIG, include_plotlyjs="cdn")
        return out


def _as_datetimes(times: pd.Series) -> pd.Series:
    if pd.api.types.is_datetime64_any_dtype(times):
        return times
    return pd.to_datetime(times, unit="s", utc=True)
