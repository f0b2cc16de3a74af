"""Load candles, compute Bollinger Bands, print them and optionally chart them."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from bb_bands.config import Config
from bb_bands.bands.band_calculator import BandCalculator
from bb_bands.bands.band_record import BandRecord
from bb_bands.bands.errors import BandError
from bb_bands.data.candle_loader import CandleLoader
from bb_bands.reporting.band_table import format_band_table
from bb_bands.reporting.chart_builder import ChartBuilder

logger = logging.getLogger(__name__)


def run_bands(
    data_file: Optional[str | Path] = None,
    config: Optional[Config] = None,
    chart_path: Optional[str | Path] = None,
    show_table: bool = True,
) -> list[Optional[BandRecord]]:
    """Compute bands for the candles in *data_file*.

    Args:
        data_file: Candle CSV/parquet. Defaults to config.DATA_FILE.
        config: Optional Config override.
        chart_path: Where to write the candlestick HTML. Defaults to
            config.CHART_FILE; no chart is written when both are unset.
        show_table: Print the band table to stdout.

    Returns:
        Band records (with ``None`` markers in padded mode).

    Raises:
        FileNotFoundError: If the candle file is missing.
        BandError: If the candles cannot produce a single window.
        ValueError: If a chart is requested and the candles lack OHLC columns.
    """
    cfg = config or Config()
    calculator = BandCalculator.from_config(cfg)
    path = Path(data_file) if data_file else cfg.DATA_FILE

    loader = CandleLoader()
    df = loader.load(path, limit=cfg.row_limit)
    out = Path(chart_path) if chart_path else cfg.CHART_FILE
    if out is not None:
        ChartBuilder.validate(df)
    prices, times = loader.to_samples(df)

    try:
        records = calculator.compute(prices, times)
    except BandError as e:
        logger.error("Band calculation failed for %s: %s", path, e)
        raise

    valid = [r for r in records if r is not None]
    logger.info(
        "%s: %d candles -> %d bands (n=%d, m=%.2f, padded=%s)",
        path.name, len(df), len(valid), calculator.window_size,
        calculator.multiplier, calculator.padded,
    )

    if show_table:
        print(format_band_table(records))

    if out is not None:
        saved = ChartBuilder().save_html(df, out, records=records, title=cfg.CHART_TITLE)
        logger.info("Chart saved to %s", saved)

    return records


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    run_bands()


if __name__ == "__main__":
    main()
