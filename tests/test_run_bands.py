"""Tests for the run_bands entry point."""

import numpy as np
import pandas as pd
import pytest
from unittest.mock import patch, MagicMock

from bb_bands.bands.band_record import BandRecord
from bb_bands.bands.errors import InsufficientDataError
from bb_bands.config import Config
from bb_bands.run_bands import run_bands


def _write_candles(path, n: int, seed: int = 42) -> None:
    rng = np.random.default_rng(seed)
    close = 23_000 + np.cumsum(rng.normal(0, 15, n))
    pd.DataFrame(
        {
            "time": 1_658_361_600 + 60 * np.arange(n),
            "open": close + rng.normal(0, 5, n),
            "high": close + rng.uniform(2, 20, n),
            "low": close - rng.uniform(2, 20, n),
            "close": close,
            "volume": rng.uniform(0.1, 3.0, n),
        }
    ).to_csv(path, index=False)


@pytest.fixture
def cfg(tmp_path):
    data_file = tmp_path / "candles.csv"
    _write_candles(data_file, 150)
    return Config(
        DATA_DIR=tmp_path,
        DATA_FILE=data_file,
        ROW_LIMIT=100,
        WINDOW_SIZE=20,
        MULTIPLIER=2.0,
        PADDED=False,
        PRECISION="float64",
        CHART_FILE=None,
    )


def test_run_bands_computes_from_limited_rows(cfg, capsys):
    """ROW_LIMIT rows in → ROW_LIMIT - N + 1 records out, table printed."""
    records = run_bands(config=cfg)

    assert len(records) == 100 - 20 + 1
    assert all(isinstance(r, BandRecord) for r in records)
    assert records[-1].time == 1_658_361_600 + 60 * 99
    assert "Upper" in capsys.readouterr().out


def test_run_bands_padded_mode(cfg):
    """PADDED yields one entry per loaded candle."""
    cfg.PADDED = True
    records = run_bands(config=cfg, show_table=False)
    assert len(records) == 100
    assert records[18] is None and records[19] is not None


def test_run_bands_writes_chart(cfg, tmp_path):
    """chart_path produces an HTML chart."""
    out = tmp_path / "out" / "stock.html"
    run_bands(config=cfg, chart_path=out, show_table=False)
    assert out.exists()


@patch("bb_bands.run_bands.ChartBuilder")
def test_run_bands_skips_chart_when_unset(mock_builder_cls, cfg):
    """No chart path configured → ChartBuilder is never used."""
    run_bands(config=cfg, show_table=False)
    mock_builder_cls.assert_not_called()


@patch("bb_bands.run_bands.ChartBuilder")
def test_run_bands_uses_configured_chart_file(mock_builder_cls, cfg, tmp_path):
    """CHART_FILE from config is passed to save_html."""
    mock_builder = MagicMock()
    mock_builder_cls.return_value = mock_builder
    cfg.CHART_FILE = tmp_path / "chart.html"

    records = run_bands(config=cfg, show_table=False)

    mock_builder.save_html.assert_called_once()
    args, kwargs = mock_builder.save_html.call_args
    assert args[1] == tmp_path / "chart.html"
    assert kwargs["records"] is records
    assert kwargs["title"] == cfg.CHART_TITLE


def test_run_bands_short_file_raises(cfg, tmp_path):
    """Too few candles surfaces InsufficientDataError to the caller."""
    short = tmp_path / "short.csv"
    _write_candles(short, 10)
    with pytest.raises(InsufficientDataError):
        run_bands(data_file=short, config=cfg, show_table=False)


def test_run_bands_missing_file_raises(cfg, tmp_path):
    """A missing candle file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        run_bands(data_file=tmp_path / "missing.csv", config=cfg)


def test_run_bands_chart_without_open_column_fails_before_computing(cfg, tmp_path):
    """A chart request on candles without `open` fails up front and writes nothing."""
    no_open = tmp_path / "no_open.csv"
    _write_candles(no_open, 30)
    pd.read_csv(no_open).drop(columns=["open"]).to_csv(no_open, index=False)
    cfg.CHART_FILE = tmp_path / "o.html"

    with patch("bb_bands.run_bands.BandCalculator.compute") as mock_compute:
        with pytest.raises(ValueError, match="Missing required columns for chart"):
            run_bands(data_file=no_open, config=cfg, show_table=False)
        mock_compute.assert_not_called()
    assert not (tmp_path / "o.html").exists()


def test_run_bands_without_open_column_and_no_chart(cfg, tmp_path):
    """Without a chart request, candles lacking `open` still produce bands."""
    no_open = tmp_path / "no_open.csv"
    _write_candles(no_open, 30)
    pd.read_csv(no_open).drop(columns=["open"]).to_csv(no_open, index=False)

    records = run_bands(data_file=no_open, config=cfg, show_table=False)

    assert len(records) == 30 - 20 + 1
