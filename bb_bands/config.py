"""Configuration for the Bollinger Band calculator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import os

from bb_bands.bands.window_stats import PRECISIONS

load_dotenv()

_ROOT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    return Path(raw) if raw else None


@dataclass
class Config:
    """Central configuration loaded from environment variables."""

    DATA_DIR: Path = field(default_factory=lambda: _ROOT_DATA_DIR)
    DATA_FILE: Path = field(
        default_factory=lambda: _env_path("BB_DATA_FILE") or _ROOT_DATA_DIR / "candles.csv"
    )
    ROW_LIMIT: int = field(default_factory=lambda: int(os.getenv("BB_ROW_LIMIT", "100")))

    WINDOW_SIZE: int = field(default_factory=lambda: int(os.getenv("BB_WINDOW_SIZE", "20")))
    MULTIPLIER: float = field(default_factory=lambda: float(os.getenv("BB_MULTIPLIER", "2.0")))
    PADDED: bool = field(default_factory=lambda: _env_bool("BB_PADDED"))
    PRECISION: str = field(default_factory=lambda: os.getenv("BB_PRECISION", "float64"))

    CHART_FILE: Optional[Path] = field(default_factory=lambda: _env_path("BB_CHART_FILE"))
    CHART_TITLE: str = field(default_factory=lambda: os.getenv("BB_CHART_TITLE", "BTC-USD Price"))

    @property
    def row_limit(self) -> Optional[int]:
        """Return ROW_LIMIT, or None when it is 0 (read every row)."""
        return self.ROW_LIMIT if self.ROW_LIMIT > 0 else None

    def validate(self) -> None:
        """Raise if band parameters are unusable."""
        if self.WINDOW_SIZE < 2:
            raise ValueError(f"BB_WINDOW_SIZE must be at least 2, got {self.WINDOW_SIZE}")
        if self.MULTIPLIER < 0:
            raise ValueError(f"BB_MULTIPLIER must be non-negative, got {self.MULTIPLIER}")
        if self.PRECISION not in PRECISIONS:
            raise ValueError(
                f"BB_PRECISION must be one of {list(PRECISIONS)}, got {self.PRECISION!r}"
            )
