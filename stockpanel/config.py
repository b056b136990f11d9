"""Pipeline configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# Metric files are always consumed in this order.
METRIC_NAMES: tuple[str, ...] = ("assets", "cash", "equity", "profit", "revenue")


class ParseMode(Enum):
    """How malformed numeric cells are handled."""

    LENIENT = "lenient"
    STRICT = "strict"


@dataclass
class PipelineConfig:
    """Main pipeline configuration."""

    # Input files
    data_dir: Path = Path("data")
    assets_file: str = "data_assets.csv"
    cash_file: str = "data_cash.csv"
    equity_file: str = "data_equity.csv"
    profit_file: str = "data_profit.csv"
    revenue_file: str = "data_revenue.csv"
    price_file: str = "stock_prices.csv"

    # Year of the first data column in the wide metric files; each
    # further column is one year earlier.
    anchor_year: int = 2022

    parse_mode: ParseMode = ParseMode.LENIENT

    @property
    def strict(self) -> bool:
        return self.parse_mode is ParseMode.STRICT

    def metric_paths(self) -> list[Path]:
        """Metric file paths in METRIC_NAMES order."""
        return [
            self.data_dir / self.assets_file,
            self.data_dir / self.cash_file,
            self.data_dir / self.equity_file,
            self.data_dir / self.profit_file,
            self.data_dir / self.revenue_file,
        ]

    def price_path(self) -> Path:
        return self.data_dir / self.price_file


@dataclass
class PriceWindowConfig:
    """Month windows used to average early- and late-year prices."""

    early_month_max: int = 2
    late_month_min: int = 11
