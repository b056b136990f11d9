"""Feature matrix and label vector from the delta-annotated dataset."""

from __future__ import annotations

import logging

import numpy as np

from stockpanel.analysis.labels import categorize_price_change
from stockpanel.data.contracts import FEATURE_COLUMNS, FeatureDataset
from stockpanel.data.models import Dataset, StockYearRecord
from stockpanel.data.parsing import safe_ratio

logger = logging.getLogger(__name__)


def _cash_to_assets(record: StockYearRecord) -> float:
    return safe_ratio(record.cash, record.assets)


def _equity_to_assets(record: StockYearRecord) -> float:
    return safe_ratio(record.equity, record.assets)


def feature_row(previous: StockYearRecord, current: StockYearRecord) -> list[float]:
    """Build the six features for one year-over-year transition.

    Revenue, margin and ROA deltas are read from ``current``; the balance
    sheet ratio deltas compare ``current`` against ``previous``.

    Args:
        previous: Record for the year before ``current``.
        current: Record whose deltas are populated.

    Returns:
        [delta_revenue, delta_profit_margin, delta_roa,
         delta_cash_to_assets, delta_equity_to_assets,
         delta_revenue * delta_profit_margin]

    Raises:
        ValueError: If ``current`` has no deltas.
    """
    if not current.has_deltas:
        raise ValueError(f"{current.ticker} {current.year}: deltas not populated")

    delta_revenue = float(current.delta_revenue)  # type: ignore[arg-type]
    delta_profit_margin = float(current.delta_profit_margin)  # type: ignore[arg-type]
    delta_roa = float(current.delta_roa)  # type: ignore[arg-type]

    delta_cash_to_assets = _cash_to_assets(current) - _cash_to_assets(previous)
    delta_equity_to_assets = _equity_to_assets(current) - _equity_to_assets(previous)

    return [
        delta_revenue,
        delta_profit_margin,
        delta_roa,
        delta_cash_to_assets,
        delta_equity_to_assets,
        delta_revenue * delta_profit_margin,
    ]


def build_features(dataset: Dataset) -> FeatureDataset:
    """Emit one feature row and label per eligible record.

    A record is eligible when its predecessor already has deltas, so each
    ticker needs at least three years before its first row. The second
    year of a ticker is never emitted.

    Args:
        dataset: Output of annotate_deltas (records ascending by year).

    Returns:
        FeatureDataset with rows grouped by ticker, ascending by year
        within a ticker.
    """
    rows: list[list[float]] = []
    labels: list[int] = []
    keys: list[tuple[str, int]] = []

    for ticker, records in dataset.items():
        for i in range(1, len(records)):
            previous = records[i - 1]
            current = records[i]
            if i == 1 or not previous.has_deltas:
                continue

            rows.append(feature_row(previous, current))
            labels.append(categorize_price_change(current.price_change))
            keys.append((ticker, current.year))

    features = np.array(rows, dtype=np.float64).reshape(-1, len(FEATURE_COLUMNS))
    result = FeatureDataset(
        features=features,
        labels=np.array(labels, dtype=np.int64),
        keys=keys,
    )
    logger.info(
        "Built %d feature rows from %d tickers", result.n_rows, len(dataset)
    )
    return result
