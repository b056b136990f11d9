"""Pipeline data contracts.

Dataclasses defining the shape of data passed between pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from stockpanel.data.models import MetricSeries

FEATURE_COLUMNS: tuple[str, ...] = (
    "delta_revenue",
    "delta_profit_margin",
    "delta_roa",
    "delta_cash_to_assets",
    "delta_equity_to_assets",
    "revenue_margin_interaction",
)

NUM_LABELS = 4


@dataclass
class MetricBundle:
    """The five wide-CSV metric series, keyed by metric."""

    assets: MetricSeries
    cash: MetricSeries
    equity: MetricSeries
    profit: MetricSeries
    revenue: MetricSeries


@dataclass
class FeatureDataset:
    """Feature matrix and label vector handed to a classifier.

    Row ``k`` of ``features`` and ``labels`` both derive from the record
    identified by ``keys[k]``.
    """

    features: np.ndarray
    labels: np.ndarray
    keys: list[tuple[str, int]] = field(default_factory=list)

    @property
    def n_rows(self) -> int:
        return int(self.features.shape[0])

    def to_frame(self) -> pd.DataFrame:
        """Features and label as one DataFrame indexed by (ticker, year)."""
        index = pd.MultiIndex.from_arrays(
            [[ticker for ticker, _ in self.keys], [year for _, year in self.keys]],
            names=["ticker", "year"],
        )
        df = pd.DataFrame(self.features, columns=list(FEATURE_COLUMNS), index=index)
        df["label"] = self.labels
        return df

    def label_counts(self) -> dict[int, int]:
        """Row count per label class, including empty classes."""
        counts = np.bincount(self.labels, minlength=NUM_LABELS)
        return {label: int(counts[label]) for label in range(NUM_LABELS)}
