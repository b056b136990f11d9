"""Data loading orchestration."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from stockpanel.config import METRIC_NAMES, PipelineConfig
from stockpanel.data.contracts import MetricBundle
from stockpanel.data.models import Dataset, StockYearRecord
from stockpanel.data.prices import calculate_price_changes
from stockpanel.data.wide_csv import load_metric_series

logger = logging.getLogger(__name__)

__all__ = [
    "Dataset",
    "MetricBundle",
    "StockYearRecord",
    "calculate_price_changes",
    "load_metric_series",
    "load_metrics",
]


def load_metrics(
    metric_paths: Sequence[Path | str],
    config: PipelineConfig,
) -> MetricBundle:
    """Load the five metric files.

    Args:
        metric_paths: Paths in METRIC_NAMES order (assets, cash, equity,
            profit, revenue).
        config: Pipeline configuration.

    Returns:
        MetricBundle with one series per metric.

    Raises:
        ValueError: If not exactly five paths are given.
        OSError: If any file cannot be opened.
    """
    if len(metric_paths) != len(METRIC_NAMES):
        raise ValueError(
            f"Expected {len(METRIC_NAMES)} metric files "
            f"({', '.join(METRIC_NAMES)}), got {len(metric_paths)}"
        )

    loaded = {
        name: load_metric_series(path, config)
        for name, path in zip(METRIC_NAMES, metric_paths)
    }
    return MetricBundle(**loaded)
