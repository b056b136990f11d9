"""Pipeline orchestrator.

Executes load -> join -> deltas -> features from input files to a
FeatureDataset.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from stockpanel.analysis.deltas import annotate_deltas
from stockpanel.analysis.features import build_features
from stockpanel.analysis.join import join_metrics
from stockpanel.config import PipelineConfig, PriceWindowConfig
from stockpanel.data import calculate_price_changes, load_metrics
from stockpanel.data.contracts import FeatureDataset
from stockpanel.data.models import Dataset

logger = logging.getLogger(__name__)


def build_panel(
    metric_paths: Sequence[Path | str],
    price_path: Path | str,
    config: PipelineConfig | None = None,
    window: PriceWindowConfig | None = None,
) -> Dataset:
    """Load all inputs and return the delta-annotated per-ticker panel.

    Every file is read in full before any derived value is computed.

    Args:
        metric_paths: Assets, cash, equity, profit and revenue files, in
            that order.
        price_path: Price-history file.
        config: Pipeline configuration (defaults to PipelineConfig()).
        window: Price month windows (defaults to PriceWindowConfig()).

    Returns:
        ticker -> records ascending by year with deltas populated.

    Raises:
        ValueError: If not exactly five metric paths are given, or on a
            malformed cell in strict mode.
        OSError: If any input file cannot be opened.
    """
    if config is None:
        config = PipelineConfig()

    metrics = load_metrics(metric_paths, config)
    price_changes = calculate_price_changes(price_path, config, window)

    joined = join_metrics(metrics, price_changes)
    return annotate_deltas(joined)


def build_feature_dataset(
    metric_paths: Sequence[Path | str],
    price_path: Path | str,
    config: PipelineConfig | None = None,
    window: PriceWindowConfig | None = None,
) -> FeatureDataset:
    """Run the full pipeline from input files to features and labels.

    Args:
        metric_paths: Assets, cash, equity, profit and revenue files, in
            that order.
        price_path: Price-history file.
        config: Pipeline configuration (defaults to PipelineConfig()).
        window: Price month windows (defaults to PriceWindowConfig()).

    Returns:
        FeatureDataset ready for a classifier.
    """
    panel = build_panel(metric_paths, price_path, config, window)
    dataset = build_features(panel)
    logger.info(
        "Feature dataset: %d rows, label counts %s",
        dataset.n_rows, dataset.label_counts(),
    )
    return dataset


def run_pipeline(config: PipelineConfig) -> FeatureDataset:
    """Run the pipeline over the files named in ``config``."""
    logger.info("Reading inputs from %s", config.data_dir)
    return build_feature_dataset(config.metric_paths(), config.price_path(), config)
