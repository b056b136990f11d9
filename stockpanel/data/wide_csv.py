"""Wide metric CSV loading (one row per ticker, one column per year)."""

from __future__ import annotations

import logging
from pathlib import Path

from stockpanel.config import PipelineConfig
from stockpanel.data.models import MetricSeries
from stockpanel.data.parsing import parse_float, read_raw_csv

logger = logging.getLogger(__name__)


def load_metric_series(path: Path | str, config: PipelineConfig) -> MetricSeries:
    """Load one metric file into ticker -> (year -> value).

    Column 0 holds the ticker. Data columns run backwards in time from
    ``config.anchor_year``: the first is the anchor year, the next one
    year earlier, and so on. The header row carries no meaning and is
    skipped. Rows with an empty ticker are skipped; a later row for the
    same ticker replaces an earlier one.

    Args:
        path: Metric CSV path.
        config: Pipeline configuration (anchor year, parse mode).

    Returns:
        Mapping of ticker to its year -> value series.

    Raises:
        OSError: If the file cannot be opened.
        ValueError: On a malformed cell in strict mode.
    """
    frame = read_raw_csv(path)
    series: MetricSeries = {}
    if frame.empty:
        return series

    for row_num, row in enumerate(frame.iloc[1:].itertuples(index=False, name=None), start=2):
        ticker = row[0]
        if not ticker:
            continue
        if ticker in series:
            logger.warning("%s: duplicate ticker %s on row %d", path, ticker, row_num)

        years: dict[int, float] = {}
        for offset, cell in enumerate(row[1:]):
            years[config.anchor_year - offset] = parse_float(
                cell,
                strict=config.strict,
                where=f"{path}: row {row_num}, column {offset + 1}",
            )
        series[ticker] = years

    logger.info("Loaded %d tickers from %s", len(series), path)
    return series
