"""Annual price change from a price-history CSV.

The price file has one row per observation date and one column per ticker:

    <unused>, date, AAA, BBB, ...
    0, 2021-01-04, 10.5, 33.0, ...

For each ticker and calendar year the early-year prices (January and
February by default) and late-year prices (November and December) are
averaged, and the percent change from the early average to the late
average is the year's price change.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from stockpanel.config import PipelineConfig, PriceWindowConfig
from stockpanel.data.models import PriceChangeTable
from stockpanel.data.parsing import parse_float, parse_int, read_raw_csv

logger = logging.getLogger(__name__)

OBSERVATION_COLUMNS = ["ticker", "year", "month", "price"]

# Only "YYYY-MM" is consulted.
_MIN_DATE_LENGTH = 7


def load_price_observations(path: Path | str, config: PipelineConfig) -> pd.DataFrame:
    """Read the price file into long-form observations.

    Args:
        path: Price-history CSV path.
        config: Pipeline configuration (parse mode).

    Returns:
        DataFrame with columns ticker, year, month, price; one row per
        (date row, ticker column). Rows whose date is shorter than
        ``YYYY-MM`` are skipped.

    Raises:
        OSError: If the file cannot be opened.
        ValueError: On a malformed date or price in strict mode.
    """
    frame = read_raw_csv(path)
    if frame.empty or frame.shape[1] < 3:
        logger.warning("%s: no ticker columns", path)
        return pd.DataFrame(columns=OBSERVATION_COLUMNS)

    tickers = [str(name) for name in frame.iloc[0, 2:]]
    records: list[tuple[str, int, int, float]] = []
    skipped = 0

    for row_num, row in enumerate(frame.iloc[1:].itertuples(index=False, name=None), start=2):
        date = row[1]
        if len(date) < _MIN_DATE_LENGTH:
            skipped += 1
            continue

        where = f"{path}: row {row_num}"
        year = parse_int(date[:4], strict=config.strict, where=f"{where}, year")
        month = parse_int(date[5:7], strict=config.strict, where=f"{where}, month")

        for col, ticker in enumerate(tickers, start=2):
            price = parse_float(
                row[col], strict=config.strict, where=f"{where}, column {col}"
            )
            records.append((ticker, year, month, price))

    if skipped:
        logger.debug("%s: skipped %d rows with short dates", path, skipped)

    observations = pd.DataFrame.from_records(records, columns=OBSERVATION_COLUMNS)
    logger.info(
        "Loaded %d price observations for %d tickers from %s",
        len(observations), len(tickers), path,
    )
    return observations


def compute_price_changes(
    observations: pd.DataFrame,
    window: PriceWindowConfig | None = None,
) -> PriceChangeTable:
    """Compute the early-to-late percent price change per ticker and year.

    A (ticker, year) gets an entry only when both windows hold at least one
    observation. A zero early average gives an infinite (or NaN) change and
    a NaN price makes its window average NaN. Months between the two
    windows are ignored.

    Args:
        observations: Output of load_price_observations.
        window: Month windows (defaults to PriceWindowConfig()).

    Returns:
        ticker -> (year -> percent change). Every ticker in the observations
        is present, possibly with no years.
    """
    if window is None:
        window = PriceWindowConfig()

    changes: PriceChangeTable = {
        str(ticker): {} for ticker in observations["ticker"].unique()
    }
    if observations.empty:
        return changes

    bucket = np.select(
        [
            observations["month"] <= window.early_month_max,
            observations["month"] >= window.late_month_min,
        ],
        ["early", "late"],
        default="",
    )
    windowed = observations.assign(bucket=bucket)
    windowed = windowed[windowed["bucket"] != ""]
    if windowed.empty:
        return changes

    grouped = windowed.groupby(["ticker", "year", "bucket"], sort=False)["price"]
    # NaN prices propagate into the average rather than being skipped.
    means = grouped.agg(lambda prices: prices.mean(skipna=False))
    averages = means.unstack("bucket").reindex(columns=["early", "late"])
    present = (
        grouped.size()
        .unstack("bucket")
        .reindex(columns=["early", "late"])
        .notna()
        .all(axis=1)
    )
    averages = averages[present]

    # A zero early average yields +/-inf (or NaN), classed like any other value.
    with np.errstate(divide="ignore", invalid="ignore"):
        pct = (averages["late"] - averages["early"]) / averages["early"] * 100.0
    for (ticker, year), value in pct.items():
        changes[str(ticker)][int(year)] = float(value)

    logger.info(
        "Computed %d price changes across %d tickers",
        len(pct), len(changes),
    )
    return changes


def calculate_price_changes(
    path: Path | str,
    config: PipelineConfig,
    window: PriceWindowConfig | None = None,
) -> PriceChangeTable:
    """Load a price-history file and compute annual price changes."""
    return compute_price_changes(load_price_observations(path, config), window)
