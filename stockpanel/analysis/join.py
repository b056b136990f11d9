"""Join the metric series and price changes into per-year records.

The assets series drives the join: a (ticker, year) becomes a record only
if it appears there. Every other input is looked up as an optional value
and collapses to 0.0 when the record is built, with the absent inputs
listed on the record.
"""

from __future__ import annotations

import logging

from stockpanel.data.contracts import MetricBundle
from stockpanel.data.models import Dataset, MetricSeries, PriceChangeTable, StockYearRecord
from stockpanel.data.parsing import safe_ratio

logger = logging.getLogger(__name__)


def _lookup(series: MetricSeries, ticker: str, year: int) -> float | None:
    years = series.get(ticker)
    if years is None:
        return None
    return years.get(year)


def build_record(
    ticker: str,
    year: int,
    assets: float,
    cash: float | None,
    equity: float | None,
    profit: float | None,
    revenue: float | None,
    price_change: float | None,
) -> StockYearRecord:
    """Build one record, defaulting absent inputs and deriving ratios.

    ROA goes through the guarded profit margin so a zero-revenue year has
    zero ROA even when assets are non-zero.
    """
    inputs = {
        "cash": cash,
        "equity": equity,
        "profit": profit,
        "revenue": revenue,
        "price_change": price_change,
    }
    missing = tuple(name for name, value in inputs.items() if value is None)
    values = {name: 0.0 if value is None else value for name, value in inputs.items()}

    profit_margin = safe_ratio(values["profit"], values["revenue"])
    roa = safe_ratio(profit_margin * values["revenue"], assets)

    return StockYearRecord(
        ticker=ticker,
        year=year,
        assets=assets,
        cash=values["cash"],
        equity=values["equity"],
        profit=values["profit"],
        revenue=values["revenue"],
        price_change=values["price_change"],
        profit_margin=profit_margin,
        roa=roa,
        missing=missing,
    )


def join_metrics(metrics: MetricBundle, price_changes: PriceChangeTable) -> Dataset:
    """Merge the metric series and price changes into one record per ticker-year.

    Args:
        metrics: The five loaded metric series.
        price_changes: Annual percent price changes.

    Returns:
        ticker -> records with no deltas set, in assets-file year order
        (not necessarily chronological).
    """
    dataset: Dataset = {}
    n_missing = 0

    for ticker, years in metrics.assets.items():
        records: list[StockYearRecord] = []
        for year, assets in years.items():
            record = build_record(
                ticker,
                year,
                assets,
                cash=_lookup(metrics.cash, ticker, year),
                equity=_lookup(metrics.equity, ticker, year),
                profit=_lookup(metrics.profit, ticker, year),
                revenue=_lookup(metrics.revenue, ticker, year),
                price_change=_lookup(price_changes, ticker, year),
            )
            if record.missing:
                n_missing += 1
                logger.debug(
                    "%s %d: defaulted %s to 0.0",
                    ticker, year, ", ".join(record.missing),
                )
            records.append(record)
        dataset[ticker] = records

    n_records = sum(len(records) for records in dataset.values())
    logger.info(
        "Joined %d records for %d tickers (%d with defaulted inputs)",
        n_records, len(dataset), n_missing,
    )
    return dataset
