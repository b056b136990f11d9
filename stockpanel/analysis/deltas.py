"""Year-over-year deltas of revenue, profit margin and ROA."""

from __future__ import annotations

import dataclasses
import logging

from stockpanel.data.models import Dataset, StockYearRecord

logger = logging.getLogger(__name__)


def annotate_deltas(dataset: Dataset) -> Dataset:
    """Sort each ticker's records by year and fill in their deltas.

    The earliest year of each ticker keeps all deltas None; every later
    year gets the difference from the year before it in the sorted
    sequence. Input records are not modified.

    Args:
        dataset: ticker -> records in any year order.

    Returns:
        New dataset with records ascending by year and deltas populated.
    """
    annotated: Dataset = {}
    for ticker, records in dataset.items():
        ordered = sorted(records, key=lambda r: r.year)
        result: list[StockYearRecord] = []
        for i, current in enumerate(ordered):
            if i == 0:
                result.append(
                    dataclasses.replace(
                        current,
                        delta_revenue=None,
                        delta_profit_margin=None,
                        delta_roa=None,
                    )
                )
                continue
            previous = ordered[i - 1]
            result.append(
                dataclasses.replace(
                    current,
                    delta_revenue=current.revenue - previous.revenue,
                    delta_profit_margin=current.profit_margin - previous.profit_margin,
                    delta_roa=current.roa - previous.roa,
                )
            )
        annotated[ticker] = result

    logger.info("Annotated deltas for %d tickers", len(annotated))
    return annotated
