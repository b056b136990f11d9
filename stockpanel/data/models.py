"""Data models for the pipeline."""

from __future__ import annotations

from dataclasses import dataclass

# ticker -> (year -> value)
MetricSeries = dict[str, dict[int, float]]

# ticker -> (year -> percent change); absent entries mean no computable change
PriceChangeTable = dict[str, dict[int, float]]


@dataclass
class StockYearRecord:
    """One fiscal year of fundamentals for one ticker.

    Attributes:
        ticker: Stock ticker symbol.
        year: Fiscal year.
        assets: Total assets (driving series; always present).
        cash: Cash, 0.0 when absent from the cash series.
        equity: Equity, 0.0 when absent.
        profit: Profit, 0.0 when absent.
        revenue: Revenue, 0.0 when absent.
        price_change: Percent change from early-year to late-year average
            price, 0.0 when no change could be computed.
        profit_margin: profit / revenue, 0.0 when revenue is zero.
        roa: profit_margin * revenue / assets, 0.0 when assets is zero.
        delta_revenue: Year-over-year change in revenue (None for the
            earliest year of a ticker).
        delta_profit_margin: Year-over-year change in profit margin.
        delta_roa: Year-over-year change in ROA.
        missing: Names of inputs that were absent and defaulted to 0.0.
    """

    ticker: str
    year: int
    assets: float
    cash: float
    equity: float
    profit: float
    revenue: float
    price_change: float
    profit_margin: float
    roa: float
    delta_revenue: float | None = None
    delta_profit_margin: float | None = None
    delta_roa: float | None = None
    missing: tuple[str, ...] = ()

    @property
    def has_deltas(self) -> bool:
        return (
            self.delta_revenue is not None
            and self.delta_profit_margin is not None
            and self.delta_roa is not None
        )


# ticker -> records (ascending by year once deltas are annotated)
Dataset = dict[str, list[StockYearRecord]]
