"""Tests for feature row and label construction."""

from __future__ import annotations

import numpy as np
import pytest

from stockpanel.analysis.deltas import annotate_deltas
from stockpanel.analysis.features import build_features, feature_row
from stockpanel.analysis.join import build_record
from stockpanel.data.contracts import FEATURE_COLUMNS
from stockpanel.data.models import Dataset, StockYearRecord


def _record(
    ticker: str,
    year: int,
    assets: float,
    cash: float,
    equity: float,
    profit: float,
    revenue: float,
    price_change: float = 0.0,
) -> StockYearRecord:
    return build_record(ticker, year, assets, cash, equity, profit, revenue, price_change)


def _fake_history() -> Dataset:
    """Three years for FAKE; the last two are the documented scenario."""
    return annotate_deltas({
        "FAKE": [
            _record("FAKE", 2019, 50.0, 10.0, 10.0, 5.0, 50.0, 5.0),
            _record("FAKE", 2020, 100.0, 50.0, 30.0, 20.0, 100.0, -30.0),
            _record("FAKE", 2021, 200.0, 100.0, 60.0, 50.0, 200.0, -60.0),
        ]
    })


class TestFeatureRow:
    def test_scenario_values(self) -> None:
        _, year_a, year_b = _fake_history()["FAKE"]
        row = feature_row(year_a, year_b)
        assert row[0] == pytest.approx(100.0)
        assert row[1] == pytest.approx(0.05)
        assert row[2] == pytest.approx(0.05)
        assert row[3] == pytest.approx(0.0)
        assert row[4] == pytest.approx(0.0)
        assert row[5] == pytest.approx(100.0 * 0.05)

    def test_zero_assets_ratios(self) -> None:
        records = annotate_deltas({
            "AAA": [
                _record("AAA", 2020, 0.0, 10.0, 10.0, 1.0, 10.0),
                _record("AAA", 2021, 100.0, 20.0, 50.0, 1.0, 10.0),
            ]
        })["AAA"]
        row = feature_row(records[0], records[1])
        assert row[3] == pytest.approx(0.2)
        assert row[4] == pytest.approx(0.5)

    def test_requires_deltas(self) -> None:
        record = _record("AAA", 2020, 1.0, 1.0, 1.0, 1.0, 1.0)
        with pytest.raises(ValueError, match="deltas not populated"):
            feature_row(record, record)


class TestBuildFeatures:
    def test_three_years_emit_one_row(self) -> None:
        result = build_features(_fake_history())
        assert result.features.shape == (1, len(FEATURE_COLUMNS))
        assert result.keys == [("FAKE", 2021)]
        assert result.labels.tolist() == [0]
        np.testing.assert_allclose(
            result.features[0], [100.0, 0.05, 0.05, 0.0, 0.0, 5.0], atol=1e-12
        )

    def test_two_years_emit_nothing(self) -> None:
        dataset = annotate_deltas({
            "FAKE": [
                _record("FAKE", 2020, 100.0, 50.0, 30.0, 20.0, 100.0),
                _record("FAKE", 2021, 200.0, 100.0, 60.0, 50.0, 200.0),
            ]
        })
        result = build_features(dataset)
        assert result.n_rows == 0
        assert result.features.shape == (0, len(FEATURE_COLUMNS))
        assert result.labels.shape == (0,)

    def test_rows_ascend_by_year_within_ticker(self) -> None:
        dataset = annotate_deltas({
            "AAA": [
                _record("AAA", year, 100.0, 10.0, 10.0, 1.0, float(year - 2000))
                for year in (2022, 2018, 2020, 2019, 2021)
            ]
        })
        result = build_features(dataset)
        assert [year for _, year in result.keys] == [2020, 2021, 2022]
        assert result.features[:, 0].tolist() == [1.0, 1.0, 1.0]

    def test_rows_align_with_labels(self) -> None:
        changes = {2018: 0.0, 2019: 0.0, 2020: -70.0, 2021: -10.0, 2022: 80.0}
        dataset = annotate_deltas({
            "AAA": [
                _record("AAA", year, 100.0, 10.0, 10.0, 1.0, 10.0, change)
                for year, change in changes.items()
            ],
            "BBB": [
                _record("BBB", year, 100.0, 10.0, 10.0, 1.0, 10.0, 20.0)
                for year in (2019, 2020, 2021)
            ],
        })
        result = build_features(dataset)
        expected = {("AAA", 2020): 0, ("AAA", 2021): 1, ("AAA", 2022): 3, ("BBB", 2021): 2}
        assert len(result.keys) == result.n_rows == len(result.labels)
        assert dict(zip(result.keys, result.labels.tolist())) == expected

    def test_dtypes(self) -> None:
        result = build_features(_fake_history())
        assert result.features.dtype == np.float64
        assert result.labels.dtype == np.int64

    def test_empty_dataset(self) -> None:
        result = build_features({})
        assert result.n_rows == 0
        assert result.keys == []
