"""Testes do modelo de dados de séries temporais."""

from dataclasses import FrozenInstanceError

import pytest

from series_vault.timeseries.types import IndicatorData, MergeStrategy, TimeSeriesDataPoint, parse_collection


def test_indicator_from_dict_coerces_point_types():
    entry = IndicatorData.from_dict(
        {"indicator": "CPI", "data": [{"year": "2024", "month": 3, "value": 7}]}
    )

    point = entry.data[0]
    assert (point.year, point.month, point.value) == (2024, 3, 7.0)
    assert isinstance(point.value, float)


def test_indicator_data_is_tuple_and_frozen():
    entry = IndicatorData("CPI", [TimeSeriesDataPoint(2024, 1, 1.0)])

    assert isinstance(entry.data, tuple)
    with pytest.raises(FrozenInstanceError):
        entry.indicator = "PPI"  # type: ignore[misc]


def test_indicator_requires_non_empty_name():
    with pytest.raises(ValueError):
        IndicatorData("", ())


def test_parse_collection_accepts_missing_data():
    collection = parse_collection([{"indicator": "CPI"}])

    assert collection == [IndicatorData("CPI", ())]


def test_merge_strategy_values_are_stable():
    assert [s.value for s in MergeStrategy] == ["latest", "average", "first"]
