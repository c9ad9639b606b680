"""Testes do conversor predefinido stats-gov-cn."""

import pytest

from series_vault.converters import get_converter, is_predefined_converter, list_converters
from series_vault.converters.stats_gov_cn import convert
from series_vault.core.exceptions import ConverterNotFound
from series_vault.timeseries.types import dump_collection


def test_convert_parses_header_after_metadata_lines(stats_gov_cn_csv):
    result = dump_collection(convert(stats_gov_cn_csv))

    assert result == [
        {"indicator": "居民消费价格指数(上年同月=100)", "data": [
            {"year": 2024, "month": 1, "value": 99.2},
            {"year": 2024, "month": 2, "value": 100.7},
            {"year": 2024, "month": 3, "value": 100.1},
        ]},
        {"indicator": "工业生产者出厂价格指数(上年同月=100)", "data": [
            {"year": 2024, "month": 1, "value": 97.5},
            {"year": 2024, "month": 3, "value": 97.2},
        ]},
    ]


def test_convert_without_header_returns_empty():
    assert convert("a,b,c\n1,2,3\n") == []


def test_convert_ignores_non_time_columns_and_non_numeric_cells():
    csv_text = (
        "指标,单位,2023年12月,2024年1月\n"
        "GDP,亿元,n/a,12.5\n"
        "\n"
        ",,1,2\n"
    )

    result = convert(csv_text)

    assert len(result) == 1
    assert result[0].indicator == "GDP"
    assert [(p.year, p.month, p.value) for p in result[0].data] == [(2024, 1, 12.5)]


def test_convert_handles_quoted_cells():
    csv_text = '指标,2024年1月\n"Index, total",3\n'

    result = convert(csv_text)

    assert result[0].indicator == "Index, total"
    assert result[0].data[0].value == 3.0


def test_convert_keeps_rows_wider_than_header():
    result = convert("指标,2024年1月\nCPI,1.0,extra\nPPI,2.0\n")

    assert [(r.indicator, [p.value for p in r.data]) for r in result] == [
        ("CPI", [1.0]),
        ("PPI", [2.0]),
    ]


def test_convert_reads_numeric_prefix_of_cell():
    result = convert("指标,2024年1月,2024年2月\nRate,12.3%,-0.5 pct\n")

    assert [p.value for p in result[0].data] == [12.3, -0.5]


def test_registry_exposes_stats_gov_cn():
    assert is_predefined_converter("stats-gov-cn")
    assert [c.id for c in list_converters()] == ["stats-gov-cn"]
    assert get_converter("stats-gov-cn").to_dict()["name"] == "data.stats.gov.cn"


def test_registry_unknown_converter_raises():
    with pytest.raises(ConverterNotFound):
        get_converter("does-not-exist")
