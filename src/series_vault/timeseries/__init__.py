# src/series_vault/timeseries/__init__.py
"""
Séries temporais do Series Vault: modelo de dados e merge de versões.

Este pacote é puro: não faz I/O, não conhece o store nem o Engine.
"""

from .merger import MergeStats, get_merge_stats, merge_datasets, resolve_strategy
from .types import (
    IndicatorData,
    MergeStrategy,
    TimeSeriesDataPoint,
    dump_collection,
    parse_collection,
)

__all__ = [
    "IndicatorData",
    "MergeStats",
    "MergeStrategy",
    "TimeSeriesDataPoint",
    "dump_collection",
    "get_merge_stats",
    "merge_datasets",
    "parse_collection",
    "resolve_strategy",
]
