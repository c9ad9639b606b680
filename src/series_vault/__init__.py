# src/series_vault/__init__.py
"""
Series Vault — versionamento, conversão e merge de séries temporais.

Datasets recebem uploads CSV como versões; conversores predefinidos
transformam cada versão em `IndicatorData[]` normalizado, e versões
convertidas de forma independente podem ser mescladas em uma nova versão
com estratégia de resolução de conflitos selecionável (latest, average,
first).

Arquitetura em alto nível:
    - timeseries   → modelo de dados e merge de versões (puro, sem I/O)
    - converters   → conversores predefinidos (CSV → IndicatorData)
    - persistence  → store JSON de datasets e versões
    - core         → config, Steps, RunContext, Engine, erros
    - steps        → Steps canônicos de ingest, merge, conversão e export
    - pipelines    → fluxos `run_merge` e `run_convert`
"""

from .timeseries import (
    IndicatorData,
    MergeStats,
    MergeStrategy,
    TimeSeriesDataPoint,
    get_merge_stats,
    merge_datasets,
)

__all__ = [
    "IndicatorData",
    "MergeStats",
    "MergeStrategy",
    "TimeSeriesDataPoint",
    "get_merge_stats",
    "merge_datasets",
]
