# src/series_vault/converters/__init__.py
"""
Registro de conversores predefinidos do Series Vault.

Um conversor é uma função pura `CSV text -> List[IndicatorData]`. Datasets
criados com `converter_id` registram `converterType = "predefined"` e
`predefinedConverterId` nos metadados; o Step `transform.convert_version`
resolve o conversor por esse id.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List

from series_vault.core.exceptions import ConverterNotFound
from series_vault.timeseries.types import IndicatorData

from . import stats_gov_cn

ConvertFn = Callable[[str], List[IndicatorData]]


@dataclass(frozen=True)
class PredefinedConverter:
    id: str
    name: str
    description: str
    convert: ConvertFn

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}


_REGISTRY: Dict[str, PredefinedConverter] = {
    "stats-gov-cn": PredefinedConverter(
        id="stats-gov-cn",
        name="data.stats.gov.cn",
        description="国家统计局时间序列数据 (National Bureau of Statistics time series)",
        convert=stats_gov_cn.convert,
    ),
}


def list_converters() -> List[PredefinedConverter]:
    return [_REGISTRY[k] for k in sorted(_REGISTRY)]


def is_predefined_converter(converter_id: str) -> bool:
    return converter_id in _REGISTRY


def get_converter(converter_id: str) -> PredefinedConverter:
    if converter_id not in _REGISTRY:
        raise ConverterNotFound(
            message=f"Converter not found: {converter_id}",
            details={"converter_id": converter_id, "available": sorted(_REGISTRY)},
        )
    return _REGISTRY[converter_id]


__all__ = [
    "PredefinedConverter",
    "get_converter",
    "is_predefined_converter",
    "list_converters",
]
