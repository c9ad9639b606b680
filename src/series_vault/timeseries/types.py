# src/series_vault/timeseries/types.py
"""
Modelo de dados de séries temporais do Series Vault.

Formato de fio (JSON produzido pelos conversores e persistido em
`processed/<timestamp>.json`):

    [
      {"indicator": "CPI", "data": [{"year": 2024, "month": 1, "value": 101.2}]}
    ]

Os tipos são dataclasses frozen e `IndicatorData.data` é uma tupla, de
forma que coleções passadas ao merge não podem ser mutadas por ele nem
pelos chamadores que recebem o resultado.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple


class MergeStrategy(str, Enum):
    """Política de resolução de valores que compartilham a mesma chave de merge."""
    LATEST = "latest"
    AVERAGE = "average"
    FIRST = "first"


@dataclass(frozen=True)
class TimeSeriesDataPoint:
    """Uma observação mensal."""
    year: int
    month: int
    value: float

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "TimeSeriesDataPoint":
        return cls(year=int(raw["year"]), month=int(raw["month"]), value=float(raw["value"]))

    def to_dict(self) -> Dict[str, Any]:
        return {"year": self.year, "month": self.month, "value": self.value}


@dataclass(frozen=True)
class IndicatorData:
    """Uma série nomeada; `data` preserva a ordem recebida."""
    indicator: str
    data: Tuple[TimeSeriesDataPoint, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.indicator, str) or not self.indicator:
            raise ValueError("indicator must be a non-empty string")
        if not isinstance(self.data, tuple):
            object.__setattr__(self, "data", tuple(self.data))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "IndicatorData":
        points = raw.get("data") or []
        return cls(
            indicator=raw["indicator"],
            data=tuple(TimeSeriesDataPoint.from_dict(p) for p in points),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"indicator": self.indicator, "data": [p.to_dict() for p in self.data]}


# Uma coleção = saída completa de um conversor para uma versão do dataset.
Collection = Sequence[IndicatorData]


def parse_collection(raw: Iterable[Mapping[str, Any]]) -> List[IndicatorData]:
    """Converte o JSON de uma versão processada em `IndicatorData`."""
    return [IndicatorData.from_dict(item) for item in raw]


def dump_collection(collection: Iterable[IndicatorData]) -> List[Dict[str, Any]]:
    """Serializa uma coleção para o formato de fio."""
    return [item.to_dict() for item in collection]
