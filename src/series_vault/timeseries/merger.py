# src/series_vault/timeseries/merger.py
"""
Merge de versões de séries temporais (v1).

Combina N coleções `IndicatorData` convertidas de versões diferentes do
mesmo dataset em uma única coleção deduplicada.

Algoritmo:
1. Full outer join na chave `(indicator, year, month)`: para cada coleção,
   em ordem cronológica, cada valor observado é anexado à lista da sua chave.
2. Cada chave é resolvida pela estratégia:
   - latest: último valor anexado (versão mais recente que contém a chave)
   - first: primeiro valor anexado (versão mais antiga)
   - average: média aritmética arredondada para 3 casas (half-up)
3. Pontos agrupados por indicador e ordenados por (year, month). Todo
   indicador visto nos inputs aparece na saída, mesmo sem pontos.
4. Indicadores ordenados por nome.

Regras:
- A estratégia é validada antes de qualquer join (fail fast).
- A ordem das coleções codifica recência: índice 0 = mais antiga.
- Duplicados dentro de uma mesma coleção participam da resolução.
- Nenhum input é mutado.

Limites explícitos (v1):
- NÃO valida a corretude dos conversores.
- NÃO infere taxonomia de indicadores entre fontes distintas.
- NÃO inspeciona timestamps: ordenar é responsabilidade do chamador.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Dict, List, Optional, Sequence, Set, Tuple, Union

from series_vault.core.exceptions import InvalidMergeStrategy

from .types import IndicatorData, MergeStrategy, TimeSeriesDataPoint

MergeKey = Tuple[str, int, int]

_AVERAGE_PRECISION = 1000  # 3 casas decimais


@dataclass(frozen=True)
class MergeStats:
    """Resumo de um merge (derivado, não persistido na versão)."""
    total_indicators: int
    total_data_points: int
    unique_indicators: int
    duplicates_handled: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_indicators": self.total_indicators,
            "total_data_points": self.total_data_points,
            "unique_indicators": self.unique_indicators,
            "duplicates_handled": self.duplicates_handled,
        }


def resolve_strategy(strategy: Union[MergeStrategy, str, Any]) -> MergeStrategy:
    """Normaliza a estratégia, levantando InvalidMergeStrategy quando desconhecida."""
    if isinstance(strategy, MergeStrategy):
        return strategy
    try:
        return MergeStrategy(strategy)
    except (ValueError, TypeError):
        raise InvalidMergeStrategy(
            message=f"Invalid merge strategy: {strategy!r}",
            details={"strategy": repr(strategy), "allowed": [s.value for s in MergeStrategy]},
            hint="Use uma das estratégias suportadas: latest, average ou first.",
        ) from None


def _round_half_up(value: float) -> float:
    scaled = value * _AVERAGE_PRECISION
    # magnitudes fora do alcance de float após a escala (ou inf/nan) passam inalteradas
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / _AVERAGE_PRECISION


def _resolve(values: List[float], strategy: MergeStrategy) -> float:
    if strategy is MergeStrategy.LATEST:
        return values[-1]
    if strategy is MergeStrategy.FIRST:
        return values[0]
    return _round_half_up(sum(values) / len(values))


def merge_datasets(
    datasets: Sequence[Sequence[IndicatorData]],
    strategy: Union[MergeStrategy, str],
    *,
    collation_key: Optional[Callable[[str], Any]] = None,
) -> List[IndicatorData]:
    """Mescla coleções de séries temporais em uma coleção deduplicada.

    Args:
        datasets: coleções em ordem cronológica (mais antiga primeiro).
        strategy: `latest`, `average` ou `first` (enum ou string).
        collation_key: chave de ordenação dos nomes de indicador. Por padrão,
            ordem de codepoints; `locale.strxfrm` aplica a collation do locale ativo.

    Returns:
        Nova lista de `IndicatorData`. Com uma única coleção, suas entradas
        são devolvidas inalteradas em uma lista nova.

    Raises:
        InvalidMergeStrategy: estratégia fora do conjunto suportado.
    """
    resolved = resolve_strategy(strategy)

    if not datasets:
        return []

    if len(datasets) == 1:
        return list(datasets[0])

    observed: DefaultDict[MergeKey, List[float]] = defaultdict(list)
    by_indicator: DefaultDict[str, List[TimeSeriesDataPoint]] = defaultdict(list)
    for collection in datasets:
        for entry in collection:
            # indicadores sem pontos também aparecem na saída (com data vazia)
            by_indicator.setdefault(entry.indicator, [])
            for point in entry.data:
                observed[(entry.indicator, point.year, point.month)].append(point.value)

    for (indicator, year, month), values in observed.items():
        by_indicator[indicator].append(
            TimeSeriesDataPoint(year=year, month=month, value=_resolve(values, resolved))
        )

    sort_key = collation_key or (lambda name: name)
    return [
        IndicatorData(
            indicator=indicator,
            data=tuple(sorted(by_indicator[indicator], key=lambda p: (p.year, p.month))),
        )
        for indicator in sorted(by_indicator, key=lambda name: (sort_key(name), name))
    ]


def get_merge_stats(
    datasets: Sequence[Sequence[IndicatorData]],
    merged: Sequence[IndicatorData],
) -> MergeStats:
    """Calcula estatísticas de um merge a partir dos inputs e do seu resultado.

    O chamador deve passar o resultado de `merge_datasets` para os mesmos
    `datasets`; o resultado não é recalculado aqui.
    """
    names: Set[str] = set()
    total_points = 0
    for collection in datasets:
        for entry in collection:
            names.add(entry.indicator)
            total_points += len(entry.data)

    merged_points = sum(len(entry.data) for entry in merged)

    return MergeStats(
        total_indicators=len(names),
        total_data_points=total_points,
        unique_indicators=len(merged),
        duplicates_handled=total_points - merged_points,
    )
