"""Conversor predefinido: stats-gov-cn (v1).

Exportações de séries temporais do National Bureau of Statistics
(data.stats.gov.cn). Formato:

    数据库：月度数据
    时间：最近13个月
    指标,2025年11月,2025年10月,...
    居民消费价格指数(上年同月=100),100.7,99.8,...
    数据来源：国家统计局

- Linhas de metadados precedem o cabeçalho; o cabeçalho é a primeira linha,
  entre as cinco primeiras, que contém `指标`.
- Colunas de tempo seguem o padrão `YYYY年M月`; demais colunas são ignoradas.
- Cada linha de dados vira um `IndicatorData` com pontos em ordem cronológica.
- Linhas vazias e linhas com `数据来源` (rodapé de fonte) são descartadas.
- Células vazias ou sem prefixo numérico são tratadas como ausentes; o
  valor é o prefixo numérico da célula ("12.3%" -> 12.3, "1e3x" -> 1000).
- Linhas com mais células que o cabeçalho são mantidas; colunas de tempo
  são lidas por posição.

Limites explícitos (v1):
- NÃO infere unidades nem normaliza nomes de indicadores.
- Arquivo sem cabeçalho reconhecível produz coleção vazia.
"""

from __future__ import annotations

import csv
import io
import re
from typing import List, Optional, Tuple

import pandas as pd

from series_vault.timeseries.types import IndicatorData, TimeSeriesDataPoint

HEADER_MARKER = "指标"
SOURCE_MARKER = "数据来源"
HEADER_SEARCH_LINES = 5

_TIME_COLUMN = re.compile(r"(\d{4})年(\d{1,2})月")
# prefixo numérico da célula: "12.3%" -> 12.3, "abc" -> ausente
_NUMERIC_PREFIX = r"^\s*([+-]?(?:Infinity|\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"


def _find_header(lines: List[str]) -> Optional[int]:
    for i, line in enumerate(lines[:HEADER_SEARCH_LINES]):
        if HEADER_MARKER in line:
            return i
    return None


def _time_columns(columns: List[str]) -> List[Tuple[int, int, int]]:
    """Retorna (posição, ano, mês) das colunas de tempo, em ordem cronológica."""
    found = []
    for pos, name in enumerate(columns):
        if pos == 0:
            continue
        match = _TIME_COLUMN.search(str(name).strip())
        if match:
            found.append((pos, int(match.group(1)), int(match.group(2))))
    return sorted(found, key=lambda c: (c[1], c[2]))


def convert(csv_content: str) -> List[IndicatorData]:
    """Converte o CSV exportado em uma coleção de `IndicatorData`."""
    lines = csv_content.strip().splitlines()
    header_idx = _find_header(lines)
    if header_idx is None:
        return []

    body = [
        line for line in lines[header_idx + 1:]
        if line.strip() and SOURCE_MARKER not in line
    ]
    if not body:
        return []

    text = "\n".join([lines[header_idx]] + body)
    # linhas com mais células que o cabeçalho são mantidas (colunas extras ignoradas)
    width = max(len(fields) for fields in csv.reader(io.StringIO(text), skipinitialspace=True))
    frame = pd.read_csv(
        io.StringIO(text),
        header=None,
        names=range(width),
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
        engine="python",
    )

    header = [str(c) for c in frame.iloc[0].tolist()]
    time_columns = _time_columns(header)
    rows = frame.iloc[1:].reset_index(drop=True)

    indicators = rows[0].fillna("").astype(str).str.strip()
    values = {
        pos: pd.to_numeric(
            rows[pos].fillna("").astype(str).str.extract(_NUMERIC_PREFIX, expand=False),
            errors="coerce",
        )
        for pos, _, _ in time_columns
    }

    result: List[IndicatorData] = []
    for i, indicator in indicators.items():
        if not indicator:
            continue
        points = tuple(
            TimeSeriesDataPoint(year=year, month=month, value=float(values[pos][i]))
            for pos, year, month in time_columns
            if pd.notna(values[pos][i])
        )
        result.append(IndicatorData(indicator=indicator, data=points))

    return result
