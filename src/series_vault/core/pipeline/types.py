# src/series_vault/core/pipeline/types.py
"""
Tipos canônicos do pipeline do Series Vault.

Componentes:
    - StepStatus → estados finais (SUCCESS, SKIPPED, FAILED)
    - StepKind   → classificação semântica de Steps
    - StepResult → resultado imutável produzido por um Step

Os valores dos enums são strings estáveis, adequadas para serialização
em eventos e respostas do fluxo de merge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class StepKind(str, Enum):
    """
    Tipos semânticos de Steps.

    - INGEST: leitura de versões/arquivos do store
    - TRANSFORM: conversão ou merge de séries temporais
    - EXPORT: persistência de novas versões

    O tipo é puramente informativo; o Engine não decide execução com base nele.
    """
    INGEST = "ingest"
    TRANSFORM = "transform"
    EXPORT = "export"


class StepStatus(str, Enum):
    """Estados finais possíveis da execução de um Step."""
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """
    Resultado imutável da execução de um Step.

    Campos:
        - step_id: identificador único do Step
        - kind: tipo semântico do Step
        - status: estado final da execução
        - summary: resumo textual da execução
        - metrics: métricas numéricas (ex.: estatísticas de merge)
        - warnings: avisos não fatais
        - artifacts: chaves de artefatos publicados no RunContext
        - payload: dados adicionais (ex.: `error` em falhas)
    """
    step_id: str
    kind: StepKind
    status: StepStatus
    summary: str
    metrics: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    artifacts: Dict[str, str] = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)
