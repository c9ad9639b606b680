# src/series_vault/core/pipeline/step.py
"""
Contrato canônico de Step do Series Vault.

Um Step é a menor unidade executável de um fluxo (carregar versões,
mesclar séries, persistir versão mesclada, converter CSV). Steps:
    - interagem exclusivamente via RunContext
    - não conhecem o Engine nem a ordem de execução
    - retornam sempre um StepResult

Conformidade é verificada por duck typing (@runtime_checkable).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable, List

from .context import RunContext
from .types import StepKind, StepResult


@runtime_checkable
class Step(Protocol):
    """
    Contrato canônico de um Step.

    Atributos obrigatórios:
        - id: identificador único e estável (ex.: "transform.merge_versions")
        - kind: classificação semântica (`StepKind`)
        - depends_on: ids dos Steps que precisam ter sucesso antes deste
    """
    id: str
    kind: StepKind
    depends_on: List[str]

    def run(self, ctx: RunContext) -> StepResult:
        """Executa a etapa uma única vez usando exclusivamente o RunContext."""
        ...
