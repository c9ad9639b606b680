"""
Series Vault — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do Series Vault.
Erros são artefatos de domínio e fazem parte do contrato operacional
do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from series_vault.core.exceptions import VaultException


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VaultErrorPayload:
    """
    Payload canônico de erro do Series Vault.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    - decision_required: indica se o fluxo está bloqueado aguardando decisão humana
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None
    decision_required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Merge
MERGE_INVALID_STRATEGY = "MERGE_INVALID_STRATEGY"
MERGE_INSUFFICIENT_VERSIONS = "MERGE_INSUFFICIENT_VERSIONS"

# Store / versões
DATASET_NOT_FOUND = "DATASET_NOT_FOUND"
VERSION_NOT_FOUND = "VERSION_NOT_FOUND"
VERSION_NOT_PROCESSED = "VERSION_NOT_PROCESSED"

# Conversores
CONVERTER_NOT_FOUND = "CONVERTER_NOT_FOUND"

# Engine / Execução
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"


_CODES_BY_EXCEPTION: Dict[str, str] = {
    "InvalidMergeStrategy": MERGE_INVALID_STRATEGY,
    "InsufficientVersions": MERGE_INSUFFICIENT_VERSIONS,
    "DatasetNotFound": DATASET_NOT_FOUND,
    "VersionNotFound": VERSION_NOT_FOUND,
    "VersionNotProcessed": VERSION_NOT_PROCESSED,
    "ConverterNotFound": CONVERTER_NOT_FOUND,
    "EngineConfigurationError": ENGINE_CONFIGURATION_ERROR,
}


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def engine_execution_error(
    *,
    step: Optional[str] = None,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique os eventos do run para diagnosticar a falha. Nenhum fallback é aplicado automaticamente.",
) -> VaultErrorPayload:
    return VaultErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message="Falha inesperada durante a execução",
        details={
            "step": step,
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def error_from_exception(exc: BaseException, *, step: Optional[str] = None) -> VaultErrorPayload:
    """Converte uma exceção em VaultErrorPayload (serializável, sem stack trace).

    Regras:
    - VaultException: código estável pelo catálogo, message/details/hint preservados.
    - Outras exceções: encapsuladas como ENGINE_EXECUTION_ERROR.
    """
    if isinstance(exc, VaultException):
        name = exc.__class__.__name__
        details = dict(exc.details or {})
        if step is not None:
            details.setdefault("step", step)
        return VaultErrorPayload(
            type=_CODES_BY_EXCEPTION.get(name, name),
            message=exc.message or "Erro de execução",
            details=details,
            hint=exc.hint,
            decision_required=bool(exc.decision_required),
        )

    return engine_execution_error(
        step=step,
        exc_type=exc.__class__.__name__,
        exc_message=str(exc) or "error",
    )
