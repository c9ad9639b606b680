"""
Series Vault — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do Series Vault.

Objetivo:
- Permitir que Steps, Engine e Store levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para VaultErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Exceções devem carregar apenas dados estruturados (serializáveis).
- Mensagens curtas e humanas; contexto em `details`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class VaultException(Exception):
    """Base class para exceções internas do Series Vault.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None
    decision_required: bool = False

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InvalidMergeStrategy(VaultException):
    """Estratégia de merge fora do conjunto latest | average | first."""


@dataclass(frozen=True)
class InsufficientVersions(VaultException):
    """Menos versões do que o mínimo exigido para um merge."""


@dataclass(frozen=True)
class MergeFailed(VaultException):
    """Falha do fluxo de merge, exposta ao usuário sem estrutura interna."""


# ---------------------------------------------------------------------------
# Store / Versões
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatasetNotFound(VaultException):
    """Dataset inexistente no registry."""


@dataclass(frozen=True)
class VersionNotFound(VaultException):
    """Timestamp de versão inexistente no dataset."""


@dataclass(frozen=True)
class VersionNotProcessed(VaultException):
    """Versão existe, mas ainda não possui dados processados."""


# ---------------------------------------------------------------------------
# Conversores
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConverterNotFound(VaultException):
    """Conversor não registrado ou dataset sem conversor associado."""


@dataclass(frozen=True)
class ConversionFailed(VaultException):
    """Falha do fluxo de conversão CSV -> IndicatorData."""


# ---------------------------------------------------------------------------
# Engine / Configuração
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EngineConfigurationError(VaultException):
    """Configuração inválida ou inconsistente para execução."""
