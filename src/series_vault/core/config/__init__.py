# src/series_vault/core/config/__init__.py
"""
Camada de configuração do Series Vault.

Responsabilidades:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução via deep-merge determinístico
    - Hash canônico para rastreabilidade dos runs

A configuração final é sempre um dicionário puro e não contém lógica
de domínio: estratégias de merge e parâmetros de versão são validados
pelos Steps que os consomem.
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "load_config",
]
