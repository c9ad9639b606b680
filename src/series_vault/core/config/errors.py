# src/series_vault/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Series Vault.

As exceções aqui definidas representam violações estruturais da
configuração (arquivo ausente, formato desconhecido, raiz inválida,
conflito de tipos no merge), e não erros de merge de séries ou de Steps.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção desta camada realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração do Series Vault.

    Permite captura genérica de falhas de load e de deep-merge,
    separando-as das falhas de execução do pipeline de versões.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    O arquivo de defaults é obrigatório: sem ele não existe diretório
    de store nem estratégia padrão de merge resolvidos.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz da configuração não é um dicionário."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"steps": {"transform.merge_versions": {"strategy": "latest"}}}
        - override: {"steps": {"transform.merge_versions": ["average"]}}

    Nenhum merge parcial é produzido em caso de conflito.
    """
