# src/series_vault/core/config/merge.py
"""
Deep-merge determinístico de configuração do Series Vault.

Usado em dois momentos:
    - na resolução defaults + overrides locais (`load_config`)
    - na montagem da configuração efetiva de um run, quando os parâmetros
      da requisição (dataset, timestamps, estratégia) são sobrepostos à
      configuração base

Política de merge (v1):
    - dict + dict → merge recursivo por chave
    - list        → sobrescrita total
    - escalar     → sobrescrita direta pelo override
    - None no override → sobrescrita explícita (desliga o valor base)
    - conflito de tipos → ConfigTypeConflictError
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` com `override` sem mutar nenhum dos dois.

    Invariantes:
        - O retorno é sempre um novo dicionário
        - Chaves ausentes no override são preservadas da base
        - O mesmo par (base, override) sempre produz o mesmo resultado

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante.

    Raises:
        ConfigTypeConflictError: Se a mesma chave tiver tipos incompatíveis.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        if isinstance(override_value, list) or override_value is None or base_value is None:
            result[key] = deepcopy(override_value)
            continue

        # bool é subclasse de int; a comparação por type() mantém os dois separados
        if type(base_value) is not type(override_value):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        result[key] = deepcopy(override_value)

    return result
