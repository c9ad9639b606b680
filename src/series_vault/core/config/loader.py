# src/series_vault/core/config/loader.py
"""
Loader de configuração do Series Vault.

Carrega o arquivo obrigatório de defaults e, opcionalmente, um arquivo
local de overrides, resolvendo a configuração efetiva via `deep_merge`.

Exemplo de defaults (YAML):

    engine:
      fail_fast: true
    store:
      data_dir: data-store
    steps:
      ingest.versions:
        min_versions: 2
      transform.merge_versions:
        strategy: latest

Limites explícitos:
    - Não valida semântica (ex.: estratégia de merge): isso é feito pelos Steps
    - Não cria diretórios de store
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração (YAML ou JSON) e valida a raiz.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: str,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    Política de resolução:
        - defaults é obrigatório
        - local é opcional; quando o caminho é informado mas o arquivo
          não existe, é ignorado
        - local sempre tem prioridade sobre defaults

    Args:
        defaults_path (str): Caminho para o arquivo de configuração base.
        local_path (Optional[str]): Caminho opcional para overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida.

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural durante o merge.
    """
    defaults = _load_file(Path(defaults_path))

    if local_path is None:
        return defaults

    local_file = Path(local_path)
    if not local_file.exists():
        return defaults

    return deep_merge(defaults, _load_file(local_file))
