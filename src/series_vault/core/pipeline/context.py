# src/series_vault/core/pipeline/context.py
"""
Contexto de execução compartilhado de um run.

O `RunContext` é o único meio permitido de:
    - troca de artefatos entre Steps (ex.: `versions.collections`, `data.merged`)
    - registro de eventos de log estruturados
    - coleta de warnings não fatais por Step

Invariantes:
    - Artefatos são indexados por chave explícita
    - Eventos sempre incluem `run_id`, `step_id`, `level` e timestamp UTC
    - Warnings são agrupados por `step_id`

Limites explícitos:
    - Não executa Steps
    - Não persiste dados automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass
class RunContext:
    """
    Contexto de execução de um run (merge ou conversão).

    Campos:
        - run_id: identificador da execução
        - created_at: timestamp UTC de criação
        - config: configuração efetiva (defaults + overrides do run)
        - meta: metadados do run (ex.: `config_hash`, `source`)
    """
    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    _artifacts: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)
    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Artifact store
    # -----------------------------
    def set_artifact(self, key: str, value: Any) -> None:
        self._artifacts[key] = value

    def has_artifact(self, key: str) -> bool:
        return key in self._artifacts

    def get_artifact(self, key: str) -> Any:
        if key not in self._artifacts:
            raise KeyError(key)
        return self._artifacts[key]

    # -----------------------------
    # Config
    # -----------------------------
    def step_config(self, step_id: str) -> Dict[str, Any]:
        """Retorna `config["steps"][step_id]`, ou `{}` quando ausente/inválido."""
        cfg = self.config or {}
        steps_cfg = cfg.get("steps") if isinstance(cfg, dict) else None
        if not isinstance(steps_cfg, dict):
            return {}
        step_cfg = steps_cfg.get(step_id) or {}
        return step_cfg if isinstance(step_cfg, dict) else {}

    def section(self, name: str) -> Dict[str, Any]:
        cfg = self.config or {}
        value = cfg.get(name) if isinstance(cfg, dict) else None
        return value if isinstance(value, dict) else {}

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: Optional[str], level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        self.warnings.setdefault(step_id, []).append(message)
