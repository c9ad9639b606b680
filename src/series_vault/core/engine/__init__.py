# src/series_vault/core/engine/__init__.py
"""
Engine do Series Vault.

Executa cadeias de Steps (ex.: ingest.versions → transform.merge_versions
→ export.merged_version) de forma sequencial e auditável, com política
fail-fast controlada por configuração.
"""

from .engine import Engine, RunResult, validate_steps

__all__ = ["Engine", "RunResult", "validate_steps"]
