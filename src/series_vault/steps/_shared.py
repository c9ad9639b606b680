"""Helpers compartilhados pelos Steps canônicos do Series Vault.

- resolução do DatasetStore do run (meta["store"] ou config `store.data_dir`)
- padrão de falha: Steps retornam FAILED com `payload["error"]`, não explodem o Engine
"""

from __future__ import annotations

from typing import Any

from series_vault.core.errors import error_from_exception
from series_vault.core.exceptions import EngineConfigurationError
from series_vault.core.pipeline.context import RunContext
from series_vault.core.pipeline.types import StepResult, StepStatus
from series_vault.persistence.dataset_store import DatasetStore


def store_from_context(ctx: RunContext) -> DatasetStore:
    store = ctx.meta.get("store")
    if isinstance(store, DatasetStore):
        return store

    data_dir = ctx.section("store").get("data_dir")
    if not isinstance(data_dir, str) or not data_dir.strip():
        raise EngineConfigurationError(
            message="Missing required config: store.data_dir",
            details={"section": "store"},
            hint="Declare store.data_dir na configuração de defaults.",
        )
    return DatasetStore(data_dir=data_dir)


def require_str(value: Any, *, key: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise EngineConfigurationError(
            message=f"Missing required config: {key}",
            details={"key": key},
        )
    return value.strip()


def failed_result(step: Any, ctx: RunContext, exc: Exception) -> StepResult:
    error = error_from_exception(exc, step=step.id)
    ctx.log(
        step_id=step.id,
        level="error",
        message=f"{step.id} failed",
        error_type=error.type,
        error_message=error.message,
    )
    return StepResult(
        step_id=step.id,
        kind=step.kind,
        status=StepStatus.FAILED,
        summary=str(exc) or error.message or f"{step.id} failed",
        metrics={},
        warnings=[],
        artifacts={},
        payload={"error": error.to_dict()},
    )
