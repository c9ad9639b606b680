"""
Fluxos de alto nível do Series Vault.

- `run_merge`: carrega versões selecionadas, mescla e persiste a versão mesclada
  (ingest.versions → transform.merge_versions → export.merged_version).
- `run_convert`: converte o CSV raw de uma versão (transform.convert_version).

Ambos montam a configuração efetiva do run sobrepondo os parâmetros da
chamada à configuração base via `deep_merge`, registram o hash dessa
configuração em `ctx.meta["config_hash"]` e executam os Steps pelo Engine.

Falhas são expostas como uma única exceção voltada ao usuário
(`MergeFailed` / `ConversionFailed`), com o Step que falhou e seu payload
de erro em `details`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from series_vault.core.config.hashing import compute_config_hash
from series_vault.core.config.errors import ConfigError
from series_vault.core.config.merge import deep_merge
from series_vault.core.engine.engine import Engine, RunResult
from series_vault.core.errors import error_from_exception
from series_vault.core.exceptions import ConversionFailed, InvalidMergeStrategy, MergeFailed
from series_vault.core.pipeline.context import RunContext
from series_vault.persistence.dataset_store import DatasetStore
from series_vault.steps.export.merged_version import ExportMergedVersionStep
from series_vault.steps.ingest.versions import IngestVersionsStep
from series_vault.steps.transform.convert_version import TransformConvertVersionStep
from series_vault.steps.transform.merge_versions import TransformMergeVersionsStep
from series_vault.timeseries.merger import MergeStats, resolve_strategy
from series_vault.timeseries.types import IndicatorData, MergeStrategy


@dataclass(frozen=True)
class MergeOutcome:
    """Resultado de um merge bem-sucedido."""
    version: Dict[str, Any]
    stats: MergeStats
    dataset: Optional[Dict[str, Any]]
    run: RunResult


def build_merge_steps() -> List[Any]:
    return [IngestVersionsStep(), TransformMergeVersionsStep(), ExportMergedVersionStep()]


def _new_context(config: Dict[str, Any], *, store: Optional[DatasetStore], source: str) -> RunContext:
    meta: Dict[str, Any] = {"config_hash": compute_config_hash(config), "source": source}
    if store is not None:
        meta["store"] = store
    ctx = RunContext(
        run_id=f"run-{uuid.uuid4().hex[:12]}",
        created_at=datetime.now(timezone.utc),
        config=config,
        meta=meta,
    )
    ctx.log(step_id=None, level="info", message="run started", source=source, config_hash=meta["config_hash"])
    return ctx


def _effective_config(
    config: Dict[str, Any],
    request: Dict[str, Any],
    *,
    failure: type,
    message: str,
) -> Dict[str, Any]:
    """Sobrepõe os parâmetros da chamada à config base; conflitos viram `failure`."""
    try:
        return deep_merge(config, request)
    except ConfigError as e:
        raise failure(
            message=message,
            details={"step": None, "error": error_from_exception(e).to_dict()},
        ) from e


def _failure_details(run: RunResult) -> Dict[str, Any]:
    failed = run.first_failure()
    if failed is None:
        return {}
    return {"step": failed.step_id, "error": failed.payload.get("error")}


def run_merge(
    config: Dict[str, Any],
    *,
    dataset_id: str,
    timestamps: Sequence[str],
    strategy: Any = MergeStrategy.LATEST.value,
    note: Optional[str] = None,
    store: Optional[DatasetStore] = None,
) -> MergeOutcome:
    """Mescla versões de um dataset e persiste a versão resultante.

    Raises:
        MergeFailed: qualquer falha de validação, carga, merge ou persistência.
    """
    try:
        strategy_value = resolve_strategy(strategy).value
    except InvalidMergeStrategy as e:
        raise MergeFailed(
            message="Failed to merge versions",
            details={
                "step": TransformMergeVersionsStep.id,
                "error": error_from_exception(e, step=TransformMergeVersionsStep.id).to_dict(),
            },
        ) from e

    effective = _effective_config(
        config,
        {
            "steps": {
                "ingest.versions": {"dataset_id": dataset_id, "timestamps": list(timestamps)},
                "transform.merge_versions": {"strategy": strategy_value},
                "export.merged_version": {"note": note},
            }
        },
        failure=MergeFailed,
        message="Failed to merge versions",
    )

    ctx = _new_context(effective, store=store, source="merge")
    run = Engine(steps=build_merge_steps(), ctx=ctx).run()

    if not run.ok or not ctx.has_artifact("versions.merged"):
        raise MergeFailed(
            message="Failed to merge versions",
            details=_failure_details(run),
        )

    dataset_store = store or DatasetStore(data_dir=effective["store"]["data_dir"])
    return MergeOutcome(
        version=ctx.get_artifact("versions.merged"),
        stats=ctx.get_artifact("merge.stats"),
        dataset=dataset_store.get_dataset(dataset_id),
        run=run,
    )


def run_convert(
    config: Dict[str, Any],
    *,
    dataset_id: str,
    timestamp: str,
    store: Optional[DatasetStore] = None,
) -> List[IndicatorData]:
    """Converte o CSV raw de uma versão e persiste o JSON processado.

    Raises:
        ConversionFailed: conversor ausente, versão inexistente ou erro do conversor.
    """
    effective = _effective_config(
        config,
        {"steps": {"transform.convert_version": {"dataset_id": dataset_id, "timestamp": timestamp}}},
        failure=ConversionFailed,
        message="Failed to convert version",
    )

    ctx = _new_context(effective, store=store, source="convert")
    run = Engine(steps=[TransformConvertVersionStep()], ctx=ctx).run()

    if not run.ok or not ctx.has_artifact("data.converted"):
        raise ConversionFailed(
            message="Failed to convert version",
            details=_failure_details(run),
        )
    return ctx.get_artifact("data.converted")
