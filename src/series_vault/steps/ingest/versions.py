"""Step canônico: ingest.versions (v1).

Responsabilidades:
- Resolver os timestamps selecionados para versões do dataset.
- Garantir que cada versão possui dados processados.
- Ordenar as versões cronologicamente (o merge não inspeciona timestamps).
- Publicar as coleções parseadas para o merge.

Config esperada (exemplo):
steps:
  ingest.versions:
    dataset_id: ds_1735732800000_ab12cd
    timestamps:
      - 20250101_120000
      - 20241201_080000
    min_versions: 2

Artifacts publicados:
- versions.timestamps: [str] em ordem cronológica
- versions.collections: [[IndicatorData]] alinhado a versions.timestamps

Limites explícitos (v1):
- NÃO converte versões sem dados processados.
- NÃO remove timestamps repetidos: cada ocorrência é uma coleção de entrada.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from series_vault.core.exceptions import (
    EngineConfigurationError,
    InsufficientVersions,
    VersionNotProcessed,
)
from series_vault.core.pipeline.context import RunContext
from series_vault.core.pipeline.step import Step
from series_vault.core.pipeline.types import StepKind, StepResult, StepStatus
from series_vault.steps._shared import failed_result, require_str, store_from_context
from series_vault.timeseries.types import parse_collection


def _timestamps(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise EngineConfigurationError(
            message="steps.ingest.versions.timestamps must be a list of strings",
            details={"received": type(value).__name__},
        )
    cleaned: List[str] = []
    for ts in value:
        cleaned.append(require_str(ts, key="steps.ingest.versions.timestamps[]"))
    return cleaned


@dataclass
class IngestVersionsStep(Step):
    """Carrega as versões processadas selecionadas para merge."""

    id: str = "ingest.versions"
    kind: StepKind = StepKind.INGEST
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = []

    def run(self, ctx: RunContext) -> StepResult:
        step_cfg = ctx.step_config(self.id)

        try:
            dataset_id = require_str(step_cfg.get("dataset_id"), key="steps.ingest.versions.dataset_id")
            timestamps = _timestamps(step_cfg.get("timestamps"))

            min_versions = step_cfg.get("min_versions", 2)
            if not isinstance(min_versions, int) or isinstance(min_versions, bool) or min_versions < 1:
                raise EngineConfigurationError(
                    message="steps.ingest.versions.min_versions must be a positive int",
                    details={"received": min_versions},
                )
            if len(timestamps) < min_versions:
                raise InsufficientVersions(
                    message=f"At least {min_versions} version timestamps are required for merging",
                    details={"received": len(timestamps), "required": min_versions},
                    hint="Selecione ao menos duas versões processadas para realizar o merge.",
                )

            store = store_from_context(ctx)
            versions = [store.get_version(dataset_id, ts) for ts in timestamps]
            for version in versions:
                if not version.get("processedFileName"):
                    raise VersionNotProcessed(
                        message=f"Version {version['timestamp']} does not have processed data",
                        details={"dataset_id": dataset_id, "timestamp": version["timestamp"]},
                        hint="Execute a conversão da versão antes do merge.",
                    )

            # sort estável: timestamps YYYYMMDD_HHMMSS ordenam cronologicamente como texto
            versions = sorted(versions, key=lambda v: v["timestamp"])
            ordered = [v["timestamp"] for v in versions]
            if ordered != timestamps:
                ctx.add_warning(
                    step_id=self.id,
                    message="versions reordered chronologically before merge",
                )

            collections = [
                parse_collection(store.get_processed_file_content(dataset_id, v["processedFileName"]))
                for v in versions
            ]

            ctx.set_artifact("versions.timestamps", ordered)
            ctx.set_artifact("versions.collections", collections)

            ctx.log(
                step_id=self.id,
                level="info",
                message="versions loaded",
                dataset_id=dataset_id,
                timestamps=ordered,
                indicators=[len(c) for c in collections],
            )

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=f"{len(collections)} versions loaded",
                metrics={
                    "versions": len(collections),
                    "indicators": sum(len(c) for c in collections),
                },
                warnings=[],
                artifacts={
                    "timestamps": "versions.timestamps",
                    "collections": "versions.collections",
                },
                payload={"dataset_id": dataset_id, "timestamps": ordered},
            )

        except Exception as e:
            return failed_result(self, ctx, e)
