"""Step canônico: export.merged_version (v1).

Persiste `data.merged` como nova versão do dataset, marcada com
`isMerged = true` e `mergedFrom = versions.timestamps`.

Config esperada (exemplo):
steps:
  export.merged_version:
    note: "Q4 consolidado"   # opcional
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from series_vault.core.pipeline.context import RunContext
from series_vault.core.pipeline.step import Step
from series_vault.core.pipeline.types import StepKind, StepResult, StepStatus
from series_vault.steps._shared import failed_result, require_str, store_from_context
from series_vault.timeseries.types import dump_collection


@dataclass
class ExportMergedVersionStep(Step):
    """Grava o resultado do merge como versão mesclada."""

    id: str = "export.merged_version"
    kind: StepKind = StepKind.EXPORT
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = ["transform.merge_versions"]

    def run(self, ctx: RunContext) -> StepResult:
        step_cfg = ctx.step_config(self.id)

        try:
            for key in ("data.merged", "versions.timestamps"):
                if not ctx.has_artifact(key):
                    raise ValueError(f"Missing required artifact: {key}")

            dataset_id = require_str(
                ctx.step_config("ingest.versions").get("dataset_id"),
                key="steps.ingest.versions.dataset_id",
            )
            note = step_cfg.get("note")
            if note is not None and not isinstance(note, str):
                raise ValueError("steps.export.merged_version.note must be a string")

            merged = ctx.get_artifact("data.merged")
            merged_from = list(ctx.get_artifact("versions.timestamps"))

            store = store_from_context(ctx)
            version = store.save_merged_version(
                dataset_id,
                dump_collection(merged),
                merged_from,
                note=note,
            )
            ctx.set_artifact("versions.merged", version)

            ctx.log(
                step_id=self.id,
                level="info",
                message="merged version saved",
                dataset_id=dataset_id,
                timestamp=version["timestamp"],
                merged_from=merged_from,
            )

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=f"merged version {version['timestamp']} saved",
                metrics={"indicators": len(merged)},
                warnings=[],
                artifacts={
                    "version": "versions.merged",
                    "processed_path": str(store.processed_path(dataset_id, version["processedFileName"])),
                },
                payload={"version": dict(version)},
            )

        except Exception as e:
            return failed_result(self, ctx, e)
