"""Step canônico: transform.merge_versions (v1).

Responsabilidades:
- Consumir `versions.collections` (ordem cronológica, publicada por ingest.versions).
- Validar a estratégia antes de qualquer join.
- Executar `merge_datasets` e `get_merge_stats`.
- Publicar `data.merged` e `merge.stats`.

Config esperada (exemplo):
steps:
  transform.merge_versions:
    strategy: latest | average | first

Payload mínimo:
payload:
  strategy: str
  stats:
    total_indicators: int
    total_data_points: int
    unique_indicators: int
    duplicates_handled: int
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from series_vault.core.pipeline.context import RunContext
from series_vault.core.pipeline.step import Step
from series_vault.core.pipeline.types import StepKind, StepResult, StepStatus
from series_vault.steps._shared import failed_result
from series_vault.timeseries.merger import get_merge_stats, merge_datasets, resolve_strategy


@dataclass
class TransformMergeVersionsStep(Step):
    """Merge das versões carregadas com estratégia declarada em config."""

    id: str = "transform.merge_versions"
    kind: StepKind = StepKind.TRANSFORM
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = ["ingest.versions"]

    def run(self, ctx: RunContext) -> StepResult:
        step_cfg = ctx.step_config(self.id)

        try:
            strategy = resolve_strategy(step_cfg.get("strategy", "latest"))

            if not ctx.has_artifact("versions.collections"):
                raise ValueError("Missing required artifact: versions.collections")
            collections = ctx.get_artifact("versions.collections")
            if not isinstance(collections, list):
                raise ValueError("versions.collections must be a list of collections")

            merged = merge_datasets(collections, strategy)
            stats = get_merge_stats(collections, merged)

            ctx.set_artifact("data.merged", merged)
            ctx.set_artifact("merge.stats", stats)

            ctx.log(
                step_id=self.id,
                level="info",
                message="versions merged",
                strategy=strategy.value,
                **stats.to_dict(),
            )

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=f"{len(collections)} versions merged ({strategy.value})",
                metrics=stats.to_dict(),
                warnings=[],
                artifacts={"merged": "data.merged", "stats": "merge.stats"},
                payload={"strategy": strategy.value, "stats": stats.to_dict()},
            )

        except Exception as e:
            return failed_result(self, ctx, e)
