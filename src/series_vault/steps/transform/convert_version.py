"""Step canônico: transform.convert_version (v1).

Converte o CSV raw de uma versão com o conversor predefinido do dataset e
persiste o JSON processado (`processed/<timestamp>.json`).

Config esperada (exemplo):
steps:
  transform.convert_version:
    dataset_id: ds_1735732800000_ab12cd
    timestamp: 20250101_120000

Limites explícitos (v1):
- Apenas conversores predefinidos (`predefinedConverterId`).
- NÃO valida a corretude semântica da saída do conversor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from series_vault.converters import get_converter
from series_vault.core.exceptions import ConverterNotFound, VersionNotFound
from series_vault.core.pipeline.context import RunContext
from series_vault.core.pipeline.step import Step
from series_vault.core.pipeline.types import StepKind, StepResult, StepStatus
from series_vault.steps._shared import failed_result, require_str, store_from_context
from series_vault.timeseries.types import dump_collection


@dataclass
class TransformConvertVersionStep(Step):
    """CSV raw -> IndicatorData[] via conversor predefinido do dataset."""

    id: str = "transform.convert_version"
    kind: StepKind = StepKind.TRANSFORM
    depends_on: List[str] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.depends_on is None:
            self.depends_on = []

    def run(self, ctx: RunContext) -> StepResult:
        step_cfg = ctx.step_config(self.id)

        try:
            dataset_id = require_str(step_cfg.get("dataset_id"), key="steps.transform.convert_version.dataset_id")
            timestamp = require_str(step_cfg.get("timestamp"), key="steps.transform.convert_version.timestamp")

            store = store_from_context(ctx)
            version = store.get_version(dataset_id, timestamp)
            metadata = store.get_dataset(dataset_id)["metadata"]

            converter_id = metadata.get("predefinedConverterId")
            if not converter_id:
                raise ConverterNotFound(
                    message=f"Dataset {dataset_id} has no converter",
                    details={"dataset_id": dataset_id},
                    hint="Crie o dataset com um conversor predefinido (ex.: stats-gov-cn).",
                )
            converter = get_converter(converter_id)

            raw_file_name = version.get("rawFileName")
            if not raw_file_name:
                raise VersionNotFound(
                    message=f"Version {timestamp} has no raw file to convert",
                    details={"dataset_id": dataset_id, "timestamp": timestamp},
                )

            collection = converter.convert(store.get_raw_file_content(dataset_id, raw_file_name))
            if not collection:
                ctx.add_warning(step_id=self.id, message="converter produced no indicators")

            store.save_processed_file(dataset_id, timestamp, dump_collection(collection))
            ctx.set_artifact("data.converted", collection)

            points = sum(len(entry.data) for entry in collection)
            ctx.log(
                step_id=self.id,
                level="info",
                message="version converted",
                dataset_id=dataset_id,
                timestamp=timestamp,
                converter_id=converter_id,
                indicators=len(collection),
                data_points=points,
            )

            return StepResult(
                step_id=self.id,
                kind=self.kind,
                status=StepStatus.SUCCESS,
                summary=f"version {timestamp} converted with {converter_id}",
                metrics={"indicators": len(collection), "data_points": points},
                warnings=[],
                artifacts={"converted": "data.converted"},
                payload={"converter_id": converter_id, "timestamp": timestamp},
            )

        except Exception as e:
            return failed_result(self, ctx, e)
