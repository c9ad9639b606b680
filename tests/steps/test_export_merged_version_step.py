"""Testes unitários para o Step export.merged_version (v1)."""

from series_vault.core.pipeline.types import StepStatus
from series_vault.steps.export.merged_version import ExportMergedVersionStep
from series_vault.timeseries.types import parse_collection


def test_persists_merged_version(dummy_ctx, seeded_store):
    store = seeded_store["store"]
    ds = seeded_store["dataset_id"]
    dummy_ctx.meta["store"] = store
    dummy_ctx.config["steps"] = {
        "ingest.versions": {"dataset_id": ds},
        "export.merged_version": {"note": "Q1"},
    }
    merged = parse_collection([{"indicator": "X", "data": [{"year": 2024, "month": 1, "value": 1}]}])
    dummy_ctx.set_artifact("data.merged", merged)
    dummy_ctx.set_artifact("versions.timestamps", [seeded_store["a"], seeded_store["b"]])

    result = ExportMergedVersionStep().run(dummy_ctx)

    assert result.status == StepStatus.SUCCESS
    version = dummy_ctx.get_artifact("versions.merged")
    assert version["isMerged"] is True
    assert version["mergedFrom"] == [seeded_store["a"], seeded_store["b"]]
    assert version["note"] == "Q1"
    assert store.get_processed_file_content(ds, version["processedFileName"]) == [
        {"indicator": "X", "data": [{"year": 2024, "month": 1, "value": 1.0}]}
    ]


def test_missing_merged_artifact(dummy_ctx):
    result = ExportMergedVersionStep().run(dummy_ctx)

    assert result.status == StepStatus.FAILED
    assert "data.merged" in result.summary
