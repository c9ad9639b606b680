"""Testes unitários para o Step transform.merge_versions (v1)."""

import pytest

from series_vault.core.pipeline.types import StepStatus
from series_vault.steps.transform.merge_versions import TransformMergeVersionsStep
from series_vault.timeseries.types import dump_collection, parse_collection


def _collections():
    return [
        parse_collection([{"indicator": "X", "data": [
            {"year": 2024, "month": 1, "value": 10},
            {"year": 2024, "month": 2, "value": 20},
        ]}]),
        parse_collection([{"indicator": "X", "data": [
            {"year": 2024, "month": 2, "value": 30},
            {"year": 2024, "month": 3, "value": 40},
        ]}]),
    ]


@pytest.mark.parametrize(
    "strategy, feb",
    [("latest", 30.0), ("first", 20.0), ("average", 25.0)],
)
def test_merge_with_configured_strategy(dummy_ctx, strategy, feb):
    dummy_ctx.set_artifact("versions.collections", _collections())
    dummy_ctx.config["steps"] = {"transform.merge_versions": {"strategy": strategy}}

    result = TransformMergeVersionsStep().run(dummy_ctx)

    assert result.status == StepStatus.SUCCESS
    merged = dump_collection(dummy_ctx.get_artifact("data.merged"))
    assert merged[0]["data"][1] == {"year": 2024, "month": 2, "value": feb}
    assert result.payload["strategy"] == strategy
    assert result.metrics == {
        "total_indicators": 1,
        "total_data_points": 4,
        "unique_indicators": 1,
        "duplicates_handled": 1,
    }


def test_default_strategy_is_latest(dummy_ctx):
    dummy_ctx.set_artifact("versions.collections", _collections())

    result = TransformMergeVersionsStep().run(dummy_ctx)

    assert result.payload["strategy"] == "latest"


def test_invalid_strategy_fails_without_merging(dummy_ctx):
    dummy_ctx.set_artifact("versions.collections", _collections())
    dummy_ctx.config["steps"] = {"transform.merge_versions": {"strategy": "median"}}

    result = TransformMergeVersionsStep().run(dummy_ctx)

    assert result.status == StepStatus.FAILED
    assert result.payload["error"]["type"] == "MERGE_INVALID_STRATEGY"
    assert not dummy_ctx.has_artifact("data.merged")


def test_missing_collections_artifact(dummy_ctx):
    result = TransformMergeVersionsStep().run(dummy_ctx)

    assert result.status == StepStatus.FAILED
    assert "versions.collections" in result.summary
