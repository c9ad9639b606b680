# tests/core/engine/test_engine.py
"""
Testes do Engine sequencial.

Cobre:
- execução na ordem declarada
- skip por config e por dependência sem sucesso
- fail-fast habilitado e desabilitado
- exceções de Step convertidas em payload de erro
- validação estrutural (ids duplicados, dependência não declarada antes)
"""

import pytest

from series_vault.core.engine.engine import Engine
from series_vault.core.exceptions import EngineConfigurationError, InvalidMergeStrategy
from series_vault.core.pipeline.types import StepStatus


class FailingStep:
    kind = None
    depends_on = []

    def __init__(self, step_id="fail", exc=None):
        self.id = step_id
        self.exc = exc or RuntimeError("boom")

    def run(self, ctx):
        raise self.exc


class WrongReturnStep:
    id = "wrong"
    kind = None
    depends_on = []

    def run(self, ctx):
        return {"status": "success"}


def test_runs_steps_in_declared_order(dummy_ctx, DummyStep):
    steps = [
        DummyStep("ingest.versions"),
        DummyStep("transform.merge_versions", depends_on=["ingest.versions"]),
        DummyStep("export.merged_version", depends_on=["transform.merge_versions"]),
    ]

    result = Engine(steps=steps, ctx=dummy_ctx).run()

    assert list(result.steps) == ["ingest.versions", "transform.merge_versions", "export.merged_version"]
    assert result.ok
    assert all(r.status == StepStatus.SUCCESS for r in result.steps.values())
    assert dummy_ctx.get_artifact("export.merged_version.ok") is True


def test_disabled_step_is_skipped_and_blocks_dependents(dummy_ctx, DummyStep):
    dummy_ctx.config["steps"] = {"ingest.versions": {"enabled": False}}
    steps = [
        DummyStep("ingest.versions"),
        DummyStep("transform.merge_versions", depends_on=["ingest.versions"]),
    ]

    result = Engine(steps=steps, ctx=dummy_ctx).run()

    assert result.steps["ingest.versions"].status == StepStatus.SKIPPED
    assert result.steps["transform.merge_versions"].status == StepStatus.SKIPPED
    assert result.steps["transform.merge_versions"].payload["blocked_by"] == ["ingest.versions"]
    assert not dummy_ctx.has_artifact("transform.merge_versions.ok")


def test_fail_fast_stops_execution(dummy_ctx, DummyStep):
    steps = [FailingStep(), DummyStep("independent")]

    result = Engine(steps=steps, ctx=dummy_ctx).run()

    assert result.steps["fail"].status == StepStatus.FAILED
    assert "independent" not in result.steps
    assert result.first_failure().step_id == "fail"


def test_without_fail_fast_independent_steps_continue(dummy_ctx, DummyStep):
    dummy_ctx.config["engine"] = {"fail_fast": False}
    steps = [
        FailingStep(),
        DummyStep("independent"),
        DummyStep("dependent", depends_on=["fail"]),
    ]

    result = Engine(steps=steps, ctx=dummy_ctx).run()

    assert not result.ok
    assert result.steps["independent"].status == StepStatus.SUCCESS
    assert result.steps["dependent"].status == StepStatus.SKIPPED


def test_exception_is_mapped_to_error_payload(dummy_ctx):
    exc = InvalidMergeStrategy(message="Invalid merge strategy: 'median'", details={"strategy": "median"})

    result = Engine(steps=[FailingStep(exc=exc)], ctx=dummy_ctx).run()

    error = result.steps["fail"].payload["error"]
    assert error["type"] == "MERGE_INVALID_STRATEGY"
    assert error["details"]["strategy"] == "median"
    assert any(e["level"] == "error" and e["step_id"] == "fail" for e in dummy_ctx.events)


def test_generic_exception_is_engine_execution_error(dummy_ctx):
    result = Engine(steps=[FailingStep()], ctx=dummy_ctx).run()

    error = result.steps["fail"].payload["error"]
    assert error["type"] == "ENGINE_EXECUTION_ERROR"
    assert error["details"]["exc_type"] == "RuntimeError"
    assert error["details"]["exc_message"] == "boom"


def test_step_returning_wrong_type_fails(dummy_ctx):
    result = Engine(steps=[WrongReturnStep()], ctx=dummy_ctx).run()

    assert result.steps["wrong"].payload["error"]["type"] == "ENGINE_CONFIGURATION_ERROR"


def test_context_warnings_are_attached(dummy_ctx, DummyStep):
    class WarningStep(DummyStep):
        def run(self, ctx):
            ctx.add_warning(step_id=self.id, message="versions reordered")
            return super().run(ctx)

    result = Engine(steps=[WarningStep("ingest.versions")], ctx=dummy_ctx).run()

    assert result.steps["ingest.versions"].warnings == ["versions reordered"]


def test_duplicate_step_ids_rejected(dummy_ctx, DummyStep):
    with pytest.raises(EngineConfigurationError):
        Engine(steps=[DummyStep("a"), DummyStep("a")], ctx=dummy_ctx).run()


def test_dependency_declared_later_rejected(dummy_ctx, DummyStep):
    steps = [DummyStep("merge", depends_on=["ingest"]), DummyStep("ingest")]

    with pytest.raises(EngineConfigurationError):
        Engine(steps=steps, ctx=dummy_ctx).run()
