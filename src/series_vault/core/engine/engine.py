# src/series_vault/core/engine/engine.py
"""
Engine de execução dos fluxos do Series Vault.

Os fluxos do Series Vault são cadeias curtas e lineares
(ingest → transform → export), então o Engine executa os Steps na ordem
declarada, validando antes que:
    - cada `step.id` é uma string não vazia e única
    - toda dependência foi declarada antes do Step que a consome

Políticas de execução:
    - `steps.<id>.enabled: false` → SKIPPED
    - dependência sem SUCCESS → SKIPPED
    - exceção escapando de `Step.run` → FAILED com `payload["error"]`
    - `engine.fail_fast` (default True) → interrompe na primeira falha

StepResult é frozen: qualquer enriquecimento cria uma nova instância
(dataclasses.replace).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Sequence, Set

from series_vault.core.errors import error_from_exception
from series_vault.core.exceptions import EngineConfigurationError
from series_vault.core.pipeline.context import RunContext
from series_vault.core.pipeline.step import Step
from series_vault.core.pipeline.types import StepKind, StepResult, StepStatus


@dataclass(frozen=True)
class RunResult:
    """Resultado agregado de uma execução (ordem de inserção = ordem de execução)."""
    steps: Dict[str, StepResult] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return all(r.status != StepStatus.FAILED for r in self.steps.values())

    def first_failure(self) -> StepResult | None:
        for r in self.steps.values():
            if r.status == StepStatus.FAILED:
                return r
        return None


def validate_steps(steps: Sequence[Step]) -> None:
    """Valida ids e dependências antes de qualquer execução.

    Raises:
        EngineConfigurationError: id inválido/duplicado ou dependência
            não declarada antes do Step.
    """
    seen: Set[str] = set()
    for s in steps:
        sid = getattr(s, "id", None)
        if not isinstance(sid, str) or not sid.strip():
            raise EngineConfigurationError(
                message="step.id must be a non-empty string",
                details={"step_id": sid},
            )
        if sid in seen:
            raise EngineConfigurationError(
                message=f"Duplicate step id: {sid}",
                details={"step_id": sid},
            )
        for dep in list(getattr(s, "depends_on", []) or []):
            if dep not in seen:
                raise EngineConfigurationError(
                    message=f"Step '{sid}' depends on '{dep}', which is not declared before it",
                    details={"step_id": sid, "dependency": dep},
                    hint="Declare os Steps na ordem ingest → transform → export.",
                )
        seen.add(sid)


class Engine:
    """Engine canônico do Series Vault (validação + executor sequencial)."""

    def __init__(self, *, steps: Sequence[Step], ctx: RunContext):
        self.steps: List[Step] = list(steps)
        self.ctx: RunContext = ctx

    def _is_enabled(self, step_id: str) -> bool:
        return bool(self.ctx.step_config(step_id).get("enabled", True))

    def _fail_fast(self) -> bool:
        return bool(self.ctx.section("engine").get("fail_fast", True))

    def _mk_result(
        self,
        *,
        step: Step,
        status: StepStatus,
        summary: str,
        payload: Dict[str, Any] | None = None,
    ) -> StepResult:
        return StepResult(
            step_id=step.id,
            kind=getattr(step, "kind", None) or StepKind.TRANSFORM,
            status=status,
            summary=summary,
            warnings=list(self.ctx.warnings.get(step.id, [])),
            payload=dict(payload or {}),
        )

    def _with_ctx_warnings(self, result: StepResult) -> StepResult:
        merged: List[str] = []
        for msg in list(result.warnings or []) + self.ctx.warnings.get(result.step_id, []):
            if msg not in merged:
                merged.append(msg)
        return replace(result, warnings=merged)

    def run(self) -> RunResult:
        validate_steps(self.steps)
        results: Dict[str, StepResult] = {}

        for step in self.steps:
            sid = step.id

            if not self._is_enabled(sid):
                results[sid] = self._mk_result(
                    step=step, status=StepStatus.SKIPPED, summary="skipped by config"
                )
                self.ctx.log(step_id=sid, level="info", message="step skipped by config")
                continue

            blocked = [
                d for d in (step.depends_on or [])
                if results[d].status != StepStatus.SUCCESS
            ]
            if blocked:
                results[sid] = self._mk_result(
                    step=step,
                    status=StepStatus.SKIPPED,
                    summary="skipped due to unsuccessful dependency",
                    payload={"blocked_by": blocked},
                )
                self.ctx.log(
                    step_id=sid,
                    level="warning",
                    message="step skipped due to unsuccessful dependency",
                    blocked_by=blocked,
                )
                continue

            try:
                step_result = step.run(self.ctx)
                if not isinstance(step_result, StepResult):
                    raise EngineConfigurationError(
                        message="Step.run(ctx) must return StepResult",
                        details={"step_id": sid, "received": type(step_result).__name__},
                        hint="Ajuste o Step para retornar StepResult",
                    )
                results[sid] = self._with_ctx_warnings(step_result)
            except Exception as e:
                error = error_from_exception(e, step=sid)
                self.ctx.log(
                    step_id=sid,
                    level="error",
                    message="step raised",
                    error_type=error.type,
                    error_message=error.message,
                )
                results[sid] = self._mk_result(
                    step=step,
                    status=StepStatus.FAILED,
                    summary=error.message,
                    payload={"error": error.to_dict()},
                )

            if results[sid].status == StepStatus.FAILED and self._fail_fast():
                break

        return RunResult(steps=results)
