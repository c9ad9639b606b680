# src/series_vault/core/pipeline/__init__.py
"""
# Pipeline Core — Series Vault

Contratos canônicos para os fluxos do Series Vault:

- **types**: `StepStatus`, `StepKind`, `StepResult`
- **step**: `Step` (Protocol)
- **context**: `RunContext` (artefatos, eventos, warnings)

Steps não conhecem o Engine; comunicação entre Steps ocorre apenas via
`RunContext`.
"""

from .context import RunContext
from .step import Step
from .types import StepKind, StepResult, StepStatus

__all__ = ["RunContext", "Step", "StepKind", "StepResult", "StepStatus"]
