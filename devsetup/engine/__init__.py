"""Provisioning engine - registry, decisions, planning and step execution."""

from .engine import ProvisioningEngine
from .loader import CatalogLoader
from .registry import StepRegistry
from .runner import ActionRunner, RealActionRunner, MockActionRunner
from .schema import ActionOutcome, Catalog, ExecutionResult, RunPlan, Step, StepSpec
from .context import SetupContext
from .errors import (
    CatalogError,
    DevSetupError,
    DuplicateIdError,
    StepFailure,
    UnclassifiedDiagnostic,
    UserDeclined,
)

__all__ = [
    'ProvisioningEngine',
    'CatalogLoader',
    'StepRegistry',
    'ActionRunner',
    'RealActionRunner',
    'MockActionRunner',
    'ActionOutcome',
    'Catalog',
    'ExecutionResult',
    'RunPlan',
    'Step',
    'StepSpec',
    'SetupContext',
    'CatalogError',
    'DevSetupError',
    'DuplicateIdError',
    'StepFailure',
    'UnclassifiedDiagnostic',
    'UserDeclined',
]
