"""Pydantic models for the provisioning catalog and engine records."""

from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ActionOutcome(NamedTuple):
    """What an action hands back: its own verdict plus captured diagnostics."""

    ok: bool
    diagnostics: str = ''


Action = Callable[[], ActionOutcome]


class StepSpec(BaseModel):
    """
    Catalog description of a single provisioning step.

    The action is referenced by name (e.g., 'apt.install_packages') and bound
    to a Python callable when the catalog is loaded.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., description="Unique, stable step identifier")
    prompt: Optional[str] = Field(None, description="Yes/no question shown to the operator")
    label: Optional[str] = Field(None, description="Short name used in the summary and progress bar")
    action: str = Field(..., description="Registered action name (e.g., 'docker.install')")
    params: Dict[str, Any] = Field(default_factory=dict, description="Arguments handed to the action")

    @property
    def display_label(self) -> str:
        return self.label or self.id.replace('_', ' ')


class Catalog(BaseModel):
    """
    A full provisioning catalog.

    Automatic steps always run once the plan is confirmed; the remaining
    steps are offered to the operator one by one, in order.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Catalog identifier (e.g., 'ubuntu-22.04')")
    version: str = Field(..., description="Catalog version")
    description: str = Field(..., description="Human-readable description")
    automatic: List[StepSpec] = Field(default_factory=list, description="Steps run without asking")
    automatic_summary: str = Field(
        "System updates and common packages (automatic)",
        description="Summary line describing the automatic steps",
    )
    steps: List[StepSpec] = Field(default_factory=list, description="Steps offered to the operator")
    gate_prompt: str = Field("Proceed with installation?", description="Final confirmation question")
    completion_message: str = Field(
        "Setup complete! Please log out and log back in for all changes to take effect.",
        description="Printed after a completed run",
    )


class Step(BaseModel):
    """A registered step: id, prompt, and a zero-argument action."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    prompt: str
    label: str
    action: Action


class ExecutionResult(BaseModel):
    """Outcome of executing one step."""

    model_config = ConfigDict(frozen=True)

    step_id: str
    succeeded: bool
    message: str = ''
    error_lines: Tuple[str, ...] = ()


class RunPlan(BaseModel):
    """Ordered steps chosen for execution, frozen before anything runs."""

    model_config = ConfigDict(frozen=True)

    steps: Tuple[Step, ...] = ()

    @property
    def step_ids(self) -> List[str]:
        return [step.id for step in self.steps]


Selection = Mapping[str, bool]


def freeze_selection(answers: Dict[str, bool]) -> Selection:
    """Return a read-only view over a copy of the operator's answers."""
    return MappingProxyType(dict(answers))
