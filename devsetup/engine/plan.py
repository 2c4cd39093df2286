"""Pure planning stage: Selection in, frozen RunPlan out."""

from typing import Iterable

from .schema import RunPlan, Selection, Step


def derive_plan(steps: Iterable[Step], selection: Selection) -> RunPlan:
    """Keep the selected steps, in registry order.

    Raises:
        ValueError: If a registered step has no decision in the selection
    """
    steps = tuple(steps)
    missing = [step.id for step in steps if step.id not in selection]
    if missing:
        raise ValueError(f"No decision recorded for steps: {', '.join(missing)}")
    return RunPlan(steps=tuple(step for step in steps if selection[step.id]))
