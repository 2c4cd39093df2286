"""Step registry - ordered, append-only collection of steps."""

from typing import Dict, Iterator, List, Optional, Tuple

from .errors import DuplicateIdError
from .schema import Step


class StepRegistry:
    """
    Holds registered steps in insertion order.

    Steps cannot be removed or replaced once registered, so every iteration
    sees the same sequence.
    """

    def __init__(self, steps: Optional[List[Step]] = None):
        self._steps: List[Step] = []
        self._by_id: Dict[str, Step] = {}
        for step in steps or []:
            self.register(step)

    def register(self, step: Step) -> None:
        """Add a step.

        Raises:
            DuplicateIdError: If a step with the same id is already registered
        """
        if step.id in self._by_id:
            raise DuplicateIdError(step.id)
        self._steps.append(step)
        self._by_id[step.id] = step

    def all(self) -> Tuple[Step, ...]:
        """Return the registered steps in registration order."""
        return tuple(self._steps)

    def get(self, step_id: str) -> Optional[Step]:
        return self._by_id.get(step_id)

    def __contains__(self, step_id: object) -> bool:
        return step_id in self._by_id

    def __iter__(self) -> Iterator[Step]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._steps)
