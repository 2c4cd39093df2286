"""Summary & confirmation gate - last stop before any side effect."""

from typing import Iterable, Optional

from .collector import ask_yes_no
from .runner import ActionRunner
from .schema import Selection, Step


class SummaryGate:
    """Prints the resolved plan and asks for a final go-ahead."""

    def __init__(self, runner: ActionRunner, prompt: str = "Proceed with installation?",
                 automatic_summary: Optional[str] = None, assume_yes: bool = False):
        self.runner = runner
        self.prompt = prompt
        self.automatic_summary = automatic_summary
        self.assume_yes = assume_yes

    def present(self, selection: Selection, steps: Iterable[Step]) -> bool:
        """List the selected steps in registry order; True only on an explicit yes."""
        self.runner.display("")
        self.runner.display("Installation Summary:")
        self.runner.display("The following will be installed:")
        if self.automatic_summary:
            self.runner.display(f"- {self.automatic_summary}")
        for step in steps:
            if selection.get(step.id):
                self.runner.display(f"- {step.label}")

        if self.assume_yes:
            return True

        self.runner.display("")
        return ask_yes_no(self.runner, self.prompt)
