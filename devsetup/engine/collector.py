"""Confirmation collector - decide every step before anything runs."""

import logging
from typing import Dict, Iterable, Optional

from .runner import ActionRunner
from .schema import Selection, Step, freeze_selection

logger = logging.getLogger(__name__)

REPROMPT_MESSAGE = "Please answer yes (y) or no (n)."


def parse_yes_no(answer: str) -> Optional[bool]:
    """Normalize an answer to True/False, or None when unrecognized.

    Anything starting with y/Y is yes and anything starting with n/N is no.
    """
    answer = answer.strip()
    if answer[:1] in ('y', 'Y'):
        return True
    if answer[:1] in ('n', 'N'):
        return False
    return None


def ask_yes_no(runner: ActionRunner, question: str) -> bool:
    """Ask until the operator gives a recognizable yes or no.

    There is no retry limit and no default.
    """
    while True:
        decision = parse_yes_no(runner.get_input(f"{question} (y/n): "))
        if decision is not None:
            return decision
        runner.display(REPROMPT_MESSAGE)


class ConfirmationCollector:
    """
    Builds the Selection, one yes/no per step, in registry order.

    In headless mode (``answers`` given or ``assume_yes`` set) no input is
    read: listed answers are used, missing ones fall back to ``assume_yes``.
    """

    def __init__(self, runner: ActionRunner, answers: Optional[Dict[str, bool]] = None,
                 assume_yes: bool = False):
        self.runner = runner
        self.answers = dict(answers or {})
        self.assume_yes = assume_yes
        self.headless_mode = answers is not None or assume_yes

    def collect(self, steps: Iterable[Step]) -> Selection:
        """Return a read-only mapping of step id to the operator's decision."""
        decisions: Dict[str, bool] = {}
        for step in steps:
            if self.headless_mode:
                decisions[step.id] = self.answers.get(step.id, self.assume_yes)
            else:
                decisions[step.id] = ask_yes_no(self.runner, step.prompt)
            logger.info("Selection %s=%s", step.id, decisions[step.id])
        return freeze_selection(decisions)
