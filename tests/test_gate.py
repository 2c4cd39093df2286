"""Tests for the summary gate and plan derivation."""

import pytest

from devsetup.engine.gate import SummaryGate
from devsetup.engine.plan import derive_plan
from devsetup.engine.runner import MockActionRunner
from devsetup.engine.schema import ActionOutcome, Step, freeze_selection


def _steps(*ids):
    return [
        Step(id=step_id, prompt=f"Install {step_id}?", label=step_id.upper(), action=lambda: ActionOutcome(True, ''))
        for step_id in ids
    ]


class TestSummaryGate:

    def test_lists_only_selected_steps_in_order(self):
        runner = MockActionRunner()
        runner.input_queue = ['y']
        steps = _steps('zsh', 'docker', 'helm')
        selection = freeze_selection({'zsh': True, 'docker': False, 'helm': True})

        SummaryGate(runner).present(selection, steps)

        listed = [m for m in runner.displayed if m.startswith('- ')]
        assert listed == ['- ZSH', '- HELM']

    def test_announces_automatic_steps(self):
        runner = MockActionRunner()
        runner.input_queue = ['y']

        SummaryGate(runner, automatic_summary='System updates (automatic)').present(freeze_selection({}), [])

        assert '- System updates (automatic)' in runner.displayed

    def test_yes_confirms(self):
        runner = MockActionRunner()
        runner.input_queue = ['y']

        assert SummaryGate(runner).present(freeze_selection({}), []) is True

    def test_no_declines(self):
        runner = MockActionRunner()
        runner.input_queue = ['n']

        assert SummaryGate(runner).present(freeze_selection({'a': True}), _steps('a')) is False

    def test_keeps_asking_until_valid(self):
        """No default: garbage answers are re-asked."""
        runner = MockActionRunner()
        runner.input_queue = ['', 'sure', 'n']

        assert SummaryGate(runner, prompt='Go?').present(freeze_selection({}), []) is False
        prompts = [c[1] for c in runner.calls if c[0] == 'get_input']
        assert prompts == ['Go? (y/n): '] * 3

    def test_assume_yes_skips_question(self):
        runner = MockActionRunner()

        assert SummaryGate(runner, assume_yes=True).present(freeze_selection({}), []) is True
        assert not [c for c in runner.calls if c[0] == 'get_input']


class TestDerivePlan:

    def test_plan_is_selected_steps_in_registry_order(self):
        steps = _steps('a', 'b', 'c', 'd')
        selection = freeze_selection({'d': True, 'a': True, 'b': False, 'c': True})

        plan = derive_plan(steps, selection)

        assert plan.step_ids == ['a', 'c', 'd']

    def test_empty_plan(self):
        steps = _steps('a', 'b')

        plan = derive_plan(steps, freeze_selection({'a': False, 'b': False}))

        assert plan.step_ids == []

    def test_missing_decision_is_rejected(self):
        """Every registered step must have a decision."""
        with pytest.raises(ValueError):
            derive_plan(_steps('a', 'b'), freeze_selection({'a': True}))

    def test_plan_does_not_follow_later_selection_changes(self):
        """The plan is frozen once derived."""
        answers = {'a': False}
        steps = _steps('a')
        plan = derive_plan(steps, answers)

        answers['a'] = True

        assert plan.step_ids == []
        assert isinstance(plan.steps, tuple)
