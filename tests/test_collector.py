"""Tests for ConfirmationCollector and yes/no parsing."""

import pytest

from devsetup.engine.collector import REPROMPT_MESSAGE, ConfirmationCollector, ask_yes_no, parse_yes_no
from devsetup.engine.runner import MockActionRunner
from devsetup.engine.schema import ActionOutcome, Step


def _steps(*ids):
    return [
        Step(id=step_id, prompt=f"Install {step_id}?", label=step_id, action=lambda: ActionOutcome(True, ''))
        for step_id in ids
    ]


class TestParseYesNo:
    """Answer normalization."""

    @pytest.mark.parametrize('answer', ['y', 'Y', 'yes', 'YES', 'yep', '  y  '])
    def test_yes_answers(self, answer):
        assert parse_yes_no(answer) is True

    @pytest.mark.parametrize('answer', ['n', 'N', 'no', 'nope'])
    def test_no_answers(self, answer):
        assert parse_yes_no(answer) is False

    @pytest.mark.parametrize('answer', ['', 'maybe', '1', 'true', 'ok'])
    def test_unrecognized_answers(self, answer):
        assert parse_yes_no(answer) is None


class TestAskYesNo:
    """Prompt loop."""

    def test_prompt_format(self):
        """Questions end with (y/n)."""
        runner = MockActionRunner()
        runner.input_queue = ['y']

        ask_yes_no(runner, 'Install Docker?')

        assert ('get_input', 'Install Docker? (y/n): ') in runner.calls

    def test_reprompts_until_valid(self):
        """Unrecognized answers are re-asked with a hint, no default applied."""
        runner = MockActionRunner()
        runner.input_queue = ['', 'maybe', 'x', 'n']

        assert ask_yes_no(runner, 'Install Helm?') is False

        prompts = [c for c in runner.calls if c[0] == 'get_input']
        assert len(prompts) == 4
        assert runner.displayed.count(REPROMPT_MESSAGE) == 3


class TestCollect:
    """Selection building."""

    def test_asks_one_question_per_step_in_order(self):
        """N steps -> exactly N questions, in registration order."""
        runner = MockActionRunner()
        runner.input_queue = ['y', 'n', 'y']

        selection = ConfirmationCollector(runner).collect(_steps('zsh', 'docker', 'helm'))

        prompts = [c[1] for c in runner.calls if c[0] == 'get_input']
        assert prompts == [
            'Install zsh? (y/n): ',
            'Install docker? (y/n): ',
            'Install helm? (y/n): ',
        ]
        assert dict(selection) == {'zsh': True, 'docker': False, 'helm': True}

    def test_every_step_has_exactly_one_entry(self):
        """Re-prompts don't create extra entries."""
        runner = MockActionRunner()
        runner.input_queue = ['?', 'y', 'n']

        selection = ConfirmationCollector(runner).collect(_steps('a', 'b'))

        assert list(selection) == ['a', 'b']

    def test_no_side_effects_besides_prompts(self):
        """Collecting decisions never runs a command."""
        runner = MockActionRunner()
        runner.input_queue = ['y']

        ConfirmationCollector(runner).collect(_steps('a'))

        assert runner.commands == []

    def test_headless_answers(self):
        """Pre-supplied answers are used without reading input."""
        runner = MockActionRunner()

        selection = ConfirmationCollector(runner, answers={'a': True}).collect(_steps('a', 'b'))

        assert dict(selection) == {'a': True, 'b': False}
        assert not [c for c in runner.calls if c[0] == 'get_input']

    def test_assume_yes(self):
        """assume_yes selects everything without asking."""
        runner = MockActionRunner()

        selection = ConfirmationCollector(runner, assume_yes=True).collect(_steps('a', 'b'))

        assert dict(selection) == {'a': True, 'b': True}
        assert not [c for c in runner.calls if c[0] == 'get_input']

    def test_selection_is_read_only(self):
        runner = MockActionRunner()
        runner.input_queue = ['y']

        selection = ConfirmationCollector(runner).collect(_steps('a'))

        with pytest.raises(TypeError):
            selection['a'] = False
