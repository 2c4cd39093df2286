"""Tests for desktop settings actions."""

from pathlib import Path

from devsetup.engine.context import SetupContext
from devsetup.engine.runner import MockActionRunner
from devsetup.steps.desktop.actions import set_gsetting


def test_sets_input_switch_for_target_user():
    ctx = SetupContext(target_user='dev', home=Path('/home/dev'), work_dir=Path('/tmp'), is_root=True)
    runner = MockActionRunner()

    outcome = set_gsetting(ctx, runner, schema='org.gnome.desktop.wm.keybindings',
                           key='switch-input-source', value="['<Alt>Shift_L']")

    assert runner.commands == [[
        'sudo', '-u', 'dev', '-H', 'gsettings', 'set',
        'org.gnome.desktop.wm.keybindings', 'switch-input-source', "['<Alt>Shift_L']",
    ]]
    assert outcome.ok is True


def test_missing_schema_fails():
    ctx = SetupContext(target_user='dev', home=Path('/home/dev'), work_dir=Path('/tmp'))
    runner = MockActionRunner()
    runner.responses['run_shell'] = {'stdout': '', 'stderr': 'No such schema “org.gnome.nope”', 'returncode': 1}

    outcome = set_gsetting(ctx, runner, schema='org.gnome.nope', key='k', value='v')

    assert 'ERROR:' in outcome.diagnostics
