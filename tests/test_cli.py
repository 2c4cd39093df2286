"""Tests for the devsetup command line."""

import logging

import pytest
from typer.testing import CliRunner

from devsetup.cli import EXIT_CONFIG_ERROR, app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep config lookups and logs inside tmp_path."""
    monkeypatch.setenv('DEVSETUP_TARGET_USER', 'dev')
    monkeypatch.setenv('DEVSETUP_HOME', str(tmp_path))
    monkeypatch.setenv('DEVSETUP_LOG_FILE', str(tmp_path / 'devsetup.log'))
    monkeypatch.delenv('DEVSETUP_CATALOG', raising=False)
    monkeypatch.delenv('DEVSETUP_CONFIG', raising=False)
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    logging.captureWarnings(False)


def test_list_shows_bundled_steps():
    result = runner.invoke(app, ['list'])

    assert result.exit_code == 0
    assert 'Automatic:' in result.output
    assert 'docker' in result.output
    assert 'Install Docker?' in result.output


def test_list_missing_catalog(tmp_path):
    result = runner.invoke(app, ['list', '--catalog', str(tmp_path / 'missing.yaml')])

    assert result.exit_code == EXIT_CONFIG_ERROR


def test_run_rejects_unknown_step_ids():
    result = runner.invoke(app, ['run', '--yes', '--select', 'docker', '--select', 'emacs'])

    assert result.exit_code == EXIT_CONFIG_ERROR
    assert 'emacs' in result.output


def test_run_missing_catalog(tmp_path):
    result = runner.invoke(app, ['run', '--catalog', str(tmp_path / 'missing.yaml')])

    assert result.exit_code == EXIT_CONFIG_ERROR


def test_run_invalid_config_file(tmp_path):
    (tmp_path / '.config').mkdir()
    (tmp_path / '.config' / 'devsetup.yaml').write_text("colour: blue\n")

    result = runner.invoke(app, ['run', '--yes'])

    assert result.exit_code == EXIT_CONFIG_ERROR


def test_run_decline_exits_1(tmp_path):
    """Answering no at the gate exits 1 without running anything."""
    catalog = tmp_path / 'one.yaml'
    catalog.write_text(
        "name: one\nversion: '1'\ndescription: One Step Setup\n"
        "steps:\n  - id: tools\n    prompt: Install tools?\n    action: apt.install_packages\n"
        "    params:\n      packages: [vim]\n"
    )

    result = runner.invoke(app, ['run', '--catalog', str(catalog)], input='y\nn\n')

    assert result.exit_code == 1
    assert 'Installation cancelled.' in result.output


def test_run_end_of_input_cancels(tmp_path):
    catalog = tmp_path / 'one.yaml'
    catalog.write_text(
        "name: one\nversion: '1'\ndescription: One Step Setup\n"
        "steps:\n  - id: tools\n    prompt: Install tools?\n    action: apt.install_packages\n"
        "    params:\n      packages: [vim]\n"
    )

    result = runner.invoke(app, ['run', '--catalog', str(catalog)], input='')

    assert result.exit_code == 1
    assert 'Installation cancelled.' in result.output
