"""Tests for CatalogLoader - YAML loading and validation."""

import pytest

from devsetup.engine.context import SetupContext
from devsetup.engine.errors import CatalogError
from devsetup.engine.loader import CATALOG_DIR, DEFAULT_CATALOG, CatalogLoader
from devsetup.engine.runner import MockActionRunner
from devsetup.engine.schema import ActionOutcome, Catalog
from devsetup.steps import ACTIONS


@pytest.fixture
def sample_catalog_yaml(tmp_path):
    """Create a sample catalog YAML file."""
    content = """
name: sample
version: "1.0"
description: Sample Setup
automatic:
  - id: system_update
    label: Updating apt packages
    action: apt.update
steps:
  - id: dev_tools
    prompt: Install development tools?
    label: Installing dev tools
    action: apt.install_packages
    params:
      packages: [vim, git]
  - id: helm
    prompt: Install Helm?
    action: binaries.install_helm
    params:
      script_url: https://example.invalid/get-helm-3
"""
    path = tmp_path / 'sample.yaml'
    path.write_text(content)
    return path


@pytest.fixture
def context(tmp_path):
    return SetupContext(target_user='dev', home=tmp_path, work_dir=tmp_path)


def test_load_catalog_from_path(sample_catalog_yaml):
    """Loader parses and validates a catalog file."""
    catalog = CatalogLoader().load_catalog(sample_catalog_yaml)

    assert isinstance(catalog, Catalog)
    assert catalog.name == 'sample'
    assert [s.id for s in catalog.steps] == ['dev_tools', 'helm']
    assert catalog.steps[0].params == {'packages': ['vim', 'git']}


def test_label_defaults_from_id(sample_catalog_yaml):
    catalog = CatalogLoader().load_catalog(sample_catalog_yaml)

    assert catalog.steps[1].display_label == 'helm'


def test_load_catalog_by_name(sample_catalog_yaml):
    loader = CatalogLoader(base_path=sample_catalog_yaml.parent)

    assert loader.load_catalog('sample').name == 'sample'


def test_default_catalog_is_bundled():
    loader = CatalogLoader()

    assert loader.resolve() == CATALOG_DIR / f"{DEFAULT_CATALOG}.yaml"
    assert loader.load_catalog().name == DEFAULT_CATALOG


def test_missing_catalog(tmp_path):
    with pytest.raises(CatalogError, match='not found'):
        CatalogLoader(base_path=tmp_path).load_catalog('nope')


def test_invalid_yaml(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text("name: [unclosed\n")

    with pytest.raises(CatalogError, match='not valid YAML'):
        CatalogLoader().load_catalog(path)


def test_non_mapping_catalog(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text("- just\n- a list\n")

    with pytest.raises(CatalogError, match='mapping'):
        CatalogLoader().load_catalog(path)


def test_unknown_field_rejected(tmp_path):
    """Typos in step definitions fail validation."""
    path = tmp_path / 'typo.yaml'
    path.write_text(
        "name: t\nversion: '1'\ndescription: d\n"
        "steps:\n  - id: a\n    prompt: A?\n    action: apt.update\n    parmas: {}\n"
    )

    with pytest.raises(CatalogError, match='failed validation'):
        CatalogLoader().load_catalog(path)


def test_selectable_step_needs_prompt(tmp_path):
    path = tmp_path / 'noprompt.yaml'
    path.write_text("name: t\nversion: '1'\ndescription: d\nsteps:\n  - id: a\n    action: apt.update\n")

    with pytest.raises(CatalogError, match='needs a prompt'):
        CatalogLoader().load_catalog(path)


def test_build_binds_actions(sample_catalog_yaml, context):
    """Bound steps are zero-argument callables carrying params and context."""
    calls = []

    def fake_install(ctx, runner, packages):
        calls.append((ctx, packages))
        return ActionOutcome(True, '')

    loader = CatalogLoader()
    catalog = loader.load_catalog(sample_catalog_yaml)
    actions = dict(ACTIONS, **{'apt.install_packages': fake_install})

    automatic, registry = loader.build(catalog, context, MockActionRunner(), actions)

    assert [s.id for s in automatic] == ['system_update']
    assert [s.id for s in registry.all()] == ['dev_tools', 'helm']
    step = registry.get('dev_tools')
    assert step.label == 'Installing dev tools'
    assert step.prompt == 'Install development tools?'
    assert step.action() == ActionOutcome(True, '')
    assert calls == [(context, ['vim', 'git'])]


def test_build_unknown_action(sample_catalog_yaml, context):
    loader = CatalogLoader()
    catalog = loader.load_catalog(sample_catalog_yaml)

    with pytest.raises(CatalogError, match='unknown action'):
        loader.build(catalog, context, MockActionRunner(), {})
