"""Tests for StepRegistry."""

import pytest

from devsetup.engine.errors import DuplicateIdError
from devsetup.engine.registry import StepRegistry
from devsetup.engine.schema import ActionOutcome, Step


def _step(step_id):
    return Step(id=step_id, prompt=f"{step_id}?", label=step_id, action=lambda: ActionOutcome(True, ''))


def test_register_keeps_insertion_order():
    """all() returns steps in the order they were registered."""
    registry = StepRegistry()
    for step_id in ['zsh', 'docker', 'apt']:
        registry.register(_step(step_id))

    assert [s.id for s in registry.all()] == ['zsh', 'docker', 'apt']


def test_all_is_restartable():
    """Iterating twice yields the same sequence."""
    registry = StepRegistry([_step('a'), _step('b')])

    first = [s.id for s in registry]
    second = [s.id for s in registry]

    assert first == second == ['a', 'b']


def test_duplicate_id_raises():
    """Registering the same id twice is a setup error."""
    registry = StepRegistry([_step('docker')])

    with pytest.raises(DuplicateIdError) as exc_info:
        registry.register(_step('docker'))

    assert exc_info.value.step_id == 'docker'
    assert len(registry) == 1


def test_all_returns_a_copy():
    """Callers cannot change the registry through all()."""
    registry = StepRegistry([_step('a')])

    steps = registry.all()

    assert isinstance(steps, tuple)
    assert len(registry) == 1


def test_get_and_contains():
    """Steps can be looked up by id."""
    registry = StepRegistry([_step('helm')])

    assert 'helm' in registry
    assert 'kubectl' not in registry
    assert registry.get('helm').id == 'helm'
    assert registry.get('kubectl') is None
