"""Shared fixtures for svfsm tests."""

import pytest

from svfsm.models import StateList, Transition, TransitionSet


@pytest.fixture
def abc_states():
    """Three states, A is the reset state."""
    return StateList(("A", "B", "C"))


@pytest.fixture
def abc_transitions():
    """A->B, B->C, B->A: B fans out with b2c taking priority."""
    return TransitionSet((
        Transition("A", "B"),
        Transition("B", "C"),
        Transition("B", "A"),
    ))


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep ./svfsm.yaml and SVFSM_* variables out of every test."""
    monkeypatch.chdir(tmp_path)
    for name in ("SVFSM_STRICT", "SVFSM_STATE_MAP", "SVFSM_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
