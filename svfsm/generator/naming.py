"""Transition flag naming."""

from __future__ import annotations

from typing import Iterable

from svfsm.models import Transition


def flag_name_for(source: str, target: str) -> str:
    """Flag identifier for a raw ``source -> target`` pair, e.g. ``idle2run``."""
    return f"{source.lower()}2{target.lower()}"


def flag_name(transition: Transition) -> str:
    """
    Flag identifier for a transition.

    Case-insensitive in both names, so ``A -> B`` and ``a -> B`` share the
    flag ``a2b``. Collisions are not resolved here.
    """
    return flag_name_for(transition.source, transition.target)


def flag_names(transitions: Iterable[Transition]) -> list[str]:
    """One flag per transition, in order, duplicates kept."""
    return [flag_name(t) for t in transitions]
