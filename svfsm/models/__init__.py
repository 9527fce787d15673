"""Data models for svfsm."""

from svfsm.models.fsm import (
    Flavor,
    FsmDefinition,
    StateList,
    Transition,
    TransitionSet,
)

__all__ = [
    "Flavor",
    "FsmDefinition",
    "StateList",
    "Transition",
    "TransitionSet",
]
