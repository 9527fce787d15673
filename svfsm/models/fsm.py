"""Data models for state lists, transitions and FSM definitions.

All models are immutable and built fresh for every generation request.
Order is significant everywhere: the first state is the reset/default
state, and transition order is the priority order of the generated
``if / else if`` chain.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator


class Flavor(Enum):
    """Rendering flavor, one per generation path."""

    CYCLIC = "cyclic"  # Fast mode, ring topology
    EXPLICIT = "explicit"  # Advanced mode, caller-supplied edges


@dataclass(frozen=True)
class StateList:
    """
    Ordered sequence of validated state names.

    Duplicates are kept positionally. Index 0 is the reset state.
    """

    names: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __getitem__(self, index: int) -> str:
        return self.names[index]

    @property
    def reset_state(self) -> str:
        """The state loaded on reset and in the ``default`` arm."""
        return self.names[0]

    def at(self, position: int) -> str:
        """Look up a state by its 1-based position."""
        if position < 1 or position > len(self.names):
            raise IndexError(f"State position {position} outside 1-{len(self.names)}")
        return self.names[position - 1]

    def position_of(self, name: str) -> int:
        """1-based position of the first state with this name, or 0."""
        for position, state in enumerate(self.names, start=1):
            if state == name:
                return position
        return 0

    def mapping(self) -> list[str]:
        """Numbered state table, e.g. ``["1: IDLE", "2: RUN"]``."""
        return [f"{i}: {name}" for i, name in enumerate(self.names, start=1)]

    def describe(self) -> str:
        """One-line state mapping, e.g. ``1 = IDLE, 2 = RUN``."""
        return ", ".join(
            f"{i} = {name}" for i, name in enumerate(self.names, start=1)
        )

    def to_list(self) -> list[str]:
        return list(self.names)


@dataclass(frozen=True)
class Transition:
    """
    A directed edge from one state to another (self-loops allowed).

    ``source_index`` is the 1-based position of the source entry in its
    StateList, so repeated names keep separate case arms. 0 means the
    edge was built by name only and belongs to the first entry with that
    name.
    """

    source: str
    target: str
    source_index: int = field(default=0, compare=False)


@dataclass(frozen=True)
class TransitionSet:
    """Ordered transitions; earlier entries take priority."""

    transitions: tuple[Transition, ...] = ()

    def __len__(self) -> int:
        return len(self.transitions)

    def __iter__(self) -> Iterator[Transition]:
        return iter(self.transitions)

    def __getitem__(self, index: int) -> Transition:
        return self.transitions[index]

    @classmethod
    def from_positions(
        cls,
        states: StateList,
        positions: Iterable[tuple[int, int]],
    ) -> "TransitionSet":
        """Build from 1-based ``(source, target)`` positions into ``states``."""
        return cls(tuple(
            Transition(states.at(source), states.at(target), source_index=source)
            for source, target in positions
        ))

    def from_source(self, state: str) -> list[Transition]:
        """Outgoing transitions of every entry named ``state``, in priority order."""
        return [t for t in self.transitions if t.source == state]

    def from_position(self, states: StateList, position: int) -> list[Transition]:
        """Outgoing transitions of the state entry at 1-based ``position``."""
        return [
            t for t in self.transitions
            if (t.source_index or states.position_of(t.source)) == position
        ]

    def pairs(self) -> list[tuple[str, str]]:
        """``(source, target)`` name pairs, in priority order."""
        return [(t.source, t.target) for t in self.transitions]


@dataclass(frozen=True)
class FsmDefinition:
    """Everything the renderer needs for one generation request."""

    states: StateList
    transitions: TransitionSet
    flavor: Flavor = Flavor.EXPLICIT

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "flavor": self.flavor.value,
            "states": self.states.to_list(),
            "reset_state": self.states.reset_state,
            "transitions": [
                {"source": t.source, "target": t.target} for t in self.transitions
            ],
        }
