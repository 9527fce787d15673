"""State and transition input parsing."""

from svfsm.parser.identifiers import invalid_identifiers, is_valid_identifier
from svfsm.parser.states import build_state_list, parse_state_list, split_segments
from svfsm.parser.transitions import (
    resolve_cyclic_transitions,
    resolve_index_transitions,
    resolve_inline_transitions,
)

__all__ = [
    # Identifiers
    "is_valid_identifier",
    "invalid_identifiers",
    # States
    "parse_state_list",
    "build_state_list",
    "split_segments",
    # Transitions
    "resolve_cyclic_transitions",
    "resolve_index_transitions",
    "resolve_inline_transitions",
]
