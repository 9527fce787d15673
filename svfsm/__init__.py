"""svfsm - SystemVerilog three-block FSM boilerplate generator."""

__version__ = "0.1.0"

from svfsm.generator import (
    GenerationResult,
    flag_name,
    generate_advanced,
    generate_fast,
    generate_inline,
    render,
    render_cyclic,
    render_explicit,
)
from svfsm.models import Flavor, FsmDefinition, StateList, Transition, TransitionSet
from svfsm.parser import (
    is_valid_identifier,
    parse_state_list,
    resolve_cyclic_transitions,
    resolve_index_transitions,
    resolve_inline_transitions,
)

__all__ = [
    "__version__",
    # Models
    "Flavor",
    "FsmDefinition",
    "StateList",
    "Transition",
    "TransitionSet",
    # Parsing
    "is_valid_identifier",
    "parse_state_list",
    "resolve_cyclic_transitions",
    "resolve_index_transitions",
    "resolve_inline_transitions",
    # Generation
    "flag_name",
    "render",
    "render_cyclic",
    "render_explicit",
    "generate_fast",
    "generate_advanced",
    "generate_inline",
    "GenerationResult",
]
