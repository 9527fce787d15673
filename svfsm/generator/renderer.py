"""SystemVerilog renderer for three-block FSMs.

Renders, from a StateList and a TransitionSet:

1. ``typedef enum`` with one entry per state
2. ``typedef struct packed`` with one ``logic`` flag per transition
3. ``always_comb`` block ``transition_condition_gen``
4. ``always_comb`` block ``state_transition`` with an ``if / else if``
   chain per state in transition order
5. ``always_ff`` block ``state_register`` on ``clk`` / active-low ``rst_n``

Rendering is a pure function of its inputs and never fails.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from svfsm.generator.naming import flag_name, flag_names
from svfsm.models import Flavor, FsmDefinition, StateList, TransitionSet
from svfsm.utils.logging import get_logger

logger = get_logger("generator.renderer")

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

TEMPLATE_NAMES = {
    Flavor.CYCLIC: "fsm_cyclic.sv.j2",
    Flavor.EXPLICIT: "fsm_explicit.sv.j2",
}


class HdlRenderer:
    """Renders FSM definitions through the packaged Jinja2 templates."""

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        include_state_map: bool = False,
    ) -> None:
        """
        Initialize the renderer.

        Args:
            templates_dir: Directory containing the ``.sv.j2`` templates
            include_state_map: Prefix explicit-flavor output with a numbered
                ``// 1: IDLE`` state table
        """
        self.templates_dir = Path(templates_dir or DEFAULT_TEMPLATES_DIR)
        self.include_state_map = include_state_map

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(
        self,
        states: StateList,
        transitions: TransitionSet,
        flavor: Union[Flavor, str] = Flavor.EXPLICIT,
    ) -> str:
        """
        Render the full FSM skeleton.

        Args:
            states: Ordered states; the first is the reset state
            transitions: Ordered transitions; order is branch priority
            flavor: ``cyclic`` or ``explicit`` boilerplate

        Returns:
            SystemVerilog source text
        """
        flavor = Flavor(flavor)
        template = self.env.get_template(TEMPLATE_NAMES[flavor])
        code = template.render(self._prepare_context(states, transitions))

        logger.debug(
            "render_completed",
            flavor=flavor.value,
            states=len(states),
            transitions=len(transitions),
            lines=code.count("\n"),
        )
        return code

    def render_definition(self, definition: FsmDefinition) -> str:
        """Render an FsmDefinition with its own flavor."""
        return self.render(definition.states, definition.transitions, definition.flavor)

    def _prepare_context(
        self,
        states: StateList,
        transitions: TransitionSet,
    ) -> dict[str, Any]:
        """Prepare the template context."""
        # One arm per state entry; a repeated name only gets its own edges
        arms = [
            {
                "state": state,
                "edges": [
                    {"flag": flag_name(t), "target": t.target}
                    for t in transitions.from_position(states, position)
                ],
            }
            for position, state in enumerate(states, start=1)
        ]

        return {
            "states": list(states),
            "reset_state": states.reset_state,
            "flags": flag_names(transitions),
            "arms": arms,
            "state_map": states.mapping() if self.include_state_map else [],
        }


_renderers: dict[bool, HdlRenderer] = {}


def _get_renderer(include_state_map: bool) -> HdlRenderer:
    if include_state_map not in _renderers:
        _renderers[include_state_map] = HdlRenderer(include_state_map=include_state_map)
    return _renderers[include_state_map]


def render(
    states: StateList,
    transitions: TransitionSet,
    flavor: Union[Flavor, str] = Flavor.EXPLICIT,
    include_state_map: bool = False,
) -> str:
    """Render with the packaged templates."""
    return _get_renderer(include_state_map).render(states, transitions, flavor)


def render_cyclic(states: StateList, transitions: TransitionSet) -> str:
    """Render with fast-mode boilerplate."""
    return render(states, transitions, Flavor.CYCLIC)


def render_explicit(
    states: StateList,
    transitions: TransitionSet,
    include_state_map: bool = False,
) -> str:
    """Render with advanced-mode boilerplate."""
    return render(states, transitions, Flavor.EXPLICIT, include_state_map)
