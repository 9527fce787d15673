"""FSM code generation pipeline.

Each entry point runs one request start to finish:
parse states -> resolve transitions -> validate -> render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from svfsm.config.settings import GeneratorConfig
from svfsm.generator.naming import flag_name, flag_name_for, flag_names
from svfsm.generator.renderer import (
    HdlRenderer,
    render,
    render_cyclic,
    render_explicit,
)
from svfsm.generator.validator import (
    DefinitionValidator,
    ValidationResult,
    validate_definition,
)
from svfsm.models import Flavor, FsmDefinition
from svfsm.parser import (
    parse_state_list,
    resolve_cyclic_transitions,
    resolve_index_transitions,
    resolve_inline_transitions,
)
from svfsm.utils.logging import get_logger, log_generation_result, set_request_context
from svfsm.utils.result import Err, FsmError, Ok, Result

logger = get_logger("generator")


@dataclass
class GenerationResult:
    """Result of one generation request."""

    definition: FsmDefinition
    code: str
    warnings: list[str] = field(default_factory=list)

    @property
    def state_mapping(self) -> str:
        """One-line numbering of the states, e.g. ``1 = IDLE, 2 = RUN``."""
        return self.definition.states.describe()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            **self.definition.to_dict(),
            "flags": flag_names(self.definition.transitions),
            "warnings": list(self.warnings),
        }


def _reject(error: FsmError) -> Err:
    logger.warning("generation_rejected", error=error.kind, reason=error.message)
    return Err(error)


def _finish(
    mode: str,
    definition: FsmDefinition,
    config: GeneratorConfig,
) -> Result[GenerationResult, FsmError]:
    validation = validate_definition(definition, strict=config.strict)
    if validation.has_errors:
        return _reject(validation.first_error)

    renderer = HdlRenderer(include_state_map=config.include_state_map)
    code = renderer.render_definition(definition)

    log_generation_result(
        mode=mode,
        state_count=len(definition.states),
        transition_count=len(definition.transitions),
        warnings=len(validation.warnings),
    )
    return Ok(GenerationResult(
        definition=definition,
        code=code,
        warnings=validation.warnings,
    ))


def generate_fast(
    state_input: str,
    config: Optional[GeneratorConfig] = None,
) -> Result[GenerationResult, FsmError]:
    """
    Fast mode: each state transitions to the next, the last wraps around.

    Args:
        state_input: ``;``-separated state names
        config: Generator configuration (defaults when omitted)

    Returns:
        Result with the GenerationResult or the first input error
    """
    config = config or GeneratorConfig()
    set_request_context(mode="fast")
    logger.info("generation_started", state_input=state_input)

    definition = parse_state_list(state_input).map(
        lambda states: FsmDefinition(
            states=states,
            transitions=resolve_cyclic_transitions(states),
            flavor=Flavor.CYCLIC,
        )
    )
    if definition.is_err():
        return _reject(definition.unwrap_err())

    return _finish("fast", definition.unwrap(), config)


def generate_advanced(
    state_input: str,
    transition_input: str,
    config: Optional[GeneratorConfig] = None,
) -> Result[GenerationResult, FsmError]:
    """
    Advanced mode: explicit ``source-target`` index pairs.

    Args:
        state_input: ``;``-separated state names
        transition_input: ``;``-separated 1-based pairs, e.g. ``"1-2;2-1"``
        config: Generator configuration (defaults when omitted)

    Returns:
        Result with the GenerationResult or the first input error
    """
    config = config or GeneratorConfig()
    set_request_context(mode="advanced")
    logger.info(
        "generation_started",
        state_input=state_input,
        transition_input=transition_input,
    )

    definition = parse_state_list(state_input).and_then(
        lambda states: resolve_index_transitions(transition_input, states).map(
            lambda transitions: FsmDefinition(
                states=states,
                transitions=transitions,
                flavor=Flavor.EXPLICIT,
            )
        )
    )
    if definition.is_err():
        return _reject(definition.unwrap_err())

    return _finish("advanced", definition.unwrap(), config)


def generate_inline(
    declarations: str,
    config: Optional[GeneratorConfig] = None,
) -> Result[GenerationResult, FsmError]:
    """
    Inline mode: one ``NAME;src-tgt;...`` declaration per line.

    Args:
        declarations: Multi-line declaration text
        config: Generator configuration (defaults when omitted)

    Returns:
        Result with the GenerationResult or the first input error
    """
    config = config or GeneratorConfig()
    set_request_context(mode="inline")
    logger.info("generation_started", lines=len((declarations or "").splitlines()))

    definition = resolve_inline_transitions(declarations).map(
        lambda resolved: FsmDefinition(
            states=resolved[0],
            transitions=resolved[1],
            flavor=Flavor.EXPLICIT,
        )
    )
    if definition.is_err():
        return _reject(definition.unwrap_err())

    return _finish("inline", definition.unwrap(), config)


__all__ = [
    # Pipeline
    "generate_fast",
    "generate_advanced",
    "generate_inline",
    "GenerationResult",
    # Naming
    "flag_name",
    "flag_name_for",
    "flag_names",
    # Renderer
    "HdlRenderer",
    "render",
    "render_cyclic",
    "render_explicit",
    # Validator
    "DefinitionValidator",
    "ValidationResult",
    "validate_definition",
]
