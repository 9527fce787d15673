"""Optional checks on a resolved FSM definition.

By default duplicate state names and colliding flags are rendered as-is.
Strict mode turns them into errors. Structural oddities (unreachable
states, states with no way out) are only ever reported as warnings.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from svfsm.generator.naming import flag_names
from svfsm.models import Flavor, FsmDefinition
from svfsm.utils.logging import get_logger
from svfsm.utils.result import DuplicateFlagError, DuplicateStateError, FsmError

logger = get_logger("generator.validator")


@dataclass
class ValidationResult:
    """Result of validating a definition."""

    errors: list[FsmError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def first_error(self) -> Optional[FsmError]:
        return self.errors[0] if self.errors else None


class DefinitionValidator:
    """
    Validates an FsmDefinition before rendering.

    Performs:
    - Duplicate state name detection (error in strict mode)
    - Duplicate flag name detection (error in strict mode)
    - Reachability from the reset state (warning)
    - States without outgoing transitions in explicit mode (warning)
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def validate(self, definition: FsmDefinition) -> ValidationResult:
        """
        Validate a definition.

        Args:
            definition: States, transitions and flavor to check

        Returns:
            ValidationResult with any errors and warnings found
        """
        result = ValidationResult()

        duplicate_states = _duplicates(definition.states)
        if duplicate_states:
            if self.strict:
                result.errors.append(DuplicateStateError(names=duplicate_states))
            else:
                result.warnings.append(
                    f"Duplicate state names: {', '.join(duplicate_states)}"
                )

        duplicate_flags = _duplicates(flag_names(definition.transitions))
        if duplicate_flags:
            if self.strict:
                result.errors.append(DuplicateFlagError(flags=duplicate_flags))
            else:
                result.warnings.append(
                    f"Duplicate transition flags: {', '.join(duplicate_flags)}"
                )

        for state in self._unreachable_states(definition):
            result.warnings.append(f"State {state} is unreachable from {definition.states.reset_state}")

        if definition.flavor is Flavor.EXPLICIT:
            for position, state in enumerate(definition.states, start=1):
                if definition.transitions.from_position(definition.states, position):
                    continue
                warning = f"State {state} has no outgoing transitions"
                if warning not in result.warnings:
                    result.warnings.append(warning)

        if result.has_errors:
            logger.warning(
                "strict_validation_failed",
                errors=[str(e) for e in result.errors],
            )
        elif result.warnings:
            logger.info("validation_warnings", warnings=result.warnings)
        else:
            logger.debug("validation_passed", states=len(definition.states))

        return result

    def _unreachable_states(self, definition: FsmDefinition) -> list[str]:
        """States not reachable from the reset state, in declaration order."""
        reset = definition.states.reset_state
        reached = {reset}
        frontier = [reset]

        while frontier:
            state = frontier.pop()
            for transition in definition.transitions.from_source(state):
                if transition.target not in reached:
                    reached.add(transition.target)
                    frontier.append(transition.target)

        unreachable = []
        for state in definition.states:
            if state not in reached and state not in unreachable:
                unreachable.append(state)
        return unreachable


def _duplicates(names) -> tuple[str, ...]:
    """Names seen more than once, in order of first appearance."""
    counts = Counter(names)
    return tuple(name for name in counts if counts[name] > 1)


def validate_definition(definition: FsmDefinition, strict: bool = False) -> ValidationResult:
    """
    Validate a definition.

    Args:
        definition: The definition to check
        strict: Treat duplicate states and flags as errors

    Returns:
        ValidationResult
    """
    return DefinitionValidator(strict=strict).validate(definition)
