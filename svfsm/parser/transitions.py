"""Transition resolution strategies.

Three interchangeable ways to turn input into an ordered TransitionSet:

- cyclic: every state moves to the next one, the last wraps to the first
- index: ``"1-2;2-3;2-1"`` pairs of 1-based positions into a StateList
- inline: one ``NAME;src-tgt;...`` declaration per line, states and
  transitions together

Every resolver reports the first violation it finds and never returns a
partial result.
"""

from __future__ import annotations

import re
from typing import Optional

from svfsm.models import StateList, Transition, TransitionSet
from svfsm.parser.states import SEPARATOR, build_state_list, split_segments
from svfsm.utils.logging import get_logger
from svfsm.utils.result import (
    Err,
    FsmError,
    IndexOutOfRangeError,
    MalformedTransitionTokenError,
    NoTransitionsError,
    Ok,
    Result,
    SourceIndexMismatchError,
    StateNotFoundError,
    TargetIndexOutOfRangeError,
    first_err,
)

logger = get_logger("parser.transitions")

INDEX_TOKEN_PATTERN = re.compile(r"([0-9]+)-([0-9]+)")
INLINE_TOKEN_PATTERN = re.compile(r"([A-Za-z0-9_]+)-([A-Za-z0-9_]+)")


def resolve_cyclic_transitions(states: StateList) -> TransitionSet:
    """
    Build the ring ``states[i] -> states[(i + 1) % n]``.

    Always yields exactly ``len(states)`` transitions.
    """
    count = len(states)
    transitions = TransitionSet.from_positions(
        states,
        ((position, position % count + 1) for position in range(1, count + 1)),
    )
    logger.debug("transitions_resolved", strategy="cyclic", transitions=transitions.pairs())
    return transitions


def _parse_index_token(token: str, state_count: int) -> Result[tuple[int, int], FsmError]:
    match = INDEX_TOKEN_PATTERN.fullmatch(token)
    if match is None:
        return Err(MalformedTransitionTokenError(token=token))

    source, target = int(match.group(1)), int(match.group(2))
    if not (1 <= source <= state_count and 1 <= target <= state_count):
        return Err(IndexOutOfRangeError(token=token, state_count=state_count))

    return Ok((source, target))


def resolve_index_transitions(
    raw: Optional[str],
    states: StateList,
) -> Result[TransitionSet, FsmError]:
    """
    Resolve ``source-target`` index pairs against a state list.

    Args:
        raw: User input, e.g. ``"1-2;2-3;2-1"``
        states: The already-parsed state list

    Returns:
        Ok(TransitionSet) in token order, or Err with
        MalformedTransitionTokenError, IndexOutOfRangeError or
        NoTransitionsError
    """
    tokens = split_segments(raw)
    if not tokens:
        return Err(NoTransitionsError())

    result = first_err([_parse_index_token(token, len(states)) for token in tokens])
    if result.is_err():
        error = result.unwrap_err()
        logger.info("transitions_rejected", strategy="index", error=error.kind, reason=error.message)
        return result

    transitions = TransitionSet.from_positions(states, result.unwrap())
    logger.debug("transitions_resolved", strategy="index", transitions=transitions.pairs())
    return Ok(transitions)


def _declaration_lines(raw: Optional[str]) -> list[list[str]]:
    """Split each non-blank line into its ``;`` fields, first field kept as-is."""
    lines = []
    for line in (raw or "").splitlines():
        if not line.strip():
            continue
        fields = [f.strip() for f in line.split(SEPARATOR)]
        lines.append([fields[0]] + [f for f in fields[1:] if f])
    return lines


def _resolve_inline_token(
    token: str,
    line_number: int,
    states: StateList,
) -> Result[Transition, FsmError]:
    match = INLINE_TOKEN_PATTERN.fullmatch(token)
    if match is None:
        return Err(MalformedTransitionTokenError(token=token, line=line_number))

    source_ref, target_ref = match.group(1), match.group(2)

    # Names must be declared somewhere before positions are checked
    for ref in (source_ref, target_ref):
        if not ref.isdigit() and states.position_of(ref) == 0:
            return Err(StateNotFoundError(name=ref, line=line_number))

    declared = states.at(line_number)
    if source_ref.isdigit():
        source_ok = int(source_ref) == line_number
    else:
        source_ok = source_ref == declared
    if not source_ok:
        return Err(SourceIndexMismatchError(line=line_number, token=token, state=declared))

    if target_ref.isdigit():
        target_position = int(target_ref)
        if not 1 <= target_position <= len(states):
            return Err(TargetIndexOutOfRangeError(
                line=line_number,
                token=token,
                state_count=len(states),
            ))
        target = states.at(target_position)
    else:
        target = target_ref

    return Ok(Transition(declared, target, source_index=line_number))


def resolve_inline_transitions(
    raw: Optional[str],
) -> Result[tuple[StateList, TransitionSet], FsmError]:
    """
    Resolve inline declarations, one state per line.

    Each line reads ``NAME[;src-tgt;src-tgt...]``. The first pass collects
    every line's NAME as the state list, in line order. The second pass
    resolves tokens: either side may be a 1-based line position or a
    declared state name, the source must be the declaring line's own state,
    and numeric targets must fall inside ``[1, line_count]``.

    Example:
        IDLE;1-2
        RUN;2-1;RUN-RUN

    Returns:
        Ok((StateList, TransitionSet)), or Err with the first violation
    """
    lines = _declaration_lines(raw)

    states_result = build_state_list(fields[0] for fields in lines)
    if states_result.is_err():
        error = states_result.unwrap_err()
        logger.info("transitions_rejected", strategy="inline", error=error.kind, reason=error.message)
        return states_result
    states = states_result.unwrap()

    transitions: list[Transition] = []
    for line_number, fields in enumerate(lines, start=1):
        for token in fields[1:]:
            result = _resolve_inline_token(token, line_number, states)
            if result.is_err():
                error = result.unwrap_err()
                logger.info(
                    "transitions_rejected",
                    strategy="inline",
                    error=error.kind,
                    reason=error.message,
                )
                return result
            transitions.append(result.unwrap())

    transition_set = TransitionSet(tuple(transitions))
    logger.debug(
        "transitions_resolved",
        strategy="inline",
        states=len(states),
        transitions=transition_set.pairs(),
    )
    return Ok((states, transition_set))
