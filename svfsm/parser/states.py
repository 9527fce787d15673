"""State list parsing.

Raw input is a ``;``-separated list such as ``IDLE;RUN;DONE``. Blank
segments are dropped, so ``IDLE;;RUN;`` is the same as ``IDLE;RUN``.
"""

from __future__ import annotations

from typing import Iterable, Optional

from svfsm.models import StateList
from svfsm.parser.identifiers import invalid_identifiers
from svfsm.utils.logging import get_logger
from svfsm.utils.result import (
    Err,
    FsmError,
    InsufficientStatesError,
    InvalidIdentifierError,
    Ok,
    Result,
)

logger = get_logger("parser.states")

SEPARATOR = ";"
MIN_STATES = 2


def split_segments(raw: Optional[str], separator: str = SEPARATOR) -> list[str]:
    """Split on ``separator``, trim, and drop empty segments."""
    if not raw:
        return []
    return [segment.strip() for segment in raw.split(separator) if segment.strip()]


def build_state_list(names: Iterable[str]) -> Result[StateList, FsmError]:
    """
    Validate already-split state names.

    The count is checked before the grammar, so a single bad name reports
    as too few states.

    Args:
        names: Candidate state names, in declaration order

    Returns:
        Result with the StateList, or the first violation found
    """
    names = list(names)

    if len(names) < MIN_STATES:
        return Err(InsufficientStatesError(found=len(names)))

    invalid = invalid_identifiers(names)
    if invalid:
        return Err(InvalidIdentifierError(names=tuple(invalid)))

    return Ok(StateList(tuple(names)))


def parse_state_list(raw: Optional[str]) -> Result[StateList, FsmError]:
    """
    Parse a ``;``-separated state list.

    Args:
        raw: User input, e.g. ``"IDLE;RUN;DONE"``

    Returns:
        Ok(StateList), or Err with InsufficientStatesError or
        InvalidIdentifierError
    """
    result = build_state_list(split_segments(raw))

    if result.is_err():
        error = result.unwrap_err()
        logger.info("state_list_rejected", error=error.kind, reason=error.message)
    else:
        logger.debug("state_list_parsed", states=result.unwrap().to_list())

    return result
