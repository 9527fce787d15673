"""Identifier grammar shared by state names."""

from __future__ import annotations

import re
from typing import Iterable

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_valid_identifier(name: str) -> bool:
    """Return True if ``name`` is a non-empty legal identifier."""
    if not isinstance(name, str) or not name:
        return False
    return IDENTIFIER_PATTERN.fullmatch(name) is not None


def invalid_identifiers(names: Iterable[str]) -> list[str]:
    """Names that fail the identifier grammar, in input order."""
    return [name for name in names if not is_valid_identifier(name)]
