"""
Tests for the identifier grammar
================================
"""

import pytest

from svfsm.parser import invalid_identifiers, is_valid_identifier


class TestIsValidIdentifier:
    """Legal names follow [A-Za-z_][A-Za-z0-9_]*."""

    @pytest.mark.parametrize("name", ["IDLE", "idle", "_tmp", "S0", "a_b_1", "_"])
    def test_accepts_legal_names(self, name):
        assert is_valid_identifier(name) is True

    @pytest.mark.parametrize(
        "name",
        ["", "1BAD", "HAS SPACE", "dash-ed", "dot.ted", "semi;", "IDLE\n", "ÄRGER"],
    )
    def test_rejects_illegal_names(self, name):
        assert is_valid_identifier(name) is False

    def test_rejects_non_strings(self):
        """Non-string input is never an identifier."""
        assert is_valid_identifier(None) is False
        assert is_valid_identifier(12) is False


class TestInvalidIdentifiers:
    def test_returns_offenders_in_order(self):
        assert invalid_identifiers(["OK", "1A", "B", "2B"]) == ["1A", "2B"]

    def test_empty_when_all_valid(self):
        assert invalid_identifiers(["A", "B"]) == []
