"""Tests for Result and the error records."""

import pytest

from svfsm.utils.result import (
    Err,
    ExitCode,
    FsmError,
    IndexOutOfRangeError,
    InvalidIdentifierError,
    MalformedTransitionTokenError,
    Ok,
    ResultError,
    StateNotFoundError,
    first_err,
)


class TestResult:
    def test_ok(self):
        result = Ok(3)
        assert result.is_ok() and not result.is_err()
        assert result.unwrap() == 3
        assert result.map(lambda v: v + 1).unwrap() == 4
        assert result.and_then(lambda v: Err("boom")).unwrap_err() == "boom"
        with pytest.raises(ResultError):
            result.unwrap_err()

    def test_err(self):
        result = Err("boom")
        assert result.is_err()
        assert result.map(lambda v: v + 1) is result
        with pytest.raises(ResultError):
            result.unwrap()

    def test_first_err_collects_values(self):
        assert first_err([Ok(1), Ok(2)]).unwrap() == [1, 2]

    def test_first_err_stops_at_first_error(self):
        assert first_err([Ok(1), Err("a"), Err("b")]).unwrap_err() == "a"


class TestErrors:
    def test_errors_are_immutable_and_comparable(self):
        assert InvalidIdentifierError(names=("1A",)) == InvalidIdentifierError(names=("1A",))
        with pytest.raises(AttributeError):
            InvalidIdentifierError(names=("1A",)).names = ()

    def test_base_error_is_abstract(self):
        with pytest.raises(TypeError):
            FsmError()

    def test_kind_and_str(self):
        error = IndexOutOfRangeError(token="4-1", state_count=3)
        assert error.kind == "IndexOutOfRangeError"
        assert str(error) == "Invalid state number: 4-1. Valid range: 1-3"

    def test_line_prefix(self):
        assert MalformedTransitionTokenError(token="x").message.startswith("Invalid")
        assert MalformedTransitionTokenError(token="x", line=2).message.startswith("Line 2: ")
        assert StateNotFoundError(name="GO", line=3).message == "Line 3: state not found: GO"

    def test_exit_codes(self):
        assert InvalidIdentifierError(names=()).exit_code == ExitCode.INVALID_STATES
        assert IndexOutOfRangeError(token="", state_count=2).exit_code == ExitCode.INVALID_TRANSITIONS
