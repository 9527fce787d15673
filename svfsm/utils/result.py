"""Result type for explicit error handling.

Parsers and resolvers never raise on bad input. They return ``Ok(value)`` or
``Err(error)`` where the error is one of the immutable error records below,
so a caller always sees the first violation and never a partial result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped type


class ResultError(Exception):
    """Raised when unwrapping a Result fails."""

    pass


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Represents a successful result."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the success value. Safe to call since this is Ok."""
        return self.value

    def unwrap_err(self) -> NoReturn:
        """Get the error value. Raises since this is Ok."""
        raise ResultError(f"Called unwrap_err on Ok value: {self.value}")

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        """Transform the success value."""
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        """Chain another Result-returning operation."""
        return fn(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True)
class Err(Generic[E]):
    """Represents an error result."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Get the success value. Raises since this is Err."""
        raise ResultError(f"Called unwrap on Err value: {self.error}")

    def unwrap_err(self) -> E:
        """Get the error value. Safe to call since this is Err."""
        return self.error

    def map(self, fn: Callable[[T], U]) -> "Err[E]":
        """Transform the success value. No-op for Err."""
        return self

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Err[E]":
        """Chain another Result-returning operation. No-op for Err."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


# Type alias for Result
Result = Union[Ok[T], Err[E]]


# Exit codes
class ExitCode:
    """Exit codes for CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1

    # Input errors (10-19)
    INVALID_STATES = 10
    INVALID_TRANSITIONS = 11

    # Validation errors (20-29)
    STRICT_VALIDATION_FAILED = 20

    # Environment errors (30-39)
    CONFIG_ERROR = 30
    OUTPUT_WRITE_FAILED = 31


def _join(names: tuple[str, ...]) -> str:
    return ", ".join(repr(n) if n == "" else n for n in names)


# Error types for state and transition input
@dataclass(frozen=True)
class FsmError(ABC):
    """Base for every local validation failure of FSM input."""

    exit_code: ClassVar[int] = ExitCode.GENERAL_ERROR

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable description shown to the user."""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class InsufficientStatesError(FsmError):
    """Fewer than two usable state names."""

    found: int = 0

    exit_code: ClassVar[int] = ExitCode.INVALID_STATES

    @property
    def message(self) -> str:
        return "Please enter at least two state names"


@dataclass(frozen=True)
class InvalidIdentifierError(FsmError):
    """One or more state names violate the identifier grammar."""

    names: tuple[str, ...] = ()

    exit_code: ClassVar[int] = ExitCode.INVALID_STATES

    @property
    def message(self) -> str:
        return f"Invalid state names: {_join(self.names)}"


@dataclass(frozen=True)
class MalformedTransitionTokenError(FsmError):
    """A transition token does not match ``source-target``."""

    token: str = ""
    line: int = 0

    exit_code: ClassVar[int] = ExitCode.INVALID_TRANSITIONS

    @property
    def message(self) -> str:
        text = f"Invalid transition format: {self.token}. Use format: source-target"
        if self.line:
            return f"Line {self.line}: {text}"
        return text


@dataclass(frozen=True)
class IndexOutOfRangeError(FsmError):
    """A transition index falls outside ``[1, state_count]``."""

    token: str = ""
    state_count: int = 0

    exit_code: ClassVar[int] = ExitCode.INVALID_TRANSITIONS

    @property
    def message(self) -> str:
        return (
            f"Invalid state number: {self.token}. "
            f"Valid range: 1-{self.state_count}"
        )


@dataclass(frozen=True)
class NoTransitionsError(FsmError):
    """The transition input contains no tokens."""

    exit_code: ClassVar[int] = ExitCode.INVALID_TRANSITIONS

    @property
    def message(self) -> str:
        return "Please enter at least one transition"


@dataclass(frozen=True)
class SourceIndexMismatchError(FsmError):
    """An inline token's source is not the state declared on its line."""

    line: int = 0
    token: str = ""
    state: str = ""

    exit_code: ClassVar[int] = ExitCode.INVALID_TRANSITIONS

    @property
    def message(self) -> str:
        return (
            f"Line {self.line}: transition {self.token} must start from "
            f"state {self.line} ({self.state})"
        )


@dataclass(frozen=True)
class TargetIndexOutOfRangeError(FsmError):
    """An inline token's target index falls outside the declared states."""

    line: int = 0
    token: str = ""
    state_count: int = 0

    exit_code: ClassVar[int] = ExitCode.INVALID_TRANSITIONS

    @property
    def message(self) -> str:
        return (
            f"Line {self.line}: invalid target in {self.token}. "
            f"Valid range: 1-{self.state_count}"
        )


@dataclass(frozen=True)
class StateNotFoundError(FsmError):
    """An inline token names a state that is never declared."""

    name: str = ""
    line: int = 0

    exit_code: ClassVar[int] = ExitCode.INVALID_TRANSITIONS

    @property
    def message(self) -> str:
        return f"Line {self.line}: state not found: {self.name}"


@dataclass(frozen=True)
class DuplicateStateError(FsmError):
    """Strict mode: the same state name is declared more than once."""

    names: tuple[str, ...] = ()

    exit_code: ClassVar[int] = ExitCode.STRICT_VALIDATION_FAILED

    @property
    def message(self) -> str:
        return f"Duplicate state names: {_join(self.names)}"


@dataclass(frozen=True)
class DuplicateFlagError(FsmError):
    """Strict mode: two transitions derive the same flag identifier."""

    flags: tuple[str, ...] = ()

    exit_code: ClassVar[int] = ExitCode.STRICT_VALIDATION_FAILED

    @property
    def message(self) -> str:
        return f"Duplicate transition flags: {_join(self.flags)}"


@dataclass(frozen=True)
class ConfigError:
    """Error in configuration."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"Config error in '{self.field}': {self.message}"


def first_err(results: list[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect a list of Results, returning the first error if any.

    Returns Ok with all values if all are Ok, or Err with the first error.
    """
    values = []

    for result in results:
        if result.is_err():
            return Err(result.unwrap_err())
        values.append(result.unwrap())

    return Ok(values)
