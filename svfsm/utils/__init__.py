"""Utility modules for svfsm."""

from svfsm.utils.atomic import AtomicWriteError, atomic_write, atomic_write_text
from svfsm.utils.logging import (
    configure_logging,
    get_logger,
    log_generation_result,
    set_request_context,
)
from svfsm.utils.result import Err, ExitCode, Ok, Result, ResultError

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "set_request_context",
    "log_generation_result",
    # Atomic writes
    "AtomicWriteError",
    "atomic_write",
    "atomic_write_text",
    # Result
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ExitCode",
]
