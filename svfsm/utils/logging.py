"""Structured logging utility with per-request context."""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

import structlog

LOGGER_NAME = "svfsm"

# Context variables for request propagation
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
mode_var: ContextVar[str] = ContextVar("mode", default="")


def set_request_context(request_id: str = "", mode: str = "") -> str:
    """
    Set the generation request context for logging.

    Args:
        request_id: Request ID (a fresh one is generated when empty)
        mode: Generation mode ("fast", "advanced" or "inline")

    Returns:
        The request ID in effect
    """
    request_id_var.set(request_id or str(uuid.uuid4())[:8])
    mode_var.set(mode)
    return request_id_var.get()


def add_context_info(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add request ID and generation mode to log events."""
    rid = request_id_var.get()
    if rid:
        event_dict["request_id"] = rid

    mode = mode_var.get()
    if mode:
        event_dict["mode"] = mode

    return event_dict


def add_timestamp(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add ISO format timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def configure_logging(
    level: str = "info",
    format_type: str = "json",
    stream: Any = None,
) -> None:
    """
    Configure structured logging for the application.

    Log lines go to stderr by default so that stdout only ever carries
    generated HDL.

    Args:
        level: Log level (debug, info, warn, error)
        format_type: Output format ('json' or 'text')
        stream: Output stream (default: sys.stderr)
    """
    if stream is None:
        stream = sys.stderr

    # Map string level to logging constant
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warn": logging.WARNING,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }
    log_level = level_map.get(level.lower(), logging.INFO)

    # structlog renders the line, the stdlib handler writes it
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    std_logger = logging.getLogger(LOGGER_NAME)
    std_logger.handlers = [handler]
    std_logger.setLevel(log_level)
    std_logger.propagate = False

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_context_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format_type == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Optional logger name for context

    Returns:
        Configured structlog logger
    """
    # Bound lazily: module-level loggers follow later configure_logging() calls
    if name:
        return structlog.get_logger(LOGGER_NAME, logger_name=name)
    return structlog.get_logger(LOGGER_NAME)


def log_generation_result(
    mode: str,
    state_count: int,
    transition_count: int,
    warnings: int = 0,
) -> None:
    """Log the outcome of a successful generation request."""
    logger = get_logger("generation")
    logger.info(
        "generation_completed",
        generation_mode=mode,
        states=state_count,
        transitions=transition_count,
        warnings=warnings,
    )


# Library users get quiet defaults; the CLI reconfigures on startup
configure_logging(level="warning")
