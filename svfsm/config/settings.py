"""Centralized configuration for the FSM generator.

Configuration can be loaded from a YAML file, overridden from the
environment and validated before any input is parsed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from svfsm.utils.result import ConfigError, Err, Ok, Result

# Looked up in the working directory when no --config is given
DEFAULT_CONFIG_FILE = "svfsm.yaml"

LOG_LEVELS = ("debug", "info", "warn", "warning", "error")
LOG_FORMATS = ("json", "text")

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class GeneratorConfig:
    """
    Complete generator configuration.

    Attributes:
        strict: Reject duplicate state names and colliding transition flags
            instead of rendering them
        include_state_map: Prefix explicit-mode output with a ``// 1: IDLE``
            comment table
        logging: Logging settings
    """

    strict: bool = False
    include_state_map: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> Result["GeneratorConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Any) -> Result["GeneratorConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration mapping

        Returns:
            Result with loaded config or error
        """
        if not isinstance(data, dict):
            return Err(ConfigError(
                field="root",
                message=f"Expected a mapping, got {type(data).__name__}",
            ))

        logging_data = data.get("logging") or {}
        if not isinstance(logging_data, dict):
            return Err(ConfigError(
                field="logging",
                message=f"Expected a mapping, got {type(logging_data).__name__}",
            ))

        for name in ("strict", "include_state_map"):
            if name in data and not isinstance(data[name], bool):
                return Err(ConfigError(
                    field=name,
                    message=f"Must be true or false, got {data[name]!r}",
                ))

        config = cls(
            strict=data.get("strict", False),
            include_state_map=data.get("include_state_map", False),
            logging=LoggingConfig(
                level=str(logging_data.get("level", "info")).lower(),
                format=str(logging_data.get("format", "json")).lower(),
            ),
        )
        return Ok(config)

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if self.logging.level not in LOG_LEVELS:
            return Err(ConfigError(
                field="logging.level",
                message=f"Must be one of {', '.join(LOG_LEVELS)}, got {self.logging.level}",
            ))
        if self.logging.format not in LOG_FORMATS:
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be one of {', '.join(LOG_FORMATS)}, got {self.logging.format}",
            ))
        return Ok(None)

    def with_overrides(
        self,
        strict: Optional[bool] = None,
        include_state_map: Optional[bool] = None,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
    ) -> "GeneratorConfig":
        """
        Return a new config with command-line overrides applied.

        ``None`` leaves the corresponding value untouched.
        """
        return GeneratorConfig(
            strict=self.strict if strict is None else strict,
            include_state_map=(
                self.include_state_map if include_state_map is None else include_state_map
            ),
            logging=LoggingConfig(
                level=(log_level or self.logging.level).lower(),
                format=(log_format or self.logging.format).lower(),
            ),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "strict": self.strict,
            "include_state_map": self.include_state_map,
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
            },
        }


def _parse_bool_env(name: str, value: str) -> Result[bool, ConfigError]:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return Ok(True)
    if lowered in _FALSE_VALUES:
        return Ok(False)
    return Err(ConfigError(
        field=name,
        message=f"Must be a boolean flag, got {value!r}",
    ))


def apply_env_overrides(config: GeneratorConfig) -> Result[GeneratorConfig, ConfigError]:
    """
    Apply ``SVFSM_*`` environment variables on top of a loaded config.

    Recognized variables: ``SVFSM_STRICT``, ``SVFSM_STATE_MAP`` and
    ``SVFSM_LOG_LEVEL``.
    """
    strict = None
    include_state_map = None

    if "SVFSM_STRICT" in os.environ:
        result = _parse_bool_env("SVFSM_STRICT", os.environ["SVFSM_STRICT"])
        if result.is_err():
            return result
        strict = result.unwrap()

    if "SVFSM_STATE_MAP" in os.environ:
        result = _parse_bool_env("SVFSM_STATE_MAP", os.environ["SVFSM_STATE_MAP"])
        if result.is_err():
            return result
        include_state_map = result.unwrap()

    return Ok(config.with_overrides(
        strict=strict,
        include_state_map=include_state_map,
        log_level=os.environ.get("SVFSM_LOG_LEVEL") or None,
    ))


def load_config(path: Optional[Path] = None) -> Result[GeneratorConfig, ConfigError]:
    """
    Load configuration from the standard location.

    An explicit ``path`` must exist. Without one, ``./svfsm.yaml`` is used
    when present, otherwise the built-in defaults. Environment overrides are
    applied last, then the result is validated.

    Args:
        path: Optional path to a YAML configuration file

    Returns:
        Result with loaded config or error
    """
    if path is not None:
        result = GeneratorConfig.from_yaml(Path(path))
    elif Path(DEFAULT_CONFIG_FILE).exists():
        result = GeneratorConfig.from_yaml(Path(DEFAULT_CONFIG_FILE))
    else:
        result = Ok(GeneratorConfig())

    if result.is_err():
        return result

    result = apply_env_overrides(result.unwrap())
    if result.is_err():
        return result

    config = result.unwrap()
    validation_result = config.validate()
    if validation_result.is_err():
        return Err(validation_result.unwrap_err())

    return Ok(config)
