"""Configuration module for svfsm."""

from svfsm.config.settings import GeneratorConfig, LoggingConfig, load_config

__all__ = ["GeneratorConfig", "LoggingConfig", "load_config"]
