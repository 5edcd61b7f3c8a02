"""
Runtime Configuration Module

Provides configuration loading and logging setup.
"""

from .logging_setup import setup_logging, setup_logging_from_config
from .runtime import HashConfig, LoggingConfig, RuntimeConfig

__all__ = [
    "HashConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "setup_logging",
    "setup_logging_from_config",
]
