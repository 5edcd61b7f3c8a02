"""
Runtime Configuration

Central configuration for hashing and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from append_merkle.crypto.hashing import DEFAULT_ALGORITHM, Hasher
from append_merkle.schemas.errors import ConfigException, HashAlgorithmException

load_dotenv()

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class HashConfig:
    """Configuration for the tree's hash capability."""
    algorithm: str = DEFAULT_ALGORITHM

    def build_hasher(self) -> Hasher:
        """
        Create the Hasher this config describes.

        Raises:
            ConfigException: If the algorithm cannot back a Hasher.
        """
        try:
            return Hasher(self.algorithm)
        except HashAlgorithmException as e:
            raise ConfigException(
                e.message,
                field_path="hash.algorithm",
                details=e.details,
            ) from e


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "WARNING"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        self.level = str(self.level).upper()
        if self.level not in _LOG_LEVELS:
            raise ConfigException(
                f"Unknown log level: {self.level!r}",
                field_path="logging.level",
                details={"allowed": list(_LOG_LEVELS)},
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a .env file is read on import)
    - YAML file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - APPEND_MERKLE_HASH_ALGORITHM: hashlib algorithm name
        - APPEND_MERKLE_LOG_LEVEL: DEBUG/INFO/WARNING/ERROR/CRITICAL
        - APPEND_MERKLE_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv("APPEND_MERKLE_HASH_ALGORITHM"):
            overrides.setdefault("hash", {})["algorithm"] = os.getenv(
                "APPEND_MERKLE_HASH_ALGORITHM"
            )
        if os.getenv("APPEND_MERKLE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("APPEND_MERKLE_LOG_LEVEL")
        if os.getenv("APPEND_MERKLE_LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv("APPEND_MERKLE_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigException(
                f"Config file must contain a mapping, got {type(data).__name__}",
                details={"path": str(path)},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hash_data = data.get("hash") or {}
        logging_data = data.get("logging") or {}

        try:
            hash_config = HashConfig(**hash_data)
            logging_config = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigException(f"Invalid configuration: {e}") from e

        return cls(
            hash=hash_config,
            logging=logging_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "hash" in overrides:
            for key, value in overrides["hash"].items():
                setattr(new_config.hash, key, value)

        if "logging" in overrides:
            new_config.logging = LoggingConfig(
                **{**vars(new_config.logging), **overrides["logging"]}
            )

        return new_config

    def build_hasher(self) -> Hasher:
        """Create the Hasher for trees built under this config."""
        return self.hash.build_hasher()
