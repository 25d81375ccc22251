"""
Runtime Configuration Module
============================

Provides immutable, environment-aware settings for the layercrypt library.

These are settings of the library itself (structural limits, logging), not
the per-operation CryptoConfig bundles built in ``layercrypt.cryptoconfig``.

Features:
- Immutable configuration after initialization
- Environment variable override support
- Sensitive-looking keys are never read from the environment
"""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Optional

from layercrypt.security.constants import DEFAULT_MAX_PKCS11_ENCRYPT_MODULES


_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "passwd", "secret", "key", "token", "pin", "credential",
})

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    # Only the leaf name matters; "limits.max_pkcs11_encrypt_modules" is fine
    leaf = key.rsplit(".", 1)[-1]
    parts = set(leaf.lower().split("_"))
    return bool(parts & _SENSITIVE_KEYS)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in _TRUE_VALUES


@dataclass(frozen=True, slots=True)
class LimitsConfig:
    """Immutable structural limits applied by the constructors."""

    # PKCS#11 encryption is experimental and limited to this many modules
    max_pkcs11_encrypt_modules: int = DEFAULT_MAX_PKCS11_ENCRYPT_MODULES

    def __post_init__(self) -> None:
        if self.max_pkcs11_encrypt_modules < 1:
            raise ValueError("max_pkcs11_encrypt_modules must be at least 1")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "WARNING"
    enable_console: bool = True
    log_dir: Optional[Path] = None
    enable_json: bool = False

    def __post_init__(self) -> None:
        """Validate logging settings."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.level}")
        if self.log_dir is not None and not self.log_dir.is_absolute():
            raise ValueError(f"log_dir must be an absolute path: {self.log_dir}")


class LayerCryptConfig:
    """
    Centralized, immutable library settings with environment override support.

    Usage:
        config = LayerCryptConfig.load()
        limit = config.limits.max_pkcs11_encrypt_modules
    """

    __slots__ = ("_limits", "_logging", "_frozen", "_config_hash")

    _instance: Optional[LayerCryptConfig] = None

    def __init__(
        self,
        limits: Optional[LimitsConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ) -> None:
        """Initialize configuration. Use LayerCryptConfig.load() for standard initialization."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_limits", limits or LimitsConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_config_hash", self._compute_hash())
        object.__setattr__(self, "_frozen", True)

    def _compute_hash(self) -> str:
        config_str = f"{self._limits}|{self._logging}"
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @property
    def limits(self) -> LimitsConfig:
        """Get structural limits."""
        return self._limits

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._logging

    @property
    def config_hash(self) -> str:
        """Get configuration identification hash."""
        return self._config_hash

    @classmethod
    def load(cls, env_prefix: str = "LAYERCRYPT") -> LayerCryptConfig:
        """
        Load configuration with environment variable overrides.

        Environment variables are prefixed with LAYERCRYPT_ and use double
        underscores for nested values.

        Examples:
            LAYERCRYPT_LOGGING__LEVEL=DEBUG
            LAYERCRYPT_LIMITS__MAX_PKCS11_ENCRYPT_MODULES=2

        Args:
            env_prefix: Prefix for environment variables (default: LAYERCRYPT)

        Returns:
            Configured LayerCryptConfig instance

        Raises:
            ValueError: If an override has an invalid value
        """
        env_overrides = cls._parse_env_overrides(env_prefix)

        limits_kwargs: dict[str, Any] = {}
        if "limits.max_pkcs11_encrypt_modules" in env_overrides:
            limits_kwargs["max_pkcs11_encrypt_modules"] = int(
                env_overrides["limits.max_pkcs11_encrypt_modules"]
            )

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"].upper()
        if "logging.enable_console" in env_overrides:
            logging_kwargs["enable_console"] = _parse_bool(env_overrides["logging.enable_console"])
        if "logging.log_dir" in env_overrides:
            logging_kwargs["log_dir"] = Path(env_overrides["logging.log_dir"])
        if "logging.enable_json" in env_overrides:
            logging_kwargs["enable_json"] = _parse_bool(env_overrides["logging.enable_json"])

        return cls(
            limits=LimitsConfig(**limits_kwargs) if limits_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(prefix: str) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"

        for key, value in os.environ.items():
            if key.startswith(prefix_upper):
                # LAYERCRYPT_SECTION__KEY -> section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")

                if _is_sensitive_key(config_key):
                    continue

                overrides[config_key] = value

        return overrides

    @classmethod
    def get_instance(cls) -> LayerCryptConfig:
        """
        Get or create the process-wide configuration instance.

        Returns:
            The global LayerCryptConfig instance
        """
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Use only for testing."""
        cls._instance = None

    def __repr__(self) -> str:
        return (
            f"LayerCryptConfig(hash={self._config_hash}, "
            f"max_pkcs11_encrypt_modules={self._limits.max_pkcs11_encrypt_modules})"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if hasattr(self, "_frozen") and self._frozen:
            raise AttributeError("LayerCryptConfig is immutable after initialization")
        super().__setattr__(name, value)
