"""
Secure Logging Module
=====================

Provides logging with secret filtering for the configuration builders.

Constructors log scheme names and blob counts only. Every handler installed
here still carries a redacting filter.

Features:
- Automatic secret/sensitive data filtering (pins, passwords, keys)
- Rotating log files with size limits
- Structured (JSON) logging support
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Final, Optional, Pattern

from layercrypt.core.config import LayerCryptConfig, LoggingConfig


_SENSITIVE_PATTERNS: Final[list[tuple[str, Pattern[str]]]] = [
    ("password", re.compile(r'(?i)(password|passwd|pwd)\s*[=:]\s*["\']?[^\s"\',]+["\']?')),
    ("pin", re.compile(r'(?i)\bpins?\s*[=:]\s*["\']?[^\s"\',]+["\']?')),
    ("token", re.compile(r'(?i)(token|bearer)\s*[=:]\s*["\']?[^\s"\',]+["\']?')),
    ("secret", re.compile(r'(?i)(secret|priv(ate)?[_-]?keys?)\s*[=:]\s*["\']?[^\s"\',]+["\']?')),
    # PEM blocks
    ("pem", re.compile(r'-----BEGIN [A-Z0-9 ]+-----[\s\S]*?(-----END [A-Z0-9 ]+-----|$)')),
    # Base64 encoded material (longer than 40 chars)
    ("base64_secret", re.compile(r'[A-Za-z0-9+/]{40,}={0,2}')),
    # Hex encoded material (longer than 32 chars)
    ("hex_secret", re.compile(r'(?i)(?:0x)?[a-f0-9]{32,}')),
]

_REDACTED_TEXT: Final[str] = "[REDACTED]"

PACKAGE_LOGGER_NAME: Final[str] = "layercrypt"

_STRUCTURED_EXTRAS: Final[tuple[str, ...]] = ("scheme", "direction")

_CONSOLE_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_FILE_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"


class SecureLogFilter(logging.Filter):
    """
    Log filter that keeps key material out of log output.

    String messages and arguments are scanned for pins, passwords, private
    keys, PEM blocks and long base64/hex runs. Raw blob arguments (bytes,
    bytearray, memoryview) never reach a formatter; they are replaced by
    their length.
    """

    def __init__(self, name: str = "", additional_patterns: Optional[list[Pattern[str]]] = None) -> None:
        """
        Initialize the secure log filter.

        Args:
            name: Logger name filter (empty string matches all)
            additional_patterns: Additional regex patterns to redact
        """
        super().__init__(name)
        self._additional_patterns = additional_patterns or []

    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize the record in place; it is always kept."""
        if isinstance(record.msg, str):
            record.msg = self._sanitize(record.msg)

        if isinstance(record.args, dict):
            record.args = {k: self._sanitize_arg(v) for k, v in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._sanitize_arg(arg) for arg in record.args)

        return True

    def _sanitize_arg(self, arg: Any) -> Any:
        if isinstance(arg, (bytes, bytearray, memoryview)):
            return f"<{len(arg)} bytes>"
        if isinstance(arg, str):
            return self._sanitize(arg)
        return arg

    def _sanitize(self, text: str) -> str:
        result = text

        for name, pattern in _SENSITIVE_PATTERNS:
            result = pattern.sub(f"{name}={_REDACTED_TEXT}", result)

        for pattern in self._additional_patterns:
            result = pattern.sub(_REDACTED_TEXT, result)

        return result


class StructuredLogFormatter(logging.Formatter):
    """
    JSON formatter for log aggregation.

    Records logged by the constructors carry ``scheme`` and ``direction``
    extras, which are emitted as top-level fields when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for extra in _STRUCTURED_EXTRAS:
            value = getattr(record, extra, None)
            if value is not None:
                log_data[extra] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class SecureRotatingFileHandler(RotatingFileHandler):
    """
    Rotating file handler that validates its path and creates the log
    directory on demand.
    """

    def __init__(
        self,
        filename: str | Path,
        mode: str = "a",
        maxBytes: int = 10 * 1024 * 1024,
        backupCount: int = 5,
        encoding: str = "utf-8",
    ) -> None:
        if ".." in Path(filename).parts:
            raise ValueError("Log path cannot contain path traversal sequences")

        log_path = Path(filename).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        super().__init__(
            str(log_path),
            mode=mode,
            maxBytes=maxBytes,
            backupCount=backupCount,
            encoding=encoding,
        )


def get_secure_logger(
    name: str,
    log_dir: Optional[Path] = None,
    level: str = "WARNING",
    enable_console: bool = True,
    enable_json: bool = False,
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """
    Create a logger with automatic secret filtering.

    Args:
        name: Logger name (typically __name__)
        log_dir: Directory for log files; no file output when None
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Whether to output to stderr
        enable_json: Whether to use JSON format for file output
        max_file_size: Maximum log file size before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper()))

    secure_filter = SecureLogFilter()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        console_handler.addFilter(secure_filter)
        logger.addHandler(console_handler)

    if log_dir:
        log_file = Path(log_dir) / f"{name.replace('.', '_')}.log"

        file_handler = SecureRotatingFileHandler(
            filename=log_file,
            maxBytes=max_file_size,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)

        if enable_json:
            file_handler.setFormatter(StructuredLogFormatter())
        else:
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

        file_handler.addFilter(secure_filter)
        logger.addHandler(file_handler)

    # Only the redacting handlers above see these records
    logger.propagate = False

    return logger


def configure_logging(settings: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Configure the ``layercrypt`` package logger with secure defaults.

    This should be called once at application startup; every
    ``layercrypt.*`` logger propagates to it, and it does not propagate
    further to the root logger. Calling it again replaces the previously
    installed handlers.

    Args:
        settings: Logging settings (defaults to the global LayerCryptConfig)

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    return _logger_from_settings(PACKAGE_LOGGER_NAME, settings)


def get_logger(name: str) -> logging.Logger:
    """
    Create a secure logger configured from the runtime settings.

    Unlike configure_logging, an already configured logger is returned
    as is.

    Args:
        name: Logger name (typically __name__)
    """
    return _logger_from_settings(name, None)


def _logger_from_settings(name: str, settings: Optional[LoggingConfig]) -> logging.Logger:
    if settings is None:
        settings = LayerCryptConfig.get_instance().logging
    return get_secure_logger(
        name,
        log_dir=settings.log_dir,
        level=settings.level,
        enable_console=settings.enable_console,
        enable_json=settings.enable_json,
    )
