"""
Core module - Contains runtime configuration and logging.
"""

from layercrypt.core.config import LayerCryptConfig, LimitsConfig, LoggingConfig
from layercrypt.core.logging import SecureLogFilter, configure_logging, get_logger, get_secure_logger

__all__ = [
    "LayerCryptConfig",
    "LimitsConfig",
    "LoggingConfig",
    "SecureLogFilter",
    "configure_logging",
    "get_logger",
    "get_secure_logger",
]
