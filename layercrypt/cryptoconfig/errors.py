"""
CryptoConfig Errors
===================

Constructors fail fast with one of these; no partial configuration is ever
returned.
"""


class CryptoConfigError(Exception):
    """Base class for configuration building failures."""
    pass


class InvalidArgumentError(CryptoConfigError, ValueError):
    """Raised when constructor input is structurally invalid (e.g. paired lengths differ)."""
    pass


class UnsupportedConfigurationError(CryptoConfigError):
    """Raised when input is valid but describes a configuration not supported yet."""
    pass
