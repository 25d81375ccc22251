"""
layercrypt - Encryption Configuration for Container Image Layers
================================================================

Builds immutable configuration bundles for JWE, PKCS#7, GPG and PKCS#11
layer encryption. The bundles are consumed by an external encryption
engine; this package never touches key material beyond copying it.

Security Notice:
- No key material is logged
- Fail-fast constructors, no partial configurations
"""

from layercrypt.core.config import LayerCryptConfig
from layercrypt.core.logging import configure_logging
from layercrypt.cryptoconfig import (
    CryptoConfig,
    DecryptConfig,
    EncryptConfig,
    InvalidArgumentError,
    UnsupportedConfigurationError,
)

__version__ = "0.1.0"

__all__ = [
    "CryptoConfig",
    "DecryptConfig",
    "EncryptConfig",
    "InvalidArgumentError",
    "LayerCryptConfig",
    "UnsupportedConfigurationError",
    "configure_logging",
    "__version__",
]
