"""
Security module - Scheme constants and structural limits.
"""

from layercrypt.security.constants import (
    DEFAULT_MAX_PKCS11_ENCRYPT_MODULES,
    GPG_PRIVATE_KEYS,
    GPG_PRIVATE_KEYS_PASSWORDS,
    GPG_PUBKEYRING_FILE,
    GPG_RECIPIENTS,
    PKCS11_MODULES,
    PKCS11_PINS,
    PRIVKEYS,
    PRIVKEYS_PASSWORDS,
    PUBKEYS,
    X509S,
)

__all__ = [
    "DEFAULT_MAX_PKCS11_ENCRYPT_MODULES",
    "GPG_PRIVATE_KEYS",
    "GPG_PRIVATE_KEYS_PASSWORDS",
    "GPG_PUBKEYRING_FILE",
    "GPG_RECIPIENTS",
    "PKCS11_MODULES",
    "PKCS11_PINS",
    "PRIVKEYS",
    "PRIVKEYS_PASSWORDS",
    "PUBKEYS",
    "X509S",
]
