"""
Scheme Constants
================

Parameter key names shared with the external encryption engine, plus the
default structural limits. The key names are a wire contract with the
engine and must not change.
"""

from typing import Final

# JWE (envelope encryption)
PUBKEYS: Final[str] = "pubkeys"

# PKCS#7 recipients and X.509 decryption share the same key
X509S: Final[str] = "x509s"

# GPG
GPG_RECIPIENTS: Final[str] = "gpg-recipients"
GPG_PUBKEYRING_FILE: Final[str] = "gpg-pubkeyringfile"
GPG_PRIVATE_KEYS: Final[str] = "gpg-privatekeys"
GPG_PRIVATE_KEYS_PASSWORDS: Final[str] = "gpg-privatekeys-passwords"

# Private keys
PRIVKEYS: Final[str] = "privkeys"
PRIVKEYS_PASSWORDS: Final[str] = "privkeys-passwords"

# PKCS#11
PKCS11_MODULES: Final[str] = "modules"
PKCS11_PINS: Final[str] = "pins"

# Experimental: PKCS#11 encryption only supports a single module for now
DEFAULT_MAX_PKCS11_ENCRYPT_MODULES: Final[int] = 1
