"""
layercrypt CryptoConfig
=======================

Builds the configuration bundle that tells an external engine how to
encrypt or decrypt container image layers.

Schemes:
    - JWE public keys (encrypt)
    - PKCS#7 / X.509 certificates (encrypt and decrypt)
    - GPG recipients and private keys (encrypt and decrypt)
    - PKCS#11 modules (encrypt and decrypt)
    - Private keys (decrypt)

No cryptographic operation happens here. Constructors validate structure
(sequence pairing, module count) and nothing else.
"""

from layercrypt.cryptoconfig.constructors import (
    decrypt_with_gpg_priv_keys,
    decrypt_with_pkcs11,
    decrypt_with_priv_keys,
    decrypt_with_scheme,
    decrypt_with_x509s,
    encrypt_with_gpg,
    encrypt_with_jwe,
    encrypt_with_pkcs11,
    encrypt_with_pkcs7,
    encrypt_with_scheme,
    init_decryption,
    init_encryption,
)
from layercrypt.cryptoconfig.errors import (
    CryptoConfigError,
    InvalidArgumentError,
    UnsupportedConfigurationError,
)
from layercrypt.cryptoconfig.model import (
    CryptoConfig,
    DecryptConfig,
    EncryptConfig,
    combine_crypto_configs,
)
from layercrypt.cryptoconfig.parameters import ParameterSet
from layercrypt.cryptoconfig.schemes import (
    CustomScheme,
    Direction,
    GpgPrivateKeys,
    GpgRecipients,
    JweRecipients,
    Pkcs11Modules,
    Pkcs11Recipients,
    Pkcs7Recipients,
    PrivateKeys,
    Scheme,
    X509Certificates,
    custom_scheme,
)

__all__ = [
    # Constructors
    "encrypt_with_jwe",
    "encrypt_with_pkcs7",
    "encrypt_with_gpg",
    "encrypt_with_pkcs11",
    "encrypt_with_scheme",
    "decrypt_with_priv_keys",
    "decrypt_with_x509s",
    "decrypt_with_gpg_priv_keys",
    "decrypt_with_pkcs11",
    "decrypt_with_scheme",
    "init_encryption",
    "init_decryption",
    "combine_crypto_configs",
    # Model
    "CryptoConfig",
    "EncryptConfig",
    "DecryptConfig",
    "ParameterSet",
    # Schemes
    "Scheme",
    "Direction",
    "JweRecipients",
    "Pkcs7Recipients",
    "GpgRecipients",
    "Pkcs11Recipients",
    "PrivateKeys",
    "X509Certificates",
    "GpgPrivateKeys",
    "Pkcs11Modules",
    "CustomScheme",
    "custom_scheme",
    # Errors
    "CryptoConfigError",
    "InvalidArgumentError",
    "UnsupportedConfigurationError",
]
