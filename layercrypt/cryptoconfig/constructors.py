"""
CryptoConfig Constructors
=========================

One constructor per key-management scheme. Each returns a CryptoConfig
with exactly one side populated:

    encrypt_with_*   encrypt side populated, decrypt side empty
    decrypt_with_*   decrypt side populated, encrypt parameters empty

Decrypt bundles also embed their decrypt config in the encrypt config, so
the bundle can be used to add recipients to a layer it is able to decrypt.

Constructors are pure: they copy their input, perform structural checks
only and raise before returning anything on failure.

Example:
    cc = encrypt_with_pkcs11(
        modules=[b"/usr/local/lib/softhsm/libsofthsm2.so"],
        pins=[b"1234"],
    )
    cc.encrypt_config.parameters["modules"]
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sized

from layercrypt.core.config import LayerCryptConfig
from layercrypt.cryptoconfig.errors import InvalidArgumentError, UnsupportedConfigurationError
from layercrypt.cryptoconfig.model import CryptoConfig, DecryptConfig, EncryptConfig
from layercrypt.cryptoconfig.schemes import (
    Blobs,
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
)
from layercrypt.utils.validators import ValidationError, validate_paired_lengths


_log = logging.getLogger("layercrypt.cryptoconfig")

# Label used for bundles built from raw parameter mappings
RAW_PARAMETERS_KIND = "parameters"


def _require_paired(first: Sized, second: Sized, first_name: str, second_name: str) -> None:
    try:
        validate_paired_lengths(first, second, first_name, second_name)
    except ValidationError as e:
        raise InvalidArgumentError(str(e)) from e


def _log_extra(scheme: Scheme) -> dict[str, str]:
    return {"scheme": scheme.kind, "direction": scheme.direction.value}


def _warn_unpaired(scheme: Scheme, first: Sized, second: Sized, first_name: str, second_name: str) -> None:
    # Pairing is only reported on these decrypt paths, never enforced
    if len(first) != len(second):
        _log.warning(
            "%s decrypt config has %d %s but %d %s; pairing is not enforced",
            scheme.kind, len(first), first_name, len(second), second_name,
            extra=_log_extra(scheme),
        )


def _pkcs11_module_limit(max_modules: Optional[int]) -> int:
    if max_modules is None:
        return LayerCryptConfig.get_instance().limits.max_pkcs11_encrypt_modules
    if max_modules < 1:
        raise InvalidArgumentError("max_modules must be at least 1")
    return max_modules


def _validate_encrypt_scheme(scheme: Scheme, max_modules: Optional[int]) -> None:
    if isinstance(scheme, Pkcs11Recipients):
        _require_paired(scheme.modules, scheme.pins, "modules", "pins")

        # TODO: lift once PKCS#11 encryption supports several modules
        limit = _pkcs11_module_limit(max_modules)
        if not scheme.modules:
            raise UnsupportedConfigurationError("PKCS#11 encryption requires a module")
        if len(scheme.modules) > limit:
            raise UnsupportedConfigurationError(
                f"Experimental PKCS#11 encryption supports at most {limit} module(s), "
                f"got {len(scheme.modules)}"
            )


def _validate_decrypt_scheme(scheme: Scheme) -> None:
    if isinstance(scheme, PrivateKeys):
        _require_paired(scheme.privkeys, scheme.passwords, "privkeys", "passwords")
    elif isinstance(scheme, GpgPrivateKeys):
        _warn_unpaired(scheme, scheme.privkeys, scheme.passwords, "privkeys", "passwords")
    elif isinstance(scheme, Pkcs11Modules):
        _warn_unpaired(scheme, scheme.modules, scheme.pins, "modules", "pins")


def encrypt_with_scheme(scheme: Scheme, *, max_modules: Optional[int] = None) -> CryptoConfig:
    """
    Build a bundle that encrypts with the given scheme.

    Args:
        scheme: An encryption scheme variant (or a CustomScheme)
        max_modules: PKCS#11 module limit, defaults to the runtime setting

    Returns:
        CryptoConfig with the encrypt side populated and an empty decrypt side

    Raises:
        InvalidArgumentError: Decryption scheme, or paired lengths differ
        UnsupportedConfigurationError: PKCS#11 module count not supported
    """
    if not isinstance(scheme, Scheme) or scheme.direction is not Direction.ENCRYPT:
        raise InvalidArgumentError(f"{type(scheme).__name__} is not an encryption scheme")
    _validate_encrypt_scheme(scheme, max_modules)

    config = CryptoConfig(
        encrypt_config=EncryptConfig.from_schemes(scheme),
        decrypt_config=DecryptConfig(),
    )
    _log.debug(
        "Built encrypt config for %s: %r", scheme.kind, config.encrypt_config.parameters,
        extra=_log_extra(scheme),
    )
    return config


def decrypt_with_scheme(scheme: Scheme) -> CryptoConfig:
    """
    Build a bundle that decrypts with the given scheme.

    Returns:
        CryptoConfig with the decrypt side populated and empty encrypt
        parameters; the encrypt config embeds the same decrypt config

    Raises:
        InvalidArgumentError: Encryption scheme, or private keys and
            passwords differ in length
    """
    if not isinstance(scheme, Scheme) or scheme.direction is not Direction.DECRYPT:
        raise InvalidArgumentError(f"{type(scheme).__name__} is not a decryption scheme")
    _validate_decrypt_scheme(scheme)

    decrypt_config = DecryptConfig.from_schemes(scheme)
    config = CryptoConfig(
        encrypt_config=EncryptConfig(decrypt_config=decrypt_config),
        decrypt_config=decrypt_config,
    )
    _log.debug(
        "Built decrypt config for %s: %r", scheme.kind, decrypt_config.parameters,
        extra=_log_extra(scheme),
    )
    return config


def encrypt_with_jwe(pubkeys: Blobs) -> CryptoConfig:
    """Return a CryptoConfig to encrypt with JWE public keys."""
    return encrypt_with_scheme(JweRecipients(pubkeys))


def encrypt_with_pkcs7(x509s: Blobs) -> CryptoConfig:
    """Return a CryptoConfig to encrypt with PKCS#7 for X.509 certificates."""
    return encrypt_with_scheme(Pkcs7Recipients(x509s))


def encrypt_with_gpg(gpg_recipients: Blobs, gpg_pubkeyring: bytes) -> CryptoConfig:
    """Return a CryptoConfig to encrypt for GPG recipients found in a public keyring."""
    return encrypt_with_scheme(GpgRecipients(gpg_recipients, gpg_pubkeyring))


def encrypt_with_pkcs11(
    modules: Blobs,
    pins: Blobs,
    *,
    max_modules: Optional[int] = None,
) -> CryptoConfig:
    """
    Return a CryptoConfig to encrypt with PKCS#11 modules.

    ``pins[i]`` unlocks ``modules[i]``. The length check runs before the
    module count check.

    Args:
        modules: Module paths, e.g. ``b"/usr/local/lib/softhsm/libsofthsm2.so"``
        pins: One pin per module
        max_modules: Module limit (defaults to
            ``limits.max_pkcs11_encrypt_modules``, which is 1)

    Raises:
        InvalidArgumentError: If modules and pins differ in length
        UnsupportedConfigurationError: If no module or more modules than
            the limit are given
    """
    return encrypt_with_scheme(Pkcs11Recipients(modules, pins), max_modules=max_modules)


def decrypt_with_priv_keys(privkeys: Blobs, privkeys_passwords: Blobs) -> CryptoConfig:
    """
    Return a CryptoConfig to decrypt with private keys.

    Passwords pair positionally with keys; use ``b""`` for keys without one.

    Raises:
        InvalidArgumentError: If the two sequences differ in length
    """
    return decrypt_with_scheme(PrivateKeys(privkeys, privkeys_passwords))


def decrypt_with_x509s(x509s: Blobs) -> CryptoConfig:
    """Return a CryptoConfig to decrypt with X.509 certificates."""
    return decrypt_with_scheme(X509Certificates(x509s))


def decrypt_with_gpg_priv_keys(gpg_privkeys: Blobs, gpg_privkeys_passwords: Blobs) -> CryptoConfig:
    """Return a CryptoConfig to decrypt with GPG private keys."""
    return decrypt_with_scheme(GpgPrivateKeys(gpg_privkeys, gpg_privkeys_passwords))


def decrypt_with_pkcs11(modules: Blobs, pins: Blobs) -> CryptoConfig:
    """Return a CryptoConfig to decrypt with PKCS#11 modules."""
    return decrypt_with_scheme(Pkcs11Modules(modules, pins))


def init_encryption(
    parameters: Mapping[str, Blobs],
    decrypt_parameters: Optional[Mapping[str, Blobs]] = None,
) -> CryptoConfig:
    """
    Build an encryption bundle from raw engine parameters.

    Args:
        parameters: Encrypt parameters, passed to the engine unchanged
        decrypt_parameters: Parameters needed to decrypt the existing layer
            when adding recipients to it

    Returns:
        CryptoConfig whose encrypt config embeds ``decrypt_parameters``
    """
    scheme = CustomScheme(RAW_PARAMETERS_KIND, Direction.ENCRYPT, parameters)
    config = encrypt_with_scheme(scheme)
    if decrypt_parameters:
        dc = DecryptConfig.from_schemes(
            CustomScheme(RAW_PARAMETERS_KIND, Direction.DECRYPT, decrypt_parameters)
        )
        config = CryptoConfig(
            encrypt_config=config.encrypt_config.with_decrypt_config(dc),
            decrypt_config=config.decrypt_config,
        )
    return config


def init_decryption(parameters: Mapping[str, Blobs]) -> CryptoConfig:
    """Build a decryption bundle from raw engine parameters."""
    return decrypt_with_scheme(CustomScheme(RAW_PARAMETERS_KIND, Direction.DECRYPT, parameters))
