"""
Key-Management Schemes
======================

One immutable variant per key-management method. Each variant has typed
fields, knows whether it configures encryption or decryption, and renders
itself into the ``ParameterSet`` keys the engine understands:

    JweRecipients       encrypt   pubkeys
    Pkcs7Recipients     encrypt   x509s
    GpgRecipients       encrypt   gpg-recipients, gpg-pubkeyringfile
    Pkcs11Recipients    encrypt   modules, pins
    PrivateKeys         decrypt   privkeys, privkeys-passwords
    X509Certificates    decrypt   x509s
    GpgPrivateKeys      decrypt   gpg-privatekeys, gpg-privatekeys-passwords
    Pkcs11Modules       decrypt   modules, pins
    CustomScheme        either    caller-defined keys

Variants only normalise their input. Pairing and count rules are enforced
by the constructors in ``layercrypt.cryptoconfig.constructors``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterable, Mapping, Union

from layercrypt.cryptoconfig.errors import InvalidArgumentError
from layercrypt.cryptoconfig.parameters import ParameterSet
from layercrypt.security import constants
from layercrypt.utils.validators import ValidationError, validate_blob, validate_blob_sequence


class Direction(Enum):
    """Which side of a CryptoConfig a scheme populates."""
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


Blobs = Iterable[Union[bytes, bytearray, memoryview]]


def _normalize(scheme: Any, *field_names: str) -> None:
    """Replace the named fields of a frozen variant with immutable blob tuples."""
    try:
        for name in field_names:
            object.__setattr__(scheme, name, validate_blob_sequence(getattr(scheme, name), name))
    except ValidationError as e:
        raise InvalidArgumentError(str(e)) from e


class Scheme(ABC):
    """Abstract base of all key-management variants."""

    __slots__ = ()

    kind: ClassVar[str]
    direction: ClassVar[Direction]

    @abstractmethod
    def parameters(self) -> ParameterSet:
        """Render the variant into engine parameter names."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parameters()!r})"


@dataclass(frozen=True, slots=True, repr=False)
class JweRecipients(Scheme):
    """Envelope encryption for the holders of the given public keys."""

    kind: ClassVar[str] = "jwe"
    direction: ClassVar[Direction] = Direction.ENCRYPT

    pubkeys: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _normalize(self, "pubkeys")

    def parameters(self) -> ParameterSet:
        return ParameterSet({constants.PUBKEYS: self.pubkeys})


@dataclass(frozen=True, slots=True, repr=False)
class Pkcs7Recipients(Scheme):
    """Encryption for the holders of the given X.509 certificates."""

    kind: ClassVar[str] = "pkcs7"
    direction: ClassVar[Direction] = Direction.ENCRYPT

    x509s: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _normalize(self, "x509s")

    def parameters(self) -> ParameterSet:
        return ParameterSet({constants.X509S: self.x509s})


@dataclass(frozen=True, slots=True, repr=False)
class GpgRecipients(Scheme):
    """
    Encryption for GPG recipients.

    Attributes:
        recipients: Recipient identifiers (e-mail addresses or key ids)
        pubkeyring: Contents of the public keyring holding their keys
    """

    kind: ClassVar[str] = "gpg"
    direction: ClassVar[Direction] = Direction.ENCRYPT

    recipients: tuple[bytes, ...] = ()
    pubkeyring: bytes = b""

    def __post_init__(self) -> None:
        _normalize(self, "recipients")
        try:
            object.__setattr__(
                self, "pubkeyring",
                validate_blob(b"" if self.pubkeyring is None else self.pubkeyring, "pubkeyring"),
            )
        except ValidationError as e:
            raise InvalidArgumentError(str(e)) from e

    def parameters(self) -> ParameterSet:
        # The keyring is always passed as a single-blob list
        return ParameterSet({
            constants.GPG_RECIPIENTS: self.recipients,
            constants.GPG_PUBKEYRING_FILE: (self.pubkeyring,),
        })


@dataclass(frozen=True, slots=True, repr=False)
class Pkcs11Recipients(Scheme):
    """Encryption through PKCS#11 modules; ``pins[i]`` unlocks ``modules[i]``."""

    kind: ClassVar[str] = "pkcs11"
    direction: ClassVar[Direction] = Direction.ENCRYPT

    modules: tuple[bytes, ...] = ()
    pins: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _normalize(self, "modules", "pins")

    def parameters(self) -> ParameterSet:
        return ParameterSet({
            constants.PKCS11_MODULES: self.modules,
            constants.PKCS11_PINS: self.pins,
        })


@dataclass(frozen=True, slots=True, repr=False)
class PrivateKeys(Scheme):
    """Decryption with private keys; ``passwords[i]`` (possibly empty) unlocks ``privkeys[i]``."""

    kind: ClassVar[str] = "privkeys"
    direction: ClassVar[Direction] = Direction.DECRYPT

    privkeys: tuple[bytes, ...] = ()
    passwords: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _normalize(self, "privkeys", "passwords")

    def parameters(self) -> ParameterSet:
        return ParameterSet({
            constants.PRIVKEYS: self.privkeys,
            constants.PRIVKEYS_PASSWORDS: self.passwords,
        })


@dataclass(frozen=True, slots=True, repr=False)
class X509Certificates(Scheme):
    """Certificates needed alongside private keys to decrypt PKCS#7 layers."""

    kind: ClassVar[str] = "x509"
    direction: ClassVar[Direction] = Direction.DECRYPT

    x509s: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _normalize(self, "x509s")

    def parameters(self) -> ParameterSet:
        return ParameterSet({constants.X509S: self.x509s})


@dataclass(frozen=True, slots=True, repr=False)
class GpgPrivateKeys(Scheme):
    """Decryption with GPG private keys and their passwords."""

    kind: ClassVar[str] = "gpg-privkeys"
    direction: ClassVar[Direction] = Direction.DECRYPT

    privkeys: tuple[bytes, ...] = ()
    passwords: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _normalize(self, "privkeys", "passwords")

    def parameters(self) -> ParameterSet:
        return ParameterSet({
            constants.GPG_PRIVATE_KEYS: self.privkeys,
            constants.GPG_PRIVATE_KEYS_PASSWORDS: self.passwords,
        })


@dataclass(frozen=True, slots=True, repr=False)
class Pkcs11Modules(Scheme):
    """Decryption through PKCS#11 modules and their pins."""

    kind: ClassVar[str] = "pkcs11"
    direction: ClassVar[Direction] = Direction.DECRYPT

    modules: tuple[bytes, ...] = ()
    pins: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        _normalize(self, "modules", "pins")

    def parameters(self) -> ParameterSet:
        return ParameterSet({
            constants.PKCS11_MODULES: self.modules,
            constants.PKCS11_PINS: self.pins,
        })


@dataclass(frozen=True, slots=True, repr=False)
class CustomScheme(Scheme):
    """
    Escape hatch for experimental schemes the typed variants do not cover.

    Attributes:
        kind: Free-form scheme label used in logs
        direction: Side of the configuration the values populate
        values: Parameter name to blob list, passed to the engine unchanged
    """

    kind: str
    direction: Direction
    values: ParameterSet = field(default_factory=ParameterSet)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, str) or not self.kind:
            raise InvalidArgumentError("CustomScheme kind must be a non-empty string")
        if not isinstance(self.direction, Direction):
            raise InvalidArgumentError(f"Invalid scheme direction: {self.direction!r}")
        if not isinstance(self.values, ParameterSet):
            object.__setattr__(self, "values", ParameterSet(self.values))

    def parameters(self) -> ParameterSet:
        return self.values


def custom_scheme(kind: str, direction: Direction, values: Mapping[str, Blobs]) -> CustomScheme:
    """Build a CustomScheme from a plain name to blob-list mapping."""
    return CustomScheme(kind=kind, direction=direction, values=ParameterSet(values))
