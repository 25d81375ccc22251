"""
Configuration Bundle
====================

Value objects handed to the external encryption engine:

    CryptoConfig
        encrypt_config: EncryptConfig
            parameters        what to encrypt for (recipients, modules...)
            decrypt_config    material to decrypt an existing layer when
                              adding recipients to it
        decrypt_config: DecryptConfig
            parameters        what to decrypt with (keys, certs, modules...)

Both sides are always present. A side that no scheme populated is "not
configured"; ``CryptoConfig.encryption`` and ``CryptoConfig.decryption``
return None for it, while its ``parameters`` is still an empty mapping.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Iterable, Optional

from layercrypt.cryptoconfig.errors import InvalidArgumentError
from layercrypt.cryptoconfig.parameters import ParameterSet
from layercrypt.cryptoconfig.schemes import Direction, Scheme


def _check_directions(schemes: tuple[Scheme, ...], direction: Direction) -> None:
    for scheme in schemes:
        if not isinstance(scheme, Scheme):
            raise InvalidArgumentError(f"Expected a Scheme, got {type(scheme).__name__}")
        if scheme.direction is not direction:
            raise InvalidArgumentError(
                f"{type(scheme).__name__} is a {scheme.direction.value} scheme, "
                f"cannot be used for {direction.value}ion"
            )


def _parameters_of(schemes: Iterable[Scheme]) -> ParameterSet:
    parameters = ParameterSet()
    for scheme in schemes:
        parameters = parameters.merged(scheme.parameters())
    return parameters


@dataclass(frozen=True, slots=True)
class DecryptConfig:
    """
    Material needed to decrypt previously encrypted data.

    Attributes:
        parameters: Scheme parameters keyed by engine parameter name
        schemes: Schemes that produced the parameters, in order
    """

    parameters: ParameterSet = field(default_factory=ParameterSet)
    schemes: tuple[Scheme, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.parameters, ParameterSet):
            object.__setattr__(self, "parameters", ParameterSet(self.parameters))
        object.__setattr__(self, "schemes", tuple(self.schemes))

    @classmethod
    def from_schemes(cls, *schemes: Scheme) -> DecryptConfig:
        """
        Build a decrypt config from decryption schemes.

        Raises:
            InvalidArgumentError: If a scheme is an encryption scheme
        """
        _check_directions(schemes, Direction.DECRYPT)
        return cls(parameters=_parameters_of(schemes), schemes=schemes)

    @property
    def is_configured(self) -> bool:
        """True when a scheme or raw parameters populated this config."""
        return bool(self.schemes) or len(self.parameters) > 0

    def merged(self, other: Optional[DecryptConfig]) -> DecryptConfig:
        """Return a new config holding the parameters of both, self first."""
        if other is None:
            return self
        return DecryptConfig(
            parameters=self.parameters.merged(other.parameters),
            schemes=self.schemes + other.schemes,
        )


@dataclass(frozen=True, slots=True)
class EncryptConfig:
    """
    Material needed to encrypt data for one or more recipients.

    Attributes:
        parameters: Scheme parameters keyed by engine parameter name
        decrypt_config: Decryption material, used when recipients are
            added to data that is already encrypted
        schemes: Schemes that produced the parameters, in order
    """

    parameters: ParameterSet = field(default_factory=ParameterSet)
    decrypt_config: DecryptConfig = field(default_factory=DecryptConfig)
    schemes: tuple[Scheme, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.parameters, ParameterSet):
            object.__setattr__(self, "parameters", ParameterSet(self.parameters))
        if self.decrypt_config is None:
            object.__setattr__(self, "decrypt_config", DecryptConfig())
        object.__setattr__(self, "schemes", tuple(self.schemes))

    @classmethod
    def from_schemes(
        cls,
        *schemes: Scheme,
        decrypt_config: Optional[DecryptConfig] = None,
    ) -> EncryptConfig:
        """
        Build an encrypt config from encryption schemes.

        Raises:
            InvalidArgumentError: If a scheme is a decryption scheme
        """
        _check_directions(schemes, Direction.ENCRYPT)
        return cls(
            parameters=_parameters_of(schemes),
            decrypt_config=decrypt_config or DecryptConfig(),
            schemes=schemes,
        )

    @property
    def is_configured(self) -> bool:
        """True when a scheme or raw parameters populated this config."""
        return bool(self.schemes) or len(self.parameters) > 0

    def with_decrypt_config(self, decrypt_config: Optional[DecryptConfig]) -> EncryptConfig:
        """
        Return a copy whose embedded decrypt config also holds ``decrypt_config``.

        Passing None returns this config unchanged.
        """
        if decrypt_config is None:
            return self
        return dataclasses.replace(
            self, decrypt_config=self.decrypt_config.merged(decrypt_config)
        )

    def merged(self, other: Optional[EncryptConfig]) -> EncryptConfig:
        """Return a new config holding the parameters of both, self first."""
        if other is None:
            return self
        return EncryptConfig(
            parameters=self.parameters.merged(other.parameters),
            decrypt_config=self.decrypt_config.merged(other.decrypt_config),
            schemes=self.schemes + other.schemes,
        )


@dataclass(frozen=True, slots=True)
class CryptoConfig:
    """
    Aggregate of one encrypt config and one decrypt config.

    Either side may be empty, meaning no capability is configured for that
    direction. Use ``encryption`` / ``decryption`` to tell the two apart.
    """

    encrypt_config: EncryptConfig = field(default_factory=EncryptConfig)
    decrypt_config: DecryptConfig = field(default_factory=DecryptConfig)

    def __post_init__(self) -> None:
        if self.encrypt_config is None:
            object.__setattr__(self, "encrypt_config", EncryptConfig())
        if self.decrypt_config is None:
            object.__setattr__(self, "decrypt_config", DecryptConfig())

    @property
    def encryption(self) -> Optional[EncryptConfig]:
        """The encrypt config, or None when encryption is not configured."""
        return self.encrypt_config if self.encrypt_config.is_configured else None

    @property
    def decryption(self) -> Optional[DecryptConfig]:
        """The decrypt config, or None when decryption is not configured."""
        return self.decrypt_config if self.decrypt_config.is_configured else None

    @property
    def is_empty(self) -> bool:
        return self.encryption is None and self.decryption is None


def combine_crypto_configs(configs: Iterable[CryptoConfig]) -> CryptoConfig:
    """
    Combine several bundles into one.

    Three parameter sets are concatenated per key across all bundles: the
    encrypt parameters, the decrypt configs embedded in each encrypt config,
    and the top-level decrypt configs.

    Args:
        configs: Bundles to combine, typically results of the constructors

    Returns:
        A new CryptoConfig; an empty one for an empty input
    """
    encrypt_config = EncryptConfig()
    decrypt_config = DecryptConfig()

    for config in configs:
        if not isinstance(config, CryptoConfig):
            raise InvalidArgumentError(f"Expected a CryptoConfig, got {type(config).__name__}")
        # Also merges the embedded decrypt configs
        encrypt_config = encrypt_config.merged(config.encrypt_config)
        decrypt_config = decrypt_config.merged(config.decrypt_config)

    return CryptoConfig(encrypt_config=encrypt_config, decrypt_config=decrypt_config)
