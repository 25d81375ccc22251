"""
Parameter Sets
==============

A parameter set maps a scheme-defined key (``"pubkeys"``, ``"modules"``...)
to an ordered tuple of opaque blobs. It is the shape the external
encryption engine pattern-matches on.

Properties:
    - Immutable: input sequences and blobs are copied on construction
    - Order of blobs under a key is preserved
    - Deep structural equality and hashing
    - Representation never shows blob contents
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional

from layercrypt.cryptoconfig.errors import InvalidArgumentError
from layercrypt.utils.validators import (
    ValidationError,
    validate_blob_sequence,
    validate_parameter_name,
)


class ParameterSet(Mapping[str, tuple[bytes, ...]]):
    """
    Immutable mapping of parameter name to an ordered tuple of blobs.

    Usage:
        params = ParameterSet({"modules": [b"/usr/lib/softhsm.so"], "pins": [b"1234"]})
        params["modules"]        # (b"/usr/lib/softhsm.so",)
        params.as_dict()         # {"modules": [...], "pins": [...]}
    """

    __slots__ = ("_data",)

    def __init__(self, values: Optional[Mapping[str, Any]] = None) -> None:
        """
        Build a parameter set from a mapping of name to blob sequence.

        Raises:
            InvalidArgumentError: If a name is not a string or a value is
                not a sequence of bytes-like blobs
        """
        data: dict[str, tuple[bytes, ...]] = {}
        try:
            for name, blobs in (values or {}).items():
                validate_parameter_name(name)
                data[name] = validate_blob_sequence(blobs, field_name=name)
        except ValidationError as e:
            raise InvalidArgumentError(str(e)) from e
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> tuple[bytes, ...]:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParameterSet):
            return self._data == other._data
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._data.items()))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ParameterSet is immutable")

    def __reduce__(self) -> tuple[Any, ...]:
        return (ParameterSet, (self._data,))

    def __repr__(self) -> str:
        """Safe representation without exposing key material."""
        # name[count] form survives the log redaction patterns intact
        counts = ", ".join(f"{name}[{len(blobs)}]" for name, blobs in self._data.items())
        return f"ParameterSet({counts})"

    def blob_count(self) -> int:
        """Total number of blobs across all parameters."""
        return sum(len(blobs) for blobs in self._data.values())

    def merged(self, other: Optional[Mapping[str, Any]]) -> ParameterSet:
        """
        Return a new set combining this one with ``other``.

        Sequences under a shared key are concatenated, this set's blobs
        first. Keys present in only one side are carried over as is.
        """
        if not other:
            return self
        if not isinstance(other, ParameterSet):
            other = ParameterSet(other)
        if not self._data:
            return other

        combined: dict[str, tuple[bytes, ...]] = dict(self._data)
        for name, blobs in other.items():
            combined[name] = combined.get(name, ()) + blobs
        return ParameterSet(combined)

    def as_dict(self) -> dict[str, list[bytes]]:
        """Return a mutable copy for engines that expect plain lists."""
        return {name: list(blobs) for name, blobs in self._data.items()}

