"""
Validation Utilities
====================

Structural validation of the binary blobs handed to the configuration
constructors. Nothing here inspects blob contents.
"""

from __future__ import annotations

from typing import Any, Iterable, Sized


_BLOB_TYPES = (bytes, bytearray, memoryview)


class ValidationError(ValueError):
    """Raised when validation fails."""
    pass


def validate_blob(value: Any, field_name: str = "value") -> bytes:
    """
    Validate a single opaque blob and return an immutable copy.

    Args:
        value: bytes, bytearray or memoryview
        field_name: Name of the field for error messages

    Returns:
        The blob as ``bytes``

    Raises:
        ValidationError: If the value is not bytes-like
    """
    if not isinstance(value, _BLOB_TYPES):
        raise ValidationError(
            f"{field_name} must contain bytes-like blobs, got {type(value).__name__}"
        )
    return bytes(value)


def validate_blob_sequence(values: Iterable[Any], field_name: str = "value") -> tuple[bytes, ...]:
    """
    Validate an ordered sequence of blobs and return an immutable copy.

    A bare ``bytes`` or ``str`` is rejected instead of being iterated, since
    that is almost always a caller passing one blob where a list is expected.

    Args:
        values: Iterable of bytes-like blobs
        field_name: Name of the field for error messages

    Returns:
        Tuple of ``bytes`` in the original order

    Raises:
        ValidationError: If values is not a sequence of bytes-like blobs
    """
    if values is None:
        return ()
    if isinstance(values, (str, *_BLOB_TYPES)):
        raise ValidationError(f"{field_name} must be a sequence of blobs, not a single value")
    try:
        items = list(values)
    except TypeError as e:
        raise ValidationError(f"{field_name} must be a sequence of blobs") from e
    return tuple(validate_blob(item, field_name) for item in items)


def validate_paired_lengths(
    first: Sized,
    second: Sized,
    first_name: str,
    second_name: str,
) -> None:
    """
    Validate that two positionally paired sequences have the same length.

    Raises:
        ValidationError: If the lengths differ
    """
    if len(first) != len(second):
        raise ValidationError(
            f"Length of {first_name} should match length of {second_name} "
            f"({len(first)} != {len(second)})"
        )


def validate_parameter_name(name: Any) -> str:
    """
    Validate a parameter set key.

    Raises:
        ValidationError: If the name is not a non-empty string
    """
    if not isinstance(name, str):
        raise ValidationError("Parameter names must be strings")
    if not name:
        raise ValidationError("Parameter names cannot be empty")
    if "\x00" in name:
        raise ValidationError("Parameter name contains invalid characters")
    return name
