"""
Utils module - Validation helpers used throughout layercrypt.
"""

from layercrypt.utils.validators import (
    ValidationError,
    validate_blob,
    validate_blob_sequence,
    validate_paired_lengths,
    validate_parameter_name,
)

__all__ = [
    "ValidationError",
    "validate_blob",
    "validate_blob_sequence",
    "validate_paired_lengths",
    "validate_parameter_name",
]
