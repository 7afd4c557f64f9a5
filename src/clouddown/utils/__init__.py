"""Utility modules."""

from clouddown.utils.validation import validate_identifier, validate_key

__all__ = ["validate_identifier", "validate_key"]
