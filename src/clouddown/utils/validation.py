"""Input validation utilities."""

import re

from clouddown.exceptions import InvalidKeyError

# Account and namespace ids: alphanumeric, underscores, hyphens
SAFE_IDENTIFIER_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$")

# Workers KV rejects keys longer than 512 bytes
MAX_KEY_BYTES = 512


def validate_identifier(value: str, name: str = "identifier", max_length: int = 64) -> str:
    """Validate a safe identifier (account_id, namespace_id).

    Args:
        value: The identifier to validate
        name: Name of the field for error messages
        max_length: Maximum allowed length

    Returns:
        The validated identifier

    Raises:
        ValueError: If the identifier is invalid
    """
    if not value:
        raise ValueError(f"{name} cannot be empty")

    if len(value) > max_length:
        raise ValueError(f"{name} exceeds maximum length of {max_length}")

    if not SAFE_IDENTIFIER_RE.match(value):
        raise ValueError(
            f"Invalid {name}: must start with alphanumeric and contain only "
            "alphanumeric characters, underscores, and hyphens"
        )

    return value


def validate_key(key: object) -> str:
    """Validate a store key.

    Raises:
        InvalidKeyError: If the key is not a non-empty string within the size limit
    """
    if not isinstance(key, str):
        raise InvalidKeyError(f"Key must be a string, got {type(key).__name__}")

    if not key:
        raise InvalidKeyError("Key cannot be empty")

    if len(key.encode("utf-8")) > MAX_KEY_BYTES:
        raise InvalidKeyError(f"Key exceeds maximum length of {MAX_KEY_BYTES} bytes")

    return key
