"""In-memory KV namespace binding."""

import asyncio
import json
import time
from dataclasses import dataclass
from typing import Any

from clouddown.protocols.binding import ValueType

# Workers KV limit on serialized metadata
MAX_METADATA_BYTES = 1024


@dataclass
class Entry:
    """A stored value with optional metadata and expiration."""

    value: bytes
    metadata: dict[str, Any] | None = None
    expires_at: float | None = None

    def is_expired(self) -> bool:
        """Check if this entry has expired."""
        if self.expires_at is None:
            return False
        return time.time() > self.expires_at


class MemoryKVNamespace:
    """In-memory stand-in for a Workers KV namespace binding.

    Suitable for development and testing. Data is lost on restart. Reads are
    always consistent, so ``cache_ttl`` is accepted and ignored.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize memory namespace.

        Args:
            **kwargs: Ignored (for compatibility with other bindings)
        """
        self._data: dict[str, Entry] = {}
        self._lock = asyncio.Lock()

    def _live(self, key: str) -> Entry | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        if entry.is_expired():
            del self._data[key]
            return None
        return entry

    async def get(
        self,
        key: str,
        *,
        type: ValueType = "text",
        cache_ttl: int | None = None,
    ) -> str | bytes | None:
        """Get a value as text or bytes."""
        async with self._lock:
            entry = self._live(key)
        if entry is None:
            return None
        if type == "arrayBuffer":
            return entry.value
        if type == "text":
            return entry.value.decode("utf-8")
        raise ValueError(f"Unsupported value type: {type}")

    async def get_with_metadata(
        self,
        key: str,
        *,
        type: ValueType = "text",
    ) -> tuple[str | bytes | None, dict[str, Any] | None]:
        """Get a value together with its metadata."""
        value = await self.get(key, type=type)
        async with self._lock:
            entry = self._live(key)
        return value, entry.metadata if entry else None

    async def put(
        self,
        key: str,
        value: str | bytes,
        *,
        metadata: dict[str, Any] | None = None,
        expiration_ttl: int | None = None,
    ) -> None:
        """Store a value with optional metadata and TTL in seconds."""
        if isinstance(value, str):
            data = value.encode("utf-8")
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
        else:
            raise TypeError(f"Value must be str or bytes, got {type(value).__name__}")

        if metadata is not None:
            size = len(json.dumps(metadata).encode("utf-8"))
            if size > MAX_METADATA_BYTES:
                raise ValueError(
                    f"Metadata exceeds maximum size of {MAX_METADATA_BYTES} bytes"
                )

        expires_at = time.time() + expiration_ttl if expiration_ttl else None
        async with self._lock:
            self._data[key] = Entry(value=data, metadata=metadata, expires_at=expires_at)

    async def delete(self, key: str) -> None:
        """Delete a key."""
        async with self._lock:
            self._data.pop(key, None)

    async def clear(self) -> None:
        """Clear all data. Useful for testing."""
        async with self._lock:
            self._data.clear()
