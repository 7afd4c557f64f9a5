"""KVNamespace protocol for the edge binding serving point operations."""

from typing import Any, Literal, Protocol, runtime_checkable

ValueType = Literal["text", "arrayBuffer"]


@runtime_checkable
class KVNamespace(Protocol):
    """Protocol for a Workers KV namespace binding."""

    async def get(
        self,
        key: str,
        *,
        type: ValueType = "text",
        cache_ttl: int | None = None,
    ) -> str | bytes | None:
        """Read a value as text or bytes. Returns None if not found."""
        ...

    async def put(
        self,
        key: str,
        value: str | bytes,
        *,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Write a value with optional JSON-serializable metadata."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key. No-op if key doesn't exist."""
        ...
