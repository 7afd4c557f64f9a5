"""OrderedKVStore protocol: the storage interface exposed to callers."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

Value = str | bytes


@dataclass(frozen=True)
class Put:
    """Write ``value`` under ``key``."""

    key: str
    value: Value


@dataclass(frozen=True)
class Delete:
    """Remove ``key``."""

    key: str


Operation = Put | Delete


@runtime_checkable
class StoreIterator(Protocol):
    """Protocol for a store iterator handle."""

    async def next(self) -> tuple[str, Value] | None:
        """Return the next entry, or None when exhausted."""
        ...

    async def seek(self, target: str) -> None:
        """Move to the first entry at or after ``target``."""
        ...

    async def end(self) -> None:
        """Release the iterator."""
        ...


@runtime_checkable
class OrderedKVStore(Protocol):
    """Protocol for ordered key-value stores."""

    async def open(self) -> None:
        """Prepare the store for use."""
        ...

    async def close(self) -> None:
        """Release the store."""
        ...

    async def get(
        self,
        key: str,
        *,
        as_buffer: bool = True,
        cache_ttl: int | None = None,
    ) -> Value:
        """Get a value by key. Raises NotFoundError if absent."""
        ...

    async def put(
        self,
        key: str,
        value: Value,
        *,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Store a value."""
        ...

    async def delete(self, key: str) -> None:
        """Delete a key."""
        ...

    async def batch(self, ops: Sequence[Operation]) -> None:
        """Apply a sequence of puts and deletes."""
        ...

    def iterator(self, **options: Any) -> StoreIterator:
        """Create an iterator over the store."""
        ...
