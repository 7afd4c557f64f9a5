"""Chained batch builder."""

from typing import TYPE_CHECKING

from clouddown.exceptions import CloudDownError
from clouddown.protocols.store import Delete, Operation, Put, Value
from clouddown.utils.validation import validate_key

if TYPE_CHECKING:
    from clouddown.store import CloudStore


class WriteBatch:
    """Collects puts and deletes and applies them with one ``CloudStore.batch`` call.

    Example:
        await store.write_batch().put("a", "1").delete("b").write()
    """

    def __init__(self, store: "CloudStore") -> None:
        self._store = store
        self._ops: list[Operation] = []
        self._written = False

    def _check_not_written(self) -> None:
        if self._written:
            raise CloudDownError("write() already called on this batch")

    def put(self, key: str, value: Value) -> "WriteBatch":
        """Queue a put."""
        self._check_not_written()
        self._ops.append(Put(validate_key(key), value))
        return self

    def delete(self, key: str) -> "WriteBatch":
        """Queue a delete."""
        self._check_not_written()
        self._ops.append(Delete(validate_key(key)))
        return self

    def clear(self) -> "WriteBatch":
        """Drop all queued operations."""
        self._check_not_written()
        self._ops.clear()
        return self

    @property
    def operations(self) -> tuple[Operation, ...]:
        return tuple(self._ops)

    def __len__(self) -> int:
        return len(self._ops)

    async def write(self) -> None:
        """Apply the queued operations. The batch cannot be reused afterwards."""
        self._check_not_written()
        self._written = True
        await self._store.batch(self._ops)
