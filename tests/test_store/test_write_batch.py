"""Tests for the chained batch builder."""

import json

import pytest

from clouddown.batch import WriteBatch
from clouddown.exceptions import CloudDownError, InvalidKeyError
from clouddown.protocols.store import Delete, Put


class TestWriteBatch:
    """Tests for WriteBatch."""

    def test_collects_operations(self, store) -> None:
        """put and delete queue operations in order."""
        batch = store.write_batch().put("a", "1").delete("b")

        assert isinstance(batch, WriteBatch)
        assert len(batch) == 2
        assert batch.operations == (Put("a", "1"), Delete("b"))

    def test_clear(self, store) -> None:
        """clear drops queued operations."""
        batch = store.write_batch().put("a", "1").clear()
        assert len(batch) == 0

    def test_rejects_empty_key(self, store) -> None:
        """Keys are validated when queued."""
        with pytest.raises(InvalidKeyError):
            store.write_batch().put("", "1")

    @pytest.mark.asyncio
    async def test_write_sends_bulk_requests(self, store, transport) -> None:
        """write applies the queued operations as one batch."""
        await store.write_batch().put("a", "1").delete("c").write()

        [write] = transport.by_method("PUT")
        [delete] = transport.by_method("DELETE")
        assert json.loads(write.content) == [{"key": "a", "value": "1"}]
        assert json.loads(delete.content) == ["c"]

    @pytest.mark.asyncio
    async def test_cannot_reuse_after_write(self, store) -> None:
        """A written batch cannot be modified or written again."""
        batch = store.write_batch().put("a", "1")
        await batch.write()

        with pytest.raises(CloudDownError):
            batch.put("b", "2")
        with pytest.raises(CloudDownError):
            await batch.write()
