"""Tests for the unsupported iterator handle."""

import pytest

from clouddown.exceptions import IteratorNotSupportedError
from clouddown.iterator import CloudIterator
from clouddown.protocols.store import StoreIterator


class TestCloudIterator:
    """Every iterator operation fails."""

    def test_iterator_is_created(self, store) -> None:
        """Creating the handle succeeds and leaves it in its created state."""
        iterator = store.iterator()

        assert isinstance(iterator, CloudIterator)
        assert isinstance(iterator, StoreIterator)
        assert iterator.state == "created"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "options",
        [{}, {"gte": "a", "lt": "z"}, {"reverse": True, "limit": 10}, {"keys": False}],
    )
    async def test_next_fails_regardless_of_options(self, store, options) -> None:
        """next raises whatever options were given."""
        iterator = store.iterator(**options)

        with pytest.raises(IteratorNotSupportedError):
            await iterator.next()

    @pytest.mark.asyncio
    async def test_seek_and_end_fail(self, store) -> None:
        """seek and end raise too."""
        iterator = store.iterator()

        with pytest.raises(IteratorNotSupportedError):
            await iterator.seek("a")
        with pytest.raises(IteratorNotSupportedError):
            await iterator.end()

    @pytest.mark.asyncio
    async def test_async_for_fails(self, store) -> None:
        """Async iteration raises on the first step."""
        with pytest.raises(IteratorNotSupportedError):
            async for _ in store.iterator():
                pass

    @pytest.mark.asyncio
    async def test_is_not_implemented_error(self, store) -> None:
        """The error can be caught as NotImplementedError."""
        with pytest.raises(NotImplementedError):
            await store.iterator().next()

    @pytest.mark.asyncio
    async def test_store_unaffected(self, store) -> None:
        """A failed iteration leaves point operations working."""
        with pytest.raises(IteratorNotSupportedError):
            await store.iterator().next()

        await store.put("k", "v")
        assert await store.get("k", as_buffer=False) == "v"
