"""Iterator handle for CloudStore.

Workers KV offers no ordered range scan through the binding, so the handle
exists only in its ``created`` state and every operation on it fails.
"""

from typing import TYPE_CHECKING, Any

from clouddown.exceptions import IteratorNotSupportedError
from clouddown.protocols.store import Value

if TYPE_CHECKING:
    from clouddown.store import CloudStore

NOT_SUPPORTED_MESSAGE = "Iteration is not supported by CloudStore"


class CloudIterator:
    """Placeholder iterator; any use raises IteratorNotSupportedError."""

    state = "created"

    def __init__(self, store: "CloudStore", **options: Any) -> None:
        self.store = store
        self.options = options

    async def next(self) -> tuple[str, Value] | None:
        raise IteratorNotSupportedError(NOT_SUPPORTED_MESSAGE)

    async def seek(self, target: str) -> None:
        raise IteratorNotSupportedError(NOT_SUPPORTED_MESSAGE)

    async def end(self) -> None:
        raise IteratorNotSupportedError(NOT_SUPPORTED_MESSAGE)

    def __aiter__(self) -> "CloudIterator":
        return self

    async def __anext__(self) -> tuple[str, Value]:
        raise IteratorNotSupportedError(NOT_SUPPORTED_MESSAGE)
