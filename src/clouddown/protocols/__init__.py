"""Protocol interfaces for the store and its binding."""

from clouddown.protocols.binding import KVNamespace, ValueType
from clouddown.protocols.store import (
    Delete,
    Operation,
    OrderedKVStore,
    Put,
    StoreIterator,
    Value,
)

__all__ = [
    "Delete",
    "KVNamespace",
    "Operation",
    "OrderedKVStore",
    "Put",
    "StoreIterator",
    "Value",
    "ValueType",
]
