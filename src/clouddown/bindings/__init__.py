"""KV namespace bindings."""

from clouddown.bindings.memory import MemoryKVNamespace

__all__ = ["MemoryKVNamespace"]
