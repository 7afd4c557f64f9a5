"""Clouddown - an ordered key-value store on top of Cloudflare Workers KV."""

from clouddown.api import ApiKey, ApiToken, BulkRequestBuilder, UrlBuilder, auth_headers
from clouddown.batch import WriteBatch
from clouddown.bindings import MemoryKVNamespace
from clouddown.config import CloudKVConfig, Config
from clouddown.exceptions import (
    BatchConflictError,
    BulkRequestError,
    CloudDownError,
    ConfigError,
    InvalidKeyError,
    IteratorNotSupportedError,
    NotFoundError,
    TransportError,
)
from clouddown.iterator import CloudIterator
from clouddown.observability import (
    LogLevel,
    RequestContext,
    StructuredLogger,
    Timer,
    configure_logging,
    get_logger,
    register_metric_callback,
)
from clouddown.protocols import Delete, KVNamespace, OrderedKVStore, Put
from clouddown.store import CloudStore, Transport, httpx_transport

__version__ = "0.1.0"
__all__ = [
    # Core
    "CloudIterator",
    "CloudStore",
    "Config",
    "CloudKVConfig",
    "Delete",
    "Put",
    "Transport",
    "WriteBatch",
    "httpx_transport",
    # Protocols and bindings
    "KVNamespace",
    "MemoryKVNamespace",
    "OrderedKVStore",
    # API
    "ApiKey",
    "ApiToken",
    "BulkRequestBuilder",
    "UrlBuilder",
    "auth_headers",
    # Errors
    "BatchConflictError",
    "BulkRequestError",
    "CloudDownError",
    "ConfigError",
    "InvalidKeyError",
    "IteratorNotSupportedError",
    "NotFoundError",
    "TransportError",
    # Observability
    "LogLevel",
    "RequestContext",
    "StructuredLogger",
    "Timer",
    "configure_logging",
    "get_logger",
    "register_metric_callback",
]
