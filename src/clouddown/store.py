"""CloudStore: an ordered key-value store backed by Cloudflare Workers KV.

Point operations (get, put, delete) go straight to the namespace binding.
Batches go through the authenticated bulk REST endpoints, which need an
account id, a namespace id and a credential.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import httpx

from clouddown.api.auth import ApiKey, ApiToken
from clouddown.api.bulk import BulkRequestBuilder
from clouddown.api.urls import DEFAULT_API_ENDPOINT
from clouddown.batch import WriteBatch
from clouddown.config import CloudKVConfig
from clouddown.exceptions import (
    BatchConflictError,
    BulkRequestError,
    ConfigError,
    NotFoundError,
    TransportError,
)
from clouddown.iterator import CloudIterator
from clouddown.observability import (
    RequestContext,
    Timer,
    emit_counter,
    emit_timer,
    get_logger,
)
from clouddown.protocols.binding import KVNamespace
from clouddown.protocols.store import Delete, Operation, Put, Value
from clouddown.utils.validation import validate_key

logger = get_logger(__name__)

Transport = Callable[[httpx.Request], Awaitable[httpx.Response]]

DEFAULT_CACHE_TTL = 60


async def httpx_transport(request: httpx.Request) -> httpx.Response:
    """Send a request with a short-lived httpx client."""
    async with httpx.AsyncClient() as client:
        return await client.send(request)


def _response_errors(response: httpx.Response) -> list[str]:
    """Extract error messages from a Cloudflare API response body."""
    try:
        body = response.json()
    except ValueError:
        return [response.text] if response.text else []
    if not isinstance(body, dict):
        return []
    return [
        str(error.get("message", error))
        for error in body.get("errors") or []
        if isinstance(error, dict)
    ]


class CloudStore:
    """Ordered key-value store over a Workers KV namespace.

    Example:
        store = CloudStore(
            env.NAMESPACE,
            account_id="...",
            namespace_id="...",
            credential=ApiToken(token="..."),
        )
        await store.put("greeting", "hello")
        await store.get("greeting", as_buffer=False)
    """

    def __init__(
        self,
        binding: KVNamespace,
        *,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
        transport: Transport | None = None,
        account_id: str | None = None,
        namespace_id: str | None = None,
        credential: ApiKey | ApiToken | None = None,
        default_cache_ttl: int = DEFAULT_CACHE_TTL,
    ) -> None:
        """Initialize the store.

        Args:
            binding: Namespace binding used for point operations
            api_endpoint: Cloudflare API base URL
            transport: Coroutine sending a request; defaults to httpx
            account_id: Cloudflare account id (batch only)
            namespace_id: KV namespace id (batch only)
            credential: API key or API token (batch only)
            default_cache_ttl: Cache TTL in seconds used when a read gives none

        Raises:
            TypeError: If credential is not an ApiKey or ApiToken
            ValueError: If default_cache_ttl is negative
        """
        if credential is not None and not isinstance(credential, (ApiKey, ApiToken)):
            raise TypeError(
                f"credential must be ApiKey or ApiToken, got {type(credential).__name__}"
            )
        if default_cache_ttl < 0:
            raise ValueError("default_cache_ttl cannot be negative")

        self._binding = binding
        self._api_endpoint = api_endpoint
        self._transport = transport or httpx_transport
        self._account_id = account_id
        self._namespace_id = namespace_id
        self._credential = credential
        self._default_cache_ttl = default_cache_ttl

    @classmethod
    def from_config(
        cls,
        config: CloudKVConfig,
        binding: KVNamespace,
        transport: Transport | None = None,
    ) -> "CloudStore":
        """Create a store from KV configuration."""
        return cls(
            binding,
            api_endpoint=config.api_endpoint,
            transport=transport,
            account_id=config.account_id,
            namespace_id=config.namespace_id,
            credential=config.credential,
            default_cache_ttl=config.default_cache_ttl,
        )

    @property
    def default_cache_ttl(self) -> int:
        return self._default_cache_ttl

    async def open(self) -> None:
        """No-op: the binding is always ready."""

    async def close(self) -> None:
        """No-op: there is no connection to release."""

    async def __aenter__(self) -> "CloudStore":
        await self.open()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(
        self,
        key: str,
        *,
        as_buffer: bool = True,
        cache_ttl: int | None = None,
    ) -> Value:
        """Get a value by key.

        Args:
            key: Key to read
            as_buffer: Return bytes if True, text if False
            cache_ttl: Acceptable staleness in seconds; defaults to default_cache_ttl

        Returns:
            The stored value as bytes or str

        Raises:
            NotFoundError: If the key has no value
            TransportError: If the binding fails
        """
        validate_key(key)
        if cache_ttl is None:
            cache_ttl = self._default_cache_ttl
        value_type = "arrayBuffer" if as_buffer else "text"

        try:
            value = await self._binding.get(key, type=value_type, cache_ttl=cache_ttl)
        except Exception as e:
            with self._operation_context():
                logger.warning("KV get failed", context={"key": key}, error=e)
            raise TransportError(f"Failed to get {key!r}", cause=e) from e

        if value is None:
            raise NotFoundError(key)
        if as_buffer and isinstance(value, (bytearray, memoryview)):
            value = bytes(value)
        return value

    async def put(
        self,
        key: str,
        value: Value,
        *,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Store a value, with optional JSON-serializable metadata.

        Raises:
            TransportError: If the binding fails
        """
        validate_key(key)
        try:
            await self._binding.put(key, value, metadata=metadata)
        except Exception as e:
            with self._operation_context():
                logger.warning("KV put failed", context={"key": key}, error=e)
            raise TransportError(f"Failed to put {key!r}", cause=e) from e

    async def delete(self, key: str) -> None:
        """Delete a key.

        Raises:
            TransportError: If the binding fails
        """
        validate_key(key)
        try:
            await self._binding.delete(key)
        except Exception as e:
            with self._operation_context():
                logger.warning("KV delete failed", context={"key": key}, error=e)
            raise TransportError(f"Failed to delete {key!r}", cause=e) from e

    def _operation_context(self) -> RequestContext:
        return RequestContext(namespace=self._namespace_id)

    def _batch_target(self) -> tuple[str, str, ApiKey | ApiToken]:
        if not self._account_id:
            raise ConfigError(
                "account_id must be specified to use batch operation",
                field="account_id",
            )
        if not self._namespace_id:
            raise ConfigError(
                "namespace_id must be specified to use batch operation",
                field="namespace_id",
            )
        if self._credential is None:
            raise ConfigError(
                "credential is required to use batch operation",
                field="credential",
            )
        return self._account_id, self._namespace_id, self._credential

    @staticmethod
    def _partition(ops: Iterable[Operation]) -> tuple[list[Put], list[str]]:
        """Split operations into ordered puts and ordered delete keys.

        Bytes-like values are copied to bytes so they are sent base64-encoded.

        Raises:
            TypeError: If an operation or a put value has an unsupported type
        """
        puts: list[Put] = []
        deletes: list[str] = []
        for op in ops:
            if isinstance(op, Put):
                validate_key(op.key)
                if isinstance(op.value, (bytearray, memoryview)):
                    op = Put(op.key, bytes(op.value))
                elif not isinstance(op.value, (str, bytes)):
                    raise TypeError(
                        f"Value for {op.key!r} must be str or bytes, "
                        f"got {type(op.value).__name__}"
                    )
                puts.append(op)
            elif isinstance(op, Delete):
                validate_key(op.key)
                deletes.append(op.key)
            else:
                raise TypeError(f"Unsupported batch operation: {type(op).__name__}")

        conflicts = sorted({op.key for op in puts} & set(deletes))
        if conflicts:
            raise BatchConflictError(conflicts)
        return puts, deletes

    async def _dispatch(self, operation: str, request: httpx.Request) -> httpx.Response:
        try:
            response = await self._transport(request)
        except Exception as e:
            raise TransportError(f"Bulk {operation} request failed: {e}", cause=e) from e

        if not response.is_success:
            raise BulkRequestError(operation, response.status_code, _response_errors(response))
        return response

    async def batch(self, ops: Iterable[Operation]) -> None:
        """Apply puts and deletes through the bulk endpoints.

        Writes and deletes are sent as two concurrent requests. There is no
        atomicity across them: when one fails the other may already have been
        applied.

        Raises:
            ConfigError: If account_id, namespace_id or credential is missing
            BatchConflictError: If a key is both put and deleted
            TypeError: If a put value is not text or bytes-like
            TransportError: If either bulk request fails
        """
        ops = list(ops)
        if not ops:
            return

        account_id, namespace_id, credential = self._batch_target()
        puts, deletes = self._partition(ops)

        builder = BulkRequestBuilder(credential, self._api_endpoint)
        requests = [
            ("write", builder.bulk_write(account_id, namespace_id, puts)),
            ("delete", builder.bulk_delete(account_id, namespace_id, deletes)),
        ]
        context = {"puts": len(puts), "deletes": len(deletes)}

        async with self._operation_context():
            logger.debug("Dispatching bulk requests", context=context)
            with Timer() as timer:
                results = await asyncio.gather(
                    *(self._dispatch(operation, request) for operation, request in requests),
                    return_exceptions=True,
                )
            emit_timer("clouddown.batch", timer.duration_ms)

            failures = [result for result in results if isinstance(result, BaseException)]
            if not failures:
                logger.info("Batch applied", context=context, duration_ms=timer.duration_ms)
                return

            emit_counter("clouddown.batch.failed")
            for failure in failures[1:]:
                logger.error("Additional bulk request failure", context=context, error=failure)
            logger.error(
                "Batch failed",
                context=context,
                error=failures[0],
                duration_ms=timer.duration_ms,
            )
            raise failures[0]

    def write_batch(self) -> WriteBatch:
        """Start a chained batch."""
        return WriteBatch(self)

    def iterator(self, **options: Any) -> CloudIterator:
        """Create an iterator handle. Iteration is not supported; any use raises."""
        return CloudIterator(self, **options)
