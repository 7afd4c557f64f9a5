"""Pytest configuration and fixtures."""

import asyncio

import httpx
import pytest

from clouddown.api.auth import ApiToken
from clouddown.bindings.memory import MemoryKVNamespace
from clouddown.store import CloudStore


class RecordingTransport:
    """Fake transport that records requests and answers per HTTP method."""

    def __init__(
        self,
        status_codes: dict[str, int] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.requests: list[httpx.Request] = []
        self.status_codes = status_codes or {}
        self.errors = errors or {}
        # Number of requests seen when each call resolved
        self.seen_at_resolve: list[int] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def by_method(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await asyncio.sleep(0)
        self.seen_at_resolve.append(len(self.requests))

        if request.method in self.errors:
            raise self.errors[request.method]

        status = self.status_codes.get(request.method, 200)
        if status >= 400:
            body = {
                "success": False,
                "errors": [{"code": 10000, "message": "Authentication error"}],
                "messages": [],
                "result": None,
            }
        else:
            body = {"success": True, "errors": [], "messages": [], "result": None}
        return httpx.Response(status, json=body, request=request)


@pytest.fixture
def binding() -> MemoryKVNamespace:
    """Create an in-memory namespace binding."""
    return MemoryKVNamespace()


@pytest.fixture
def transport() -> RecordingTransport:
    """Create a recording transport."""
    return RecordingTransport()


@pytest.fixture
def transport_factory():
    """Build recording transports with custom statuses or errors."""
    return RecordingTransport


@pytest.fixture
def store(binding, transport) -> CloudStore:
    """Create a store configured for batch operations."""
    return CloudStore(
        binding,
        api_endpoint="https://api.example.com/v4/",
        transport=transport,
        account_id="A",
        namespace_id="N",
        credential=ApiToken(token="t"),
    )


@pytest.fixture
def sample_config_dict():
    """Sample configuration dictionary for testing."""
    return {
        "kv": {
            "api_endpoint": "https://api.example.com/v4",
            "account_id": "account-1",
            "namespace_id": "namespace-1",
            "credential": {"method": "api_token", "token": "secret-token"},
            "default_cache_ttl": 120,
        },
        "logging": {"level": "DEBUG", "format": "text"},
    }
