"""Request builders for the Workers KV bulk endpoints.

Builders only describe requests. Sending them is up to the caller's
transport.

See:
- https://developers.cloudflare.com/api/resources/kv/subresources/namespaces/methods/bulk_update/
- https://developers.cloudflare.com/api/resources/kv/subresources/namespaces/methods/bulk_delete/
"""

import base64
import json
from collections.abc import Iterable
from typing import Any

import httpx

from clouddown.api.auth import ApiKey, ApiToken, auth_headers
from clouddown.api.urls import DEFAULT_API_ENDPOINT, UrlBuilder
from clouddown.protocols.store import Put


def _entry(op: Put) -> dict[str, Any]:
    if isinstance(op.value, bytes):
        return {
            "key": op.key,
            "value": base64.b64encode(op.value).decode("ascii"),
            "base64": True,
        }
    return {"key": op.key, "value": op.value}


class BulkRequestBuilder:
    """Builds bulk write and bulk delete requests for one endpoint and credential."""

    def __init__(
        self,
        credential: ApiKey | ApiToken,
        api_endpoint: str = DEFAULT_API_ENDPOINT,
    ) -> None:
        self.urls = UrlBuilder(api_endpoint)
        self._headers = auth_headers(credential)

    def _json_headers(self) -> dict[str, str]:
        return {**self._headers, "Content-Type": "application/json"}

    def bulk_write(
        self,
        account_id: str,
        namespace_id: str,
        entries: Iterable[Put],
    ) -> httpx.Request:
        """Build a PUT request writing many key-value pairs.

        Binary values are base64 encoded and flagged, text values are sent as-is.
        """
        body = json.dumps([_entry(op) for op in entries])
        return httpx.Request(
            "PUT",
            self.urls.namespace_bulk(account_id, namespace_id),
            headers=self._json_headers(),
            content=body.encode("utf-8"),
        )

    def bulk_delete(
        self,
        account_id: str,
        namespace_id: str,
        keys: Iterable[str],
    ) -> httpx.Request:
        """Build a DELETE request removing many keys."""
        body = json.dumps(list(keys))
        return httpx.Request(
            "DELETE",
            self.urls.namespace_bulk(account_id, namespace_id),
            headers=self._json_headers(),
            content=body.encode("utf-8"),
        )
