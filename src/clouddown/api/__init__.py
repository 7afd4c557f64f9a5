"""Cloudflare REST API helpers: credentials, URLs and bulk requests."""

from clouddown.api.auth import ApiKey, ApiToken, Credential, auth_headers
from clouddown.api.bulk import BulkRequestBuilder
from clouddown.api.urls import DEFAULT_API_ENDPOINT, UrlBuilder

__all__ = [
    "DEFAULT_API_ENDPOINT",
    "ApiKey",
    "ApiToken",
    "BulkRequestBuilder",
    "Credential",
    "UrlBuilder",
    "auth_headers",
]
