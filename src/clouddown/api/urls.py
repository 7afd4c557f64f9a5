"""Cloudflare REST API URL composition."""

from urllib.parse import quote

import httpx

DEFAULT_API_ENDPOINT = "https://api.cloudflare.com/client/v4"


def _segment(value: str) -> str:
    return quote(value, safe="")


class UrlBuilder:
    """Composes account, namespace and bulk URLs under an API endpoint.

    The endpoint is treated as a directory: ``https://host/client/v4`` and
    ``https://host/client/v4/`` produce the same URLs.
    """

    def __init__(self, api_endpoint: str = DEFAULT_API_ENDPOINT) -> None:
        if not api_endpoint.endswith("/"):
            api_endpoint += "/"
        self.base = httpx.URL(api_endpoint)

    def account(self, account_id: str) -> str:
        """URL of an account.

        See https://developers.cloudflare.com/api/resources/accounts/
        """
        return str(self.base.join(f"accounts/{_segment(account_id)}"))

    def namespace(self, account_id: str, namespace_id: str) -> str:
        """URL of a Workers KV namespace."""
        return str(
            self.base.join(
                self.account(account_id)
                + f"/storage/kv/namespaces/{_segment(namespace_id)}"
            )
        )

    def namespace_bulk(self, account_id: str, namespace_id: str) -> str:
        """URL of the bulk write and bulk delete endpoint of a namespace."""
        return str(self.base.join(self.namespace(account_id, namespace_id) + "/bulk"))
