"""Tests for API URL composition."""

from clouddown.api.urls import DEFAULT_API_ENDPOINT, UrlBuilder


class TestUrlBuilder:
    """Tests for UrlBuilder."""

    def test_namespace_bulk(self) -> None:
        """Bulk URL nests account, namespace and bulk segments."""
        urls = UrlBuilder("https://api.example.com/v4/")

        assert (
            urls.namespace_bulk("A", "N")
            == "https://api.example.com/v4/accounts/A/storage/kv/namespaces/N/bulk"
        )

    def test_account(self) -> None:
        """Account URL is resolved under the endpoint."""
        urls = UrlBuilder("https://api.example.com/v4/")
        assert urls.account("A") == "https://api.example.com/v4/accounts/A"

    def test_namespace(self) -> None:
        """Namespace URL extends the account URL."""
        urls = UrlBuilder("https://api.example.com/v4/")
        assert (
            urls.namespace("A", "N")
            == "https://api.example.com/v4/accounts/A/storage/kv/namespaces/N"
        )

    def test_hierarchy_matches_direct_composition(self) -> None:
        """Each level is the previous level plus its own suffix."""
        urls = UrlBuilder("https://api.example.com/v4/")

        assert urls.namespace("A", "N") == urls.account("A") + "/storage/kv/namespaces/N"
        assert urls.namespace_bulk("A", "N") == urls.namespace("A", "N") + "/bulk"

    def test_endpoint_without_trailing_slash(self) -> None:
        """The endpoint is treated as a directory either way."""
        with_slash = UrlBuilder("https://api.example.com/v4/")
        without_slash = UrlBuilder("https://api.example.com/v4")

        assert without_slash.namespace_bulk("A", "N") == with_slash.namespace_bulk("A", "N")

    def test_default_endpoint(self) -> None:
        """The default endpoint is the Cloudflare v4 API."""
        urls = UrlBuilder()
        assert urls.account("A") == f"{DEFAULT_API_ENDPOINT}/accounts/A"

    def test_segments_are_escaped(self) -> None:
        """Ids cannot inject extra path segments."""
        urls = UrlBuilder("https://api.example.com/v4/")
        assert urls.account("a/b") == "https://api.example.com/v4/accounts/a%2Fb"
