"""Clouddown exceptions."""


class CloudDownError(Exception):
    """Base exception for clouddown."""


class NotFoundError(CloudDownError):
    """No value is stored under the requested key."""

    def __init__(self, key: str) -> None:
        super().__init__("NotFound")
        self.key = key


class ConfigError(CloudDownError):
    """Configuration error.

    Raised before any network activity when batch preconditions are unmet.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TransportError(CloudDownError):
    """The binding or the HTTP transport failed.

    The original exception is available as ``cause`` and ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class BulkRequestError(TransportError):
    """A bulk REST call completed with a non-success status."""

    def __init__(
        self,
        operation: str,
        status_code: int,
        errors: list[str] | None = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.errors = errors or []
        detail = "; ".join(self.errors) or "Unknown error"
        super().__init__(f"Bulk {operation} failed with status {status_code}: {detail}")


class InvalidKeyError(CloudDownError, ValueError):
    """Key is empty, not a string, or too long."""


class BatchConflictError(CloudDownError, ValueError):
    """The same key is both written and deleted within one batch."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__(f"Keys both put and deleted in one batch: {', '.join(keys)}")
        self.keys = keys


class IteratorNotSupportedError(CloudDownError, NotImplementedError):
    """Range iteration is not supported by the cloud store."""
