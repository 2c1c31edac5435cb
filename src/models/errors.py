# src/models/errors.py

"""Exception types shared across the catalog_sync store."""


class CatalogSyncError(Exception):
    """Base exception for all catalog_sync errors."""


class TransportError(CatalogSyncError):
    """Raised when a remote resource call fails.

    Covers network errors, non-2xx responses and bodies that cannot be
    decoded as JSON.
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PersistenceError(CatalogSyncError):
    """Raised when the durable mirror cannot be read or written."""


class UnknownActionError(CatalogSyncError):
    """Raised when an action name has no registered transition."""

    def __init__(self, action: str) -> None:
        super().__init__(f"Unknown store action '{action}'")
        self.action = action
