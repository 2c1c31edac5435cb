# src/services/catalog_commands.py

"""Async command handlers that sync the store with the remote resource."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from src.api.catalog_client import CatalogClient
from src.models.errors import CatalogSyncError, TransportError
from src.models.product import Product, ProductId
from src.store.catalog_store import (
    FULFILLED,
    PENDING,
    REJECTED,
    CatalogStore,
    action_name,
)
from src.store.transitions import OperationKind

logger = logging.getLogger("catalog_sync.commands")

T = TypeVar("T")


@dataclass
class CommandResult:
    """Outcome of one command: the payload on success, the error otherwise."""

    kind: OperationKind
    ok: bool
    payload: Any = None
    error: CatalogSyncError | None = None

    @property
    def message(self) -> str | None:
        return None if self.error is None else str(self.error)


class CatalogCommands:
    """Runs fetch/create/update/delete against the remote resource.

    Each command dispatches ``pending``, awaits the blocking client call
    in a worker thread, then dispatches exactly one ``fulfilled`` or
    ``rejected`` action back on the event loop.  Transport failures are
    logged and returned as a failed :class:`CommandResult`; they are
    never raised to the caller.
    """

    def __init__(
        self,
        store: CatalogStore,
        client: CatalogClient | None = None,
    ) -> None:
        self.store = store
        self.client = client or CatalogClient()

    async def _run(
        self,
        kind: OperationKind,
        call: Callable[[], T],
        to_payload: Callable[[T], Any],
        failure_payload: Callable[[TransportError], Any],
    ) -> CommandResult:
        self.store.dispatch(action_name(kind, PENDING))
        try:
            response = await asyncio.to_thread(call)
        except TransportError as exc:
            logger.error(
                "%s failed: %s", kind.value, exc, exc_info=True
            )
            self.store.dispatch(
                action_name(kind, REJECTED), failure_payload(exc)
            )
            return CommandResult(kind=kind, ok=False, error=exc)

        payload = to_payload(response)
        self.store.dispatch(action_name(kind, FULFILLED), payload)
        return CommandResult(kind=kind, ok=True, payload=payload)

    async def fetch_all(self) -> CommandResult:
        """Replace the canonical list with the remote collection."""
        return await self._run(
            OperationKind.FETCH_ALL,
            self.client.list_products,
            lambda products: products,
            lambda _exc: None,
        )

    async def create(self, product: Product) -> CommandResult:
        """Create *product* remotely (its ``id``, if any, is not sent)."""
        return await self._run(
            OperationKind.CREATE,
            lambda: self.client.create_product(product),
            lambda created: created,
            str,
        )

    async def update(self, product: Product) -> CommandResult:
        """Send every field but ``id`` to ``PUT /products/{id}``."""
        if product.id is None:
            exc = CatalogSyncError("Cannot update a product without an id")
            logger.error("update rejected: %s", exc)
            self.store.dispatch(
                action_name(OperationKind.UPDATE, REJECTED), str(exc)
            )
            return CommandResult(
                kind=OperationKind.UPDATE, ok=False, error=exc
            )
        product_id = product.id
        return await self._run(
            OperationKind.UPDATE,
            lambda: self.client.update_product(product_id, product),
            lambda updated: updated,
            str,
        )

    async def delete(self, product_id: ProductId) -> CommandResult:
        """Delete remotely; the store filters by *product_id* itself."""

        def call() -> None:
            self.client.delete_product(product_id)

        return await self._run(
            OperationKind.DELETE,
            call,
            lambda _resp: product_id,
            str,
        )
