# src/store/catalog_store.py

"""State container that applies catalog transitions and mirrors the list."""

import logging
from collections.abc import Callable
from typing import Any

from src.config.settings import Settings
from src.models.errors import UnknownActionError
from src.models.product import Product, canonical_id
from src.storage.durable_mirror import DurableMirror, create_mirror
from src.store import transitions as t
from src.store.transitions import CatalogState, OperationKind, Transition

logger = logging.getLogger("catalog_sync.store")

Listener = Callable[[CatalogState, str], None]

PENDING = "pending"
FULFILLED = "fulfilled"
REJECTED = "rejected"

SET_PRODUCT_OVERRIDE = "products/set_product_override"
REMOVE_FROM_FILTERED = "products/remove_from_filtered"
SET_FILTERED = "products/set_filtered"
SET_CREATE_ERROR = "create/set_error"


def action_name(kind: OperationKind, phase: str) -> str:
    """Name of the action for *kind* in *phase* (pending/fulfilled/rejected)."""
    return f"products/{kind.value}/{phase}"


ACTIONS: dict[str, Transition] = {
    action_name(OperationKind.FETCH_ALL, PENDING): t.apply_fetch_pending,
    action_name(OperationKind.FETCH_ALL, FULFILLED): t.apply_fetch_success,
    action_name(OperationKind.FETCH_ALL, REJECTED): t.apply_fetch_failure,
    action_name(OperationKind.CREATE, PENDING): t.apply_create_pending,
    action_name(OperationKind.CREATE, FULFILLED): t.apply_create_success,
    action_name(OperationKind.CREATE, REJECTED): t.apply_create_failure,
    action_name(OperationKind.UPDATE, PENDING): t.apply_update_pending,
    action_name(OperationKind.UPDATE, FULFILLED): t.apply_update_success,
    action_name(OperationKind.UPDATE, REJECTED): t.apply_update_failure,
    action_name(OperationKind.DELETE, PENDING): t.apply_delete_pending,
    action_name(OperationKind.DELETE, FULFILLED): t.apply_delete_success,
    action_name(OperationKind.DELETE, REJECTED): t.apply_delete_failure,
    SET_PRODUCT_OVERRIDE: t.set_product_override,
    REMOVE_FROM_FILTERED: t.remove_from_filtered,
    SET_FILTERED: t.set_filtered,
    SET_CREATE_ERROR: t.set_create_error,
}


# Actions whose payload is a bare product id
_ID_ACTIONS: frozenset[str] = frozenset({
    action_name(OperationKind.DELETE, FULFILLED),
    REMOVE_FROM_FILTERED,
})


def _canonicalize(payload: Any) -> Any:
    """Rewrite the id of every product inside *payload* to its string form."""
    if isinstance(payload, Product):
        return payload.with_id(canonical_id(payload.id))
    if isinstance(payload, list):
        return [_canonicalize(item) for item in payload]
    return payload


class CatalogStore:
    """Holds the current :class:`CatalogState` for one session.

    Build one per process (see :func:`create_catalog_store`) and pass
    it to the commands and front end that need it.  Each
    :meth:`dispatch` swaps in the next state in a single step and, when
    the canonical list object changed, writes it to the mirror.
    """

    def __init__(
        self,
        mirror: DurableMirror,
        canonical_ids: bool = False,
    ) -> None:
        self._mirror = mirror
        self._canonical_ids = canonical_ids
        self._listeners: list[Listener] = []

        seeded = mirror.load()
        if canonical_ids:
            seeded = _canonicalize(seeded)
        self._state = t.initialize(seeded)
        logger.info(
            "Store initialised with %d mirrored products", len(seeded)
        )

    @property
    def state(self) -> CatalogState:
        return self._state

    def snapshot(self) -> dict[str, Any]:
        """Plain-dict copy of the current state."""
        return self._state.to_dict()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener(state, action)* after every state change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: str, payload: Any = None) -> CatalogState:
        """Apply the transition registered under *action*.

        Raises :class:`UnknownActionError` for unregistered names.
        """
        transition = ACTIONS.get(action)
        if transition is None:
            raise UnknownActionError(action)
        if self._canonical_ids:
            payload = (
                canonical_id(payload)
                if action in _ID_ACTIONS
                else _canonicalize(payload)
            )

        previous = self._state
        current = transition(previous, payload)
        self._state = current
        logger.debug(
            "%s → %d products, %d filtered, error=%r",
            action,
            len(current.products),
            len(current.filtered),
            current.error,
        )

        if current.products is not previous.products:
            self._mirror.save(list(current.products))
        if current is not previous:
            self._notify(action)
        return current

    def _notify(self, action: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state, action)
            except Exception:
                logger.exception(
                    "Store listener %r failed on %s", listener, action
                )

    # ── Named actions ────────────────────────────────────

    def apply_fetch_pending(self) -> CatalogState:
        return self.dispatch(action_name(OperationKind.FETCH_ALL, PENDING))

    def apply_fetch_success(self, products: list[Product]) -> CatalogState:
        return self.dispatch(
            action_name(OperationKind.FETCH_ALL, FULFILLED), products
        )

    def apply_fetch_failure(self) -> CatalogState:
        return self.dispatch(action_name(OperationKind.FETCH_ALL, REJECTED))

    def apply_create_success(self, product: Product) -> CatalogState:
        return self.dispatch(
            action_name(OperationKind.CREATE, FULFILLED), product
        )

    def apply_create_failure(self, message: str | None = None) -> CatalogState:
        return self.dispatch(
            action_name(OperationKind.CREATE, REJECTED), message
        )

    def apply_update_success(self, product: Product | None) -> CatalogState:
        return self.dispatch(
            action_name(OperationKind.UPDATE, FULFILLED), product
        )

    def apply_update_failure(self, message: str | None = None) -> CatalogState:
        return self.dispatch(
            action_name(OperationKind.UPDATE, REJECTED), message
        )

    def apply_delete_success(self, product_id: Any) -> CatalogState:
        return self.dispatch(
            action_name(OperationKind.DELETE, FULFILLED), product_id
        )

    def apply_delete_failure(self, message: str | None = None) -> CatalogState:
        return self.dispatch(
            action_name(OperationKind.DELETE, REJECTED), message
        )

    def set_product_override(self, product: Product) -> CatalogState:
        return self.dispatch(SET_PRODUCT_OVERRIDE, product)

    def remove_from_filtered(self, product_id: Any) -> CatalogState:
        return self.dispatch(REMOVE_FROM_FILTERED, product_id)

    def set_filtered(self, products: list[Product]) -> CatalogState:
        return self.dispatch(SET_FILTERED, products)

    def set_create_error(self, message: str | None) -> CatalogState:
        return self.dispatch(SET_CREATE_ERROR, message)


def create_catalog_store(
    mirror: DurableMirror | None = None,
) -> CatalogStore:
    """Build the session's store with the configured mirror variant."""
    return CatalogStore(
        mirror if mirror is not None else create_mirror(),
        canonical_ids=Settings.CANONICAL_IDS,
    )
