# src/store/transitions.py

"""Catalog state and the pure transitions applied to it.

Every transition takes the current :class:`CatalogState` plus a payload
and returns the next state.  Transitions never mutate their input and
never raise: a payload that cannot be applied (an update for an unknown
id, say) yields the unchanged state object.  The container relies on
that identity to decide whether the canonical list changed and needs
mirroring.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from src.config.settings import Settings
from src.models.product import (
    Product,
    ProductId,
    ids_equal_loose,
    ids_equal_strict,
)


class OperationKind(str, Enum):
    """Families of remote operations tracked by the store."""

    FETCH_ALL = "fetch_all"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class OperationStatus(str, Enum):
    """Lifecycle of the latest operation of a given kind."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _idle_statuses() -> dict[OperationKind, OperationStatus]:
    return {kind: OperationStatus.IDLE for kind in OperationKind}


def _no_errors() -> dict[OperationKind, str | None]:
    return {kind: None for kind in OperationKind}


@dataclass(frozen=True)
class CatalogState:
    """Immutable snapshot of the catalog store."""

    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    filtered: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    error: str | None = None
    statuses: dict[OperationKind, OperationStatus] = field(
        default_factory=_idle_statuses
    )
    # Latest failure per kind, cleared when that kind starts again
    errors: dict[OperationKind, str | None] = field(
        default_factory=_no_errors
    )

    @property
    def loading(self) -> bool:
        """True while a fetch-all is in flight."""
        return self.is_pending(OperationKind.FETCH_ALL)

    def is_pending(self, kind: OperationKind) -> bool:
        """True while an operation of *kind* is in flight."""
        return self.statuses[kind] is OperationStatus.PENDING

    def error_for(self, kind: OperationKind) -> str | None:
        """Failure message of the latest operation of *kind*, if any."""
        return self.errors[kind]

    @property
    def create_form(self) -> dict[str, Any]:
        """Loading flag and error scoped to product creation."""
        return {
            "loading": self.is_pending(OperationKind.CREATE),
            "error": self.error_for(OperationKind.CREATE),
        }

    def find(self, product_id: ProductId) -> Product | None:
        """Return the first product in the canonical list with *product_id*."""
        for product in self.products:
            if ids_equal_loose(product.id, product_id):
                return product
        return None

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict view using the front-end field names."""
        return {
            "list": [p.to_dict() for p in self.products],
            "filtered": [p.to_dict() for p in self.filtered],
            "loading": self.loading,
            "error": self.error,
            "statuses": {k.value: v.value for k, v in self.statuses.items()},
            "errors": {k.value: v for k, v in self.errors.items()},
            "create": self.create_form,
        }


Transition = Callable[[CatalogState, Any], CatalogState]


def _with_status(
    state: CatalogState,
    kind: OperationKind,
    status: OperationStatus,
    **changes: Any,
) -> CatalogState:
    statuses = dict(state.statuses)
    statuses[kind] = status
    errors = state.errors
    if status is OperationStatus.PENDING and errors[kind] is not None:
        errors = {**errors, kind: None}
    elif status is OperationStatus.FAILED:
        errors = {**errors, kind: changes.get("error")}
    return replace(state, statuses=statuses, errors=errors, **changes)


def initialize(products: list[Product]) -> CatalogState:
    """Initial state seeded with the mirrored collection."""
    return CatalogState(products=list(products))


# ── Fetch all ────────────────────────────────────────────


def apply_fetch_pending(state: CatalogState, _: None = None) -> CatalogState:
    return _with_status(
        state, OperationKind.FETCH_ALL, OperationStatus.PENDING, error=None
    )


def apply_fetch_success(
    state: CatalogState, products: list[Product]
) -> CatalogState:
    """Replace the canonical list verbatim; no merge or dedup."""
    return _with_status(
        state,
        OperationKind.FETCH_ALL,
        OperationStatus.SUCCEEDED,
        products=list(products or []),
    )


def apply_fetch_failure(state: CatalogState, _: Any = None) -> CatalogState:
    # The transport message is logged by the command; the store keeps
    # a fixed user-facing one.
    return _with_status(
        state,
        OperationKind.FETCH_ALL,
        OperationStatus.FAILED,
        error=Settings.FETCH_FAILED_MESSAGE,
    )


# ── Create ───────────────────────────────────────────────


def apply_create_pending(state: CatalogState, _: None = None) -> CatalogState:
    return _with_status(state, OperationKind.CREATE, OperationStatus.PENDING)


def apply_create_success(
    state: CatalogState, product: Product
) -> CatalogState:
    """Append *product*.  Duplicate ids are accepted as-is."""
    if product is None:
        return _with_status(
            state, OperationKind.CREATE, OperationStatus.SUCCEEDED
        )
    return _with_status(
        state,
        OperationKind.CREATE,
        OperationStatus.SUCCEEDED,
        products=[*state.products, product],
    )


def apply_create_failure(
    state: CatalogState, message: str | None = None
) -> CatalogState:
    return _with_status(
        state,
        OperationKind.CREATE,
        OperationStatus.FAILED,
        error=message or Settings.CREATE_FAILED_MESSAGE,
    )


# ── Update ───────────────────────────────────────────────


def apply_update_pending(state: CatalogState, _: None = None) -> CatalogState:
    return _with_status(state, OperationKind.UPDATE, OperationStatus.PENDING)


def apply_update_success(
    state: CatalogState, product: Product | None
) -> CatalogState:
    """Replace the first entry whose id loosely equals ``product.id``.

    A payload without an id, or an id absent from the list, only marks
    the operation succeeded and leaves the list object untouched.
    """
    index = -1
    if product is not None and product.id is not None:
        index = next(
            (
                i
                for i, existing in enumerate(state.products)
                if ids_equal_loose(existing.id, product.id)
            ),
            -1,
        )
    if index == -1:
        return _with_status(
            state, OperationKind.UPDATE, OperationStatus.SUCCEEDED
        )
    products = list(state.products)
    products[index] = product
    return _with_status(
        state,
        OperationKind.UPDATE,
        OperationStatus.SUCCEEDED,
        products=products,
    )


def apply_update_failure(
    state: CatalogState, message: str | None = None
) -> CatalogState:
    return _with_status(
        state,
        OperationKind.UPDATE,
        OperationStatus.FAILED,
        error=message or Settings.UPDATE_FAILED_MESSAGE,
    )


# ── Delete ───────────────────────────────────────────────


def apply_delete_pending(state: CatalogState, _: None = None) -> CatalogState:
    return _with_status(state, OperationKind.DELETE, OperationStatus.PENDING)


def apply_delete_success(
    state: CatalogState, product_id: ProductId
) -> CatalogState:
    """Drop every strictly-equal id from both ``products`` and ``filtered``."""
    return _with_status(
        state,
        OperationKind.DELETE,
        OperationStatus.SUCCEEDED,
        products=[
            p for p in state.products
            if not ids_equal_strict(p.id, product_id)
        ],
        filtered=[
            p for p in state.filtered
            if not ids_equal_strict(p.id, product_id)
        ],
    )


def apply_delete_failure(
    state: CatalogState, message: str | None = None
) -> CatalogState:
    return _with_status(
        state,
        OperationKind.DELETE,
        OperationStatus.FAILED,
        error=message or Settings.DELETE_FAILED_MESSAGE,
    )


# ── Direct actions ───────────────────────────────────────


def set_product_override(
    state: CatalogState, product: Product
) -> CatalogState:
    """Replace the strictly-matching entry without a remote call."""
    if product is None:
        return state
    for i, existing in enumerate(state.products):
        if ids_equal_strict(existing.id, product.id):
            products = list(state.products)
            products[i] = product
            return replace(state, products=products)
    return state


def remove_from_filtered(
    state: CatalogState, product_id: ProductId
) -> CatalogState:
    return replace(
        state,
        filtered=[
            p for p in state.filtered
            if not ids_equal_strict(p.id, product_id)
        ],
    )


def set_filtered(
    state: CatalogState, products: list[Product]
) -> CatalogState:
    return replace(state, filtered=list(products or []))


def set_create_error(
    state: CatalogState, message: str | None
) -> CatalogState:
    """Set or clear the creation error without touching the shared one."""
    return replace(
        state, errors={**state.errors, OperationKind.CREATE: message}
    )
