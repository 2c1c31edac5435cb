# src/models/product.py

"""Product data model shared by the store, mirror and remote client."""

import re
from dataclasses import dataclass, field, replace
from typing import Any

ProductId = int | str

# Decimal literal as a numeric-string id may spell it
_NUMERIC_TEXT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

_KNOWN_FIELDS: tuple[str, ...] = (
    "id",
    "title",
    "price",
    "category",
    "description",
    "image",
)


@dataclass(frozen=True)
class Product:
    """A single catalog entry.

    ``id`` is ``None`` for a product that has not been created remotely
    yet.  Keys the remote returns beyond the known fields (``rating`` on
    most catalogs) are kept in ``extras`` so a product survives a trip
    through the mirror unchanged.
    """

    id: ProductId | None = None
    title: str = ""
    price: float = 0.0
    category: str = ""
    description: str = ""
    image: str = ""
    extras: dict[str, Any] = field(
        default_factory=lambda: dict[str, Any]()
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from a decoded JSON object.

        Raises ``ValueError`` when *data* is not a mapping.
        """
        if not isinstance(data, dict):
            msg = f"Expected a product object, got {type(data).__name__}"
            raise ValueError(msg)
        return cls(
            id=data.get("id"),
            title=data.get("title", ""),
            price=data.get("price", 0.0),
            category=data.get("category", ""),
            description=data.get("description", ""),
            image=data.get("image", ""),
            extras={
                k: v for k, v in data.items() if k not in _KNOWN_FIELDS
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict, ``id`` first when present."""
        data: dict[str, Any] = {}
        if self.id is not None:
            data["id"] = self.id
        data.update(self.to_payload())
        return data

    def to_payload(self) -> dict[str, Any]:
        """Request body for create/update calls (everything but ``id``)."""
        return {
            "title": self.title,
            "price": self.price,
            "category": self.category,
            "description": self.description,
            "image": self.image,
            **self.extras,
        }

    def with_id(self, product_id: ProductId | None) -> "Product":
        """Return a copy carrying *product_id*."""
        return replace(self, id=product_id)


# ── Identifier comparison ───────────────────────────────


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def ids_equal_strict(left: object, right: object) -> bool:
    """Same-type comparison: ``1`` and ``"1"`` are different ids."""
    if isinstance(left, str) != isinstance(right, str):
        return False
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def ids_equal_loose(left: object, right: object) -> bool:
    """Cross-type comparison: a numeric id equals its string form."""
    if ids_equal_strict(left, right):
        return True
    if isinstance(left, str) and _is_number(right):
        left, right = right, left
    if _is_number(left) and isinstance(right, str):
        text = right.strip()
        if not text:
            return left == 0
        if _NUMERIC_TEXT.fullmatch(text) is None:
            return False
        return float(text) == left
    return False


def canonical_id(value: ProductId | None) -> ProductId | None:
    """Normalise an id to its string form (``1``, ``1.0`` → ``"1"``)."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
