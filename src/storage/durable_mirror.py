# src/storage/durable_mirror.py

"""Durable local mirror of the canonical product collection.

The mirror is best-effort: reads degrade to an empty collection and
writes that fail are logged and dropped, so a broken cache never takes
the store down with it.
"""

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.errors import PersistenceError
from src.models.product import Product

logger = logging.getLogger("catalog_sync.mirror")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS local_storage (
    origin TEXT NOT NULL,
    key    TEXT NOT NULL,
    value  TEXT NOT NULL,
    PRIMARY KEY (origin, key)
);
"""


def serialize_products(products: list[Product]) -> str:
    """Encode a product collection as a JSON array."""
    return json.dumps(
        [p.to_dict() for p in products], ensure_ascii=False
    )


def deserialize_products(raw: str) -> list[Product]:
    """Decode a JSON array written by :func:`serialize_products`.

    Raises ``ValueError`` (``json.JSONDecodeError`` included) when the
    payload is not an array of product objects, including arrays nested
    too deeply to decode.
    """
    try:
        data: Any = json.loads(raw)
    except RecursionError as exc:
        msg = "JSON value is nested too deeply to decode"
        raise ValueError(msg) from exc
    if not isinstance(data, list):
        msg = f"Expected a JSON array, got {type(data).__name__}"
        raise ValueError(msg)
    return [Product.from_dict(item) for item in data]


class DurableMirror(ABC):
    """Load/save primitives for the canonical collection."""

    @abstractmethod
    def save(self, products: list[Product]) -> None:
        """Replace the mirrored collection with *products*."""
        ...

    @abstractmethod
    def load(self) -> list[Product]:
        """Return the mirrored collection, or ``[]``. Never raises."""
        ...


class NullMirror(DurableMirror):
    """Mirror for headless contexts with no local storage."""

    def save(self, products: list[Product]) -> None:
        logger.debug(
            "NullMirror: discarding %d products", len(products)
        )

    def load(self) -> list[Product]:
        return []


class LocalStorageMirror(DurableMirror):
    """Key/value mirror stored in a local SQLite file.

    Values live in a ``local_storage`` table scoped by *origin*, the way
    a browser scopes its storage by site.  The collection is written as
    one JSON value under *namespace*.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        origin: str | None = None,
        namespace: str | None = None,
    ) -> None:
        self.db_path = db_path or Settings.MIRROR_DB_PATH
        self.origin = origin or Settings.MIRROR_ORIGIN
        self.namespace = namespace or Settings.MIRROR_NAMESPACE

    # ── Low-level key/value access ───────────────────────

    def _connect(self) -> sqlite3.Connection:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
            conn.executescript(_SCHEMA)
        except (OSError, sqlite3.Error) as exc:
            msg = f"Local storage unavailable at {self.db_path}: {exc}"
            raise PersistenceError(msg) from exc
        return conn

    def get_item(self, key: str) -> str | None:
        """Return the raw value stored under *key*, or ``None``."""
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM local_storage "
                "WHERE origin = ? AND key = ?",
                (self.origin, key),
            ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        finally:
            conn.close()
        return None if row is None else str(row[0])

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any prior value."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT INTO local_storage (origin, key, value) "
                    "VALUES (?, ?, ?) "
                    "ON CONFLICT(origin, key) "
                    "DO UPDATE SET value = excluded.value",
                    (self.origin, key, value),
                )
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        finally:
            conn.close()

    # ── DurableMirror ────────────────────────────────────

    def save(self, products: list[Product]) -> None:
        try:
            value = serialize_products(products)
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Could not serialise %d products for the mirror: %s",
                len(products),
                exc,
            )
            return
        try:
            self.set_item(self.namespace, value)
        except PersistenceError as exc:
            logger.warning(
                "Could not mirror %d products: %s", len(products), exc
            )
            return
        logger.debug(
            "Mirrored %d products under '%s'",
            len(products),
            self.namespace,
        )

    def load(self) -> list[Product]:
        try:
            raw = self.get_item(self.namespace)
        except PersistenceError as exc:
            logger.warning("Local storage read failed: %s", exc)
            return []
        if raw is None:
            logger.debug("No mirrored products under '%s'", self.namespace)
            return []
        try:
            products = deserialize_products(raw)
        except ValueError as exc:
            logger.warning(
                "Discarding unparsable mirror value for '%s': %s",
                self.namespace,
                exc,
            )
            return []
        logger.debug("Loaded %d mirrored products", len(products))
        return products


def create_mirror(backend: str | None = None) -> DurableMirror:
    """Build the mirror variant named by *backend* (default from Settings).

    ``"local"`` selects :class:`LocalStorageMirror`; ``"none"`` selects
    :class:`NullMirror`.
    """
    name = (backend or Settings.MIRROR_BACKEND).lower()
    if name == "local":
        return LocalStorageMirror()
    if name == "none":
        return NullMirror()
    msg = f"Unknown mirror backend '{name}' (expected 'local' or 'none')"
    raise ValueError(msg)
