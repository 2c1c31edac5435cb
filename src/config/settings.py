# src/config/settings.py

"""Central configuration for the catalog_sync store."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Central configuration for the catalog_sync store."""

    # --- Remote resource ---
    BASE_URL: str = os.getenv(
        "CATALOG_BASE_URL", "https://fakestoreapi.com"
    ).rstrip("/")
    PRODUCTS_PATH: str = "/products"
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
        "Content-Type": "application/json",
    }

    # --- Durable mirror ---
    MIRROR_BACKEND: str = os.getenv("CATALOG_MIRROR", "local")  # "local" | "none"
    MIRROR_NAMESPACE: str = "products"
    MIRROR_ORIGIN: str = os.getenv("CATALOG_ORIGIN", BASE_URL)

    # --- Identifiers ---
    # Normalise every product id to its string form on ingestion
    CANONICAL_IDS: bool = _env_flag("CATALOG_CANONICAL_IDS")

    # --- Error messages ---
    FETCH_FAILED_MESSAGE: str = "Failed to fetch products"
    CREATE_FAILED_MESSAGE: str = "Failed to create product"
    UPDATE_FAILED_MESSAGE: str = "Failed to update product"
    DELETE_FAILED_MESSAGE: str = "Failed to delete product"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    MIRROR_DB_PATH: Path = DATA_DIR / "local_storage.db"
    LOGS_DIR: Path = BASE_DIR / "logs"
