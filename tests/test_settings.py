# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_base_url_has_no_trailing_slash(self) -> None:
        """BASE_URL is joined with PRODUCTS_PATH, so no trailing '/'."""
        self.assertFalse(Settings.BASE_URL.endswith("/"))

    def test_products_path_is_absolute(self) -> None:
        self.assertEqual(Settings.PRODUCTS_PATH, "/products")

    def test_request_timeout_is_positive_int(self) -> None:
        """REQUEST_TIMEOUT must be a positive integer."""
        self.assertIsInstance(Settings.REQUEST_TIMEOUT, int)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)

    def test_mirror_namespace_is_products(self) -> None:
        """The mirror key is fixed to 'products'."""
        self.assertEqual(Settings.MIRROR_NAMESPACE, "products")

    def test_mirror_backend_is_known(self) -> None:
        self.assertIn(Settings.MIRROR_BACKEND, ("local", "none"))

    def test_fetch_failure_message(self) -> None:
        self.assertEqual(
            Settings.FETCH_FAILED_MESSAGE, "Failed to fetch products"
        )

    def test_fallback_messages_are_distinct(self) -> None:
        """Each operation family has its own fallback message."""
        messages = {
            Settings.FETCH_FAILED_MESSAGE,
            Settings.CREATE_FAILED_MESSAGE,
            Settings.UPDATE_FAILED_MESSAGE,
            Settings.DELETE_FAILED_MESSAGE,
        }
        self.assertEqual(len(messages), 4)

    def test_default_headers_accept_json(self) -> None:
        self.assertEqual(
            Settings.DEFAULT_HEADERS["Accept"], "application/json"
        )

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.DATA_DIR, Path)
        self.assertIsInstance(Settings.MIRROR_DB_PATH, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_canonical_ids_is_bool(self) -> None:
        self.assertIsInstance(Settings.CANONICAL_IDS, bool)


if __name__ == "__main__":
    unittest.main()
