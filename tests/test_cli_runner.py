# tests/test_cli_runner.py

"""Tests for the headless CLI runner."""

import argparse
import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from src.api.catalog_client import CatalogClient
from src.cli.runner import _print_table, parse_product_id, run_command
from src.models.errors import TransportError
from src.models.product import Product
from src.services.catalog_commands import CatalogCommands
from src.storage.durable_mirror import NullMirror
from src.store.catalog_store import CatalogStore


def _args(command: str, **overrides: Any) -> argparse.Namespace:
    """Namespace shaped like main._build_parser() output."""
    defaults: dict[str, Any] = {
        "command": command,
        "id": None,
        "search": None,
        "category": None,
        "refresh": False,
        "output_format": "json",
        "title": None,
        "price": None,
        "description": None,
        "image": None,
    }
    defaults.update(overrides)
    return argparse.Namespace(**defaults)


class TestParseProductId(unittest.TestCase):
    """parse_product_id()"""

    def test_digits_become_int(self) -> None:
        self.assertEqual(parse_product_id(" 12 "), 12)

    def test_other_text_stays_string(self) -> None:
        self.assertEqual(parse_product_id("sku-12"), "sku-12")


class TestPrintTable(unittest.TestCase):
    """_print_table() with loosely-typed remote values."""

    def _render(self, products: list[Product]) -> str:
        with patch("src.cli.runner.Console") as console_cls:
            _print_table(products, "Catalog")
        table = console_cls.return_value.print.call_args.args[0]
        return "|".join(
            "".join(str(cell) for cell in column.cells)
            for column in table.columns
        )

    def test_string_price_and_null_title(self) -> None:
        product = Product.from_dict(
            {"id": 1, "title": None, "price": "10", "category": None}
        )
        rendered = self._render([product])
        self.assertIn("10", rendered)

    def test_null_price(self) -> None:
        product = Product.from_dict({"id": 2, "title": "A", "price": None})
        rendered = self._render([product])
        self.assertIn("A", rendered)

    def test_numeric_price_two_decimals(self) -> None:
        rendered = self._render([Product(id=3, title="B", price=1234.5)])
        self.assertIn("1,234.50", rendered)


class TestRunCommand(unittest.IsolatedAsyncioTestCase):
    """run_command() against a mocked client."""

    def setUp(self) -> None:
        self.store = CatalogStore(NullMirror())
        self.client = MagicMock(spec=CatalogClient)
        self.commands = CatalogCommands(self.store, self.client)

    async def _run(self, args: argparse.Namespace) -> tuple[int, str]:
        with patch("src.cli.runner.sys.stdout") as stdout:
            code = await run_command(args, self.store, self.commands)
        written = "".join(c.args[0] for c in stdout.write.call_args_list)
        return code, written

    async def test_refresh_success(self) -> None:
        self.client.list_products.return_value = [Product(id=1, title="A")]
        code, _ = await self._run(_args("refresh"))
        self.assertEqual(code, 0)
        self.assertEqual(len(self.store.state.products), 1)
        self.client.close.assert_called_once_with()

    async def test_refresh_failure_exit_code(self) -> None:
        self.client.list_products.side_effect = TransportError("down")
        with self.assertLogs("catalog_sync.commands", level="ERROR"):
            code, _ = await self._run(_args("refresh"))
        self.assertEqual(code, 1)

    async def test_list_json_with_filter(self) -> None:
        self.store.apply_fetch_success(
            [
                Product(id=1, title="Jacket", category="clothing"),
                Product(id=2, title="Ring", category="jewelery"),
            ]
        )
        code, written = await self._run(_args("list", search="ring"))
        self.assertEqual(code, 0)
        self.assertEqual([p["id"] for p in json.loads(written)], [2])
        self.assertEqual([p.id for p in self.store.state.filtered], [2])

    async def test_show_unknown_id(self) -> None:
        self.store.apply_fetch_success([Product(id=1)])
        code, _ = await self._run(_args("show", id="9"))
        self.assertEqual(code, 1)

    async def test_show_known_id(self) -> None:
        self.store.apply_fetch_success([Product(id=1, title="A")])
        code, written = await self._run(_args("show", id="1"))
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(written)["title"], "A")

    async def test_create(self) -> None:
        self.client.create_product.side_effect = (
            lambda product: product.with_id(21)
        )
        code, _ = await self._run(_args("create", title="New", price=4.5))
        self.assertEqual(code, 0)
        self.assertEqual(self.store.state.products[0].id, 21)
        sent: Product = self.client.create_product.call_args.args[0]
        self.assertEqual((sent.title, sent.price), ("New", 4.5))

    async def test_update_merges_changes(self) -> None:
        self.store.apply_fetch_success(
            [Product(id=1, title="Old", price=2.0)]
        )
        self.client.update_product.side_effect = (
            lambda product_id, product: product
        )
        code, _ = await self._run(_args("update", id="1", price=3.0))
        self.assertEqual(code, 0)
        updated = self.store.state.products[0]
        self.assertEqual((updated.title, updated.price), ("Old", 3.0))

    async def test_update_unknown_id(self) -> None:
        code, _ = await self._run(_args("update", id="1", price=3.0))
        self.assertEqual(code, 1)
        self.client.update_product.assert_not_called()

    async def test_delete(self) -> None:
        self.store.apply_fetch_success([Product(id=1), Product(id=2)])
        code, _ = await self._run(_args("delete", id="2"))
        self.assertEqual(code, 0)
        self.client.delete_product.assert_called_once_with(2)
        self.assertEqual([p.id for p in self.store.state.products], [1])


if __name__ == "__main__":
    unittest.main()
