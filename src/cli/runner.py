# src/cli/runner.py

"""Headless catalog front end built on the store and its commands."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from typing import Any

from rich.console import Console
from rich.table import Table

from src.filters.product_filter import ProductFilter
from src.models.product import Product, ProductId
from src.services.catalog_commands import CatalogCommands, CommandResult
from src.store.catalog_store import CatalogStore, create_catalog_store

logger = logging.getLogger("catalog_sync.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

_EDITABLE_FIELDS: tuple[str, ...] = (
    "title",
    "price",
    "category",
    "description",
    "image",
)


def parse_product_id(raw: str) -> ProductId:
    """Numeric ids become ``int``; anything else stays a string."""
    text = raw.strip()
    return int(text) if text.isdigit() else text


def _field_changes(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the product fields that were given on the command line."""
    return {
        name: getattr(args, name)
        for name in _EDITABLE_FIELDS
        if getattr(args, name, None) is not None
    }


def _format_price(price: object) -> str:
    """Two-decimal price; remote values that are not numbers print as-is."""
    if isinstance(price, (int, float)) and not isinstance(price, bool):
        return f"{price:,.2f}"
    return "-" if price is None else str(price)


def _print_table(products: list[Product], title: str) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(title=title, show_lines=False, title_style="bold cyan")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Title", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Category", style="magenta")

    for p in products:
        table.add_row(
            str(p.id) if p.id is not None else "-",
            str(p.title or "")[:50],
            _format_price(p.price),
            str(p.category or ""),
        )
    Console().print(table)


def _print_products(
    products: list[Product], output_format: str, title: str
) -> None:
    if output_format == "table":
        _print_table(products, title)
        return
    json.dump(
        [p.to_dict() for p in products],
        sys.stdout,
        ensure_ascii=False,
        indent=2,
    )
    sys.stdout.write("\n")


def _report(result: CommandResult) -> int:
    """Print the outcome of a command and map it to an exit code."""
    if result.ok:
        return 0
    _err.print(f"[red]{result.kind.value} failed: {result.message}[/red]")
    return 1


# ── Sub-commands ─────────────────────────────────────────


async def run_list(
    store: CatalogStore,
    commands: CatalogCommands,
    args: argparse.Namespace,
) -> int:
    """Show the catalog, optionally narrowed into the filtered view."""
    if args.refresh:
        result = await commands.fetch_all()
        if not result.ok:
            _err.print("[yellow]Showing mirrored catalog instead.[/yellow]")
            _report(result)

    products = store.state.products
    title = "Catalog"
    if args.search or args.category:
        store.set_filtered(
            ProductFilter.filter_products(
                products, args.search or "", args.category
            )
        )
        products = store.state.filtered
        title = "Filtered catalog"

    if not products:
        _err.print("[yellow]No products.[/yellow]")
    _print_products(products, args.output_format, title)
    return 0


async def run_show(
    store: CatalogStore,
    commands: CatalogCommands,
    args: argparse.Namespace,
) -> int:
    """Print a single product from the store."""
    product_id = parse_product_id(args.id)
    product = store.state.find(product_id)
    if product is None and not store.state.products:
        await commands.fetch_all()
        product = store.state.find(product_id)
    if product is None:
        _err.print(f"[red]No product with id {product_id}.[/red]")
        return 1
    json.dump(product.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


async def run_create(
    store: CatalogStore,
    commands: CatalogCommands,
    args: argparse.Namespace,
) -> int:
    result = await commands.create(Product(**_field_changes(args)))
    if result.ok:
        _err.print(f"[green]✓ Created product {result.payload.id}[/green]")
    return _report(result)


async def run_update(
    store: CatalogStore,
    commands: CatalogCommands,
    args: argparse.Namespace,
) -> int:
    """Apply the given field changes to a product already in the store."""
    product_id = parse_product_id(args.id)
    existing = store.state.find(product_id)
    if existing is None:
        _err.print(
            f"[red]No product with id {product_id} in the local catalog; "
            "run 'refresh' first.[/red]"
        )
        return 1
    changes = _field_changes(args)
    if not changes:
        _err.print("[yellow]Nothing to update.[/yellow]")
        return 0
    result = await commands.update(replace(existing, **changes))
    if result.ok:
        _err.print(f"[green]✓ Updated product {product_id}[/green]")
    return _report(result)


async def run_delete(
    store: CatalogStore,
    commands: CatalogCommands,
    args: argparse.Namespace,
) -> int:
    product_id = parse_product_id(args.id)
    result = await commands.delete(product_id)
    if result.ok:
        _err.print(
            f"[green]✓ Deleted product {product_id} "
            f"({len(store.state.products)} remaining)[/green]"
        )
    return _report(result)


async def run_refresh(
    store: CatalogStore,
    commands: CatalogCommands,
    args: argparse.Namespace,
) -> int:
    result = await commands.fetch_all()
    if result.ok:
        _err.print(
            f"[green]✓ Synced {len(store.state.products)} products[/green]"
        )
    return _report(result)


_HANDLERS = {
    "list": run_list,
    "show": run_show,
    "create": run_create,
    "update": run_update,
    "delete": run_delete,
    "refresh": run_refresh,
}


async def run_command(
    args: argparse.Namespace,
    store: CatalogStore | None = None,
    commands: CatalogCommands | None = None,
) -> int:
    """Build the session store and run the selected sub-command."""
    store = store or create_catalog_store()
    commands = commands or CatalogCommands(store)
    handler = _HANDLERS[args.command]
    logger.info("Running '%s'", args.command)
    try:
        return await handler(store, commands, args)
    finally:
        commands.client.close()
