# src/filters/product_filter.py

"""Front-end filtering that feeds the store's ``filtered`` view."""

import logging

from src.models.product import Product

logger = logging.getLogger("catalog_sync.filters")


class ProductFilter:
    """Select products by free-text query and category."""

    @staticmethod
    def filter_products(
        products: list[Product],
        query: str = "",
        category: str | None = None,
    ) -> list[Product]:
        """Keep products whose title or description contains *query*.

        Matching is case-insensitive.  When *category* is given the
        product's category must equal it (also case-insensitive).
        An empty query with no category keeps everything.
        """
        needle = query.strip().lower()
        wanted = category.strip().lower() if category else None

        kept: list[Product] = []
        for product in products:
            if wanted is not None and str(product.category or "").lower() != wanted:
                continue
            haystack = f"{product.title or ''}\n{product.description or ''}".lower()
            if needle and needle not in haystack:
                continue
            kept.append(product)

        logger.debug(
            "Filter query=%r category=%r kept %d of %d products",
            query,
            category,
            len(kept),
            len(products),
        )
        return kept

    @staticmethod
    def categories(products: list[Product]) -> list[str]:
        """Distinct categories in first-seen order."""
        seen: dict[str, None] = {}
        for product in products:
            if product.category:
                seen.setdefault(product.category, None)
        return list(seen)
