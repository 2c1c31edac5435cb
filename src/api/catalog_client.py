# src/api/catalog_client.py

"""Blocking client for the remote ``/products`` resource."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.errors import TransportError
from src.models.product import Product, ProductId

logger = logging.getLogger("catalog_sync.api")


class CatalogClient:
    """GET/POST/PUT/DELETE over ``{base_url}/products``.

    Every failure (network error, non-2xx status, undecodable body) is
    raised as :class:`TransportError`.  No retries happen here; the
    command layer decides what a failure means for the store.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.settings = Settings()
        self.base_url = (base_url or self.settings.BASE_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _url(self, product_id: ProductId | None = None) -> str:
        url = f"{self.base_url}{self.settings.PRODUCTS_PATH}"
        if product_id is not None:
            url = f"{url}/{product_id}"
        return url

    def _request(
        self,
        method: str,
        url: str,
        payload: dict[str, Any] | None = None,
    ) -> curl_requests.Response:
        """Send one request and return the 2xx response."""
        try:
            resp = self.session.request(
                method,
                url,
                headers=self.settings.DEFAULT_HEADERS,
                json=payload,
                timeout=self._request_timeout,
            )
        except Exception as exc:
            msg = f"{method} {url} failed: {exc}"
            raise TransportError(msg, url=url) from exc

        if not 200 <= resp.status_code < 300:
            msg = f"{method} {url} returned HTTP {resp.status_code}"
            raise TransportError(msg, url=url, status_code=resp.status_code)

        logger.debug("%s %s → HTTP %d", method, url, resp.status_code)
        return resp

    @staticmethod
    def _decode(resp: curl_requests.Response, url: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            msg = f"Response from {url} is not valid JSON: {exc}"
            raise TransportError(
                msg, url=url, status_code=resp.status_code
            ) from exc

    def _decode_product(
        self, resp: curl_requests.Response, url: str
    ) -> Product:
        data = self._decode(resp, url)
        try:
            return Product.from_dict(data)
        except ValueError as exc:
            raise TransportError(
                str(exc), url=url, status_code=resp.status_code
            ) from exc

    # ── Resource operations ──────────────────────────────

    def list_products(self) -> list[Product]:
        """``GET /products``: the full remote collection."""
        url = self._url()
        resp = self._request("GET", url)
        data = self._decode(resp, url)
        if not isinstance(data, list):
            msg = f"Expected a product array from {url}"
            raise TransportError(msg, url=url, status_code=resp.status_code)
        try:
            products = [Product.from_dict(item) for item in data]
        except ValueError as exc:
            raise TransportError(
                str(exc), url=url, status_code=resp.status_code
            ) from exc
        logger.info("Fetched %d products from %s", len(products), url)
        return products

    def create_product(self, product: Product) -> Product:
        """``POST /products``; returns the entity with its new id."""
        url = self._url()
        resp = self._request("POST", url, product.to_payload())
        return self._decode_product(resp, url)

    def update_product(
        self, product_id: ProductId, product: Product
    ) -> Product:
        """``PUT /products/{id}`` with every field except ``id``."""
        url = self._url(product_id)
        resp = self._request("PUT", url, product.to_payload())
        return self._decode_product(resp, url)

    def delete_product(self, product_id: ProductId) -> None:
        """``DELETE /products/{id}``.  The response body is ignored."""
        self._request("DELETE", self._url(product_id))
