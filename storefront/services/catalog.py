"""
Catalog Lookup Client

Fetches a single product record by slug from the catalog service. Only
price, stock quantity and product id are consumed by the cart.
"""
from typing import Optional

from urllib.parse import quote

import httpx
from pydantic import ValidationError

from storefront.cart.exceptions import TransportError
from storefront.cart.models import ProductSnapshot
from storefront.config import CATALOG_API_URL, CATALOG_PRODUCT_PATH, CATALOG_TIMEOUT
from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


class CatalogClient:
    """Async client for the product lookup endpoint."""

    def __init__(
        self,
        base_url: str = CATALOG_API_URL,
        product_path: str = CATALOG_PRODUCT_PATH,
        timeout: float = CATALOG_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.product_path = product_path
        self.timeout = timeout
        self._http_client = http_client  # Lazy initialization

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._http_client

    def product_url(self, slug: str) -> str:
        path = self.product_path.format(slug=quote(slug, safe=""))
        return f"{self.base_url}{path}"

    async def get_product(self, slug: str) -> Optional[ProductSnapshot]:
        """
        Look up a product by slug.

        Returns:
            ProductSnapshot, or None when the catalog reports no product.

        Raises:
            TransportError: network failure, non-2xx status or unparseable body.
        """
        url = self.product_url(slug)
        try:
            response = await self.http_client.get(url)
        except httpx.TimeoutException as e:
            logger.warning(f"Catalog lookup timed out for {sanitize_string_for_logging(slug)}")
            raise TransportError(str(e) or "Request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Catalog lookup failed for {sanitize_string_for_logging(slug)}: {e}")
            raise TransportError(str(e)) from e

        if response.is_error:
            raise TransportError(f"Request failed with status code {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"Invalid catalog response: {e}") from e

        product = data.get("product") if isinstance(data, dict) else None
        if not product:
            return None

        try:
            return ProductSnapshot.model_validate(product)
        except ValidationError as e:
            raise TransportError(f"Invalid catalog response: {e.errors()[0]['msg']}") from e

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None


# Singleton instance
_catalog_client: Optional[CatalogClient] = None


def get_catalog_client() -> CatalogClient:
    """Get CatalogClient singleton."""
    global _catalog_client
    if _catalog_client is None:
        _catalog_client = CatalogClient()
    return _catalog_client
