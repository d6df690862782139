"""Inventory validation against the authoritative catalog record."""
from typing import Optional, Protocol

from storefront.logging import get_logger, sanitize_string_for_logging
from .exceptions import InsufficientInventory, ItemNotFound, PriceUnavailable
from .models import ProductSnapshot

logger = get_logger(__name__)


class ProductLookup(Protocol):
    async def get_product(self, slug: str) -> Optional[ProductSnapshot]:
        ...


class InventoryValidator:
    """
    Checks a desired quantity against freshly fetched stock.

    Snapshots are never cached: every call performs a lookup.
    """

    def __init__(self, catalog: Optional[ProductLookup] = None):
        self._catalog = catalog  # Lazy initialization

    @property
    def catalog(self) -> ProductLookup:
        if self._catalog is None:
            from storefront.services.catalog import get_catalog_client
            self._catalog = get_catalog_client()
        return self._catalog

    async def validate(self, slug: str, desired_quantity: int) -> ProductSnapshot:
        """
        Validate ``desired_quantity`` units of ``slug``.

        Raises:
            ItemNotFound: the catalog has no product for the slug
            PriceUnavailable: the record has no usable price
            InsufficientInventory: desired quantity exceeds available stock
            TransportError: lookup failed for any other reason
        """
        product = await self.catalog.get_product(slug)

        if product is None:
            raise ItemNotFound(slug)

        if not product.price:
            raise PriceUnavailable(slug)

        if desired_quantity > product.quantity:
            logger.info(
                f"Rejected {sanitize_string_for_logging(slug)}: "
                f"requested {desired_quantity}, available {product.quantity}"
            )
            raise InsufficientInventory(slug, desired_quantity, product.quantity)

        return product
