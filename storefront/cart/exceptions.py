"""
Cart-related exceptions.
"""

from storefront.errors import (
    ERROR_CART_STORAGE,
    ERROR_ITEM_NOT_FOUND,
    ERROR_NOT_ENOUGH_INVENTORY,
    ERROR_PRICE_UNAVAILABLE,
)


class CartError(Exception):
    """Base exception for cart errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ItemNotFound(CartError):
    """Raised when the catalog has no product for a slug."""

    def __init__(self, slug: str):
        super().__init__(ERROR_ITEM_NOT_FOUND)
        self.slug = slug


class PriceUnavailable(CartError):
    """Raised when the product record carries no usable price."""

    def __init__(self, slug: str):
        super().__init__(ERROR_PRICE_UNAVAILABLE)
        self.slug = slug


class InsufficientInventory(CartError):
    """Raised when the desired quantity exceeds available stock."""

    def __init__(self, slug: str, requested: int, available: int):
        super().__init__(ERROR_NOT_ENOUGH_INVENTORY)
        self.slug = slug
        self.requested = requested
        self.available = available


class TransportError(CartError):
    """Any other lookup failure; carries the raw message."""


class CartStorageError(CartError):
    """Raised when the storage backend fails to read or write."""

    def __init__(self, detail: str):
        super().__init__(f"{ERROR_CART_STORAGE}: {detail}")
        self.detail = detail


class StoreClosedError(CartError):
    """Raised when an operation is invoked on a torn-down CartStore."""

    def __init__(self):
        super().__init__("Cart store is closed")
