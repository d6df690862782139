"""Cart package: models, reducer, validator, storage, and the CartStore facade."""
from .exceptions import (
    CartError,
    CartStorageError,
    InsufficientInventory,
    ItemNotFound,
    PriceUnavailable,
    StoreClosedError,
    TransportError,
)
from .models import Cart, CartLineItem, ProductSnapshot
from .notifications import LoggingNotifier, Notification, NotificationLevel, RecordingNotifier
from .reducer import AddToCart, ClearCart, RemoveFromCart, SetCart, UpdateQuantity, reduce
from .service import CartStore, open_cart_store
from .storage import CartStorage, LocalStorage
from .validator import InventoryValidator

__all__ = [
    "AddToCart",
    "Cart",
    "CartError",
    "CartLineItem",
    "CartStorage",
    "CartStorageError",
    "CartStore",
    "ClearCart",
    "InsufficientInventory",
    "InventoryValidator",
    "ItemNotFound",
    "LocalStorage",
    "LoggingNotifier",
    "Notification",
    "NotificationLevel",
    "PriceUnavailable",
    "ProductSnapshot",
    "RecordingNotifier",
    "RemoveFromCart",
    "SetCart",
    "StoreClosedError",
    "TransportError",
    "UpdateQuantity",
    "open_cart_store",
    "reduce",
]
