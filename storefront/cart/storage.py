"""
Per-identity cart persistence.

The whole cart is stored as one JSON document under ``cart-<identity>``.
Writes are last-write-wins; there is no cross-context coordination.
"""
import json
from typing import Dict, Optional, Protocol

from pydantic import ValidationError

from storefront.logging import get_logger, sanitize_string_for_logging
from .exceptions import CartStorageError
from .models import Cart

logger = get_logger(__name__)


class KeyValueBackend(Protocol):
    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> object:
        ...

    async def delete(self, *keys: str) -> object:
        ...


class LocalStorage:
    """In-process key/value store scoped to a single browsing context."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._data[key] = value
        return True

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            if self._data.pop(key, None) is not None:
                removed += 1
        return removed


class CartStorage:
    """Loads and saves carts keyed by identity."""

    def __init__(self, backend: Optional[KeyValueBackend] = None):
        self._backend = backend  # Lazy initialization

    @property
    def backend(self) -> KeyValueBackend:
        """Storage backend; defaults to the Upstash Redis client."""
        if self._backend is None:
            from storefront.db import get_redis
            try:
                self._backend = get_redis()
            except ValueError as e:
                raise CartStorageError(str(e)) from e
        return self._backend

    async def load(self, identity_key: str) -> Cart:
        """Load the cart stored under ``identity_key``; absent key gives an empty cart."""
        try:
            data = await self.backend.get(identity_key)
        except CartStorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to load cart {sanitize_string_for_logging(identity_key)}: {e}")
            raise CartStorageError(str(e)) from e

        if not data:
            return Cart()

        try:
            return Cart.from_dict(json.loads(data))
        except (json.JSONDecodeError, ValidationError) as e:
            # Corrupted data - clear it and start empty
            logger.warning(f"Corrupted cart data under {sanitize_string_for_logging(identity_key)}: {e}")
            await self.delete(identity_key)
            return Cart()

    async def save(self, identity_key: str, cart: Cart) -> None:
        """Write the entire cart under ``identity_key``."""
        try:
            await self.backend.set(identity_key, json.dumps(cart.to_dict()))
        except CartStorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to save cart {sanitize_string_for_logging(identity_key)}: {e}")
            raise CartStorageError(str(e)) from e

    async def delete(self, identity_key: str) -> None:
        try:
            await self.backend.delete(identity_key)
        except CartStorageError:
            raise
        except Exception as e:
            logger.error(f"Failed to delete cart {sanitize_string_for_logging(identity_key)}: {e}")
            raise CartStorageError(str(e)) from e
