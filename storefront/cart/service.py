"""
CartStore: the public cart operations.

Add and update validate against the catalog before dispatching. Every
successful dispatch is followed by a notification (when the transition has
one) and a write of the whole cart under the current identity key.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from storefront.auth.identity import AuthState, Identity
from storefront.errors import ERROR_ADD_PREFIX, ERROR_UPDATE_PREFIX
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.services.money import format_money
from .exceptions import CartError, InsufficientInventory, PriceUnavailable, StoreClosedError
from .models import Cart
from .notifications import LoggingNotifier, Notification, Notifier
from .reducer import AddToCart, CartAction, ClearCart, RemoveFromCart, SetCart, UpdateQuantity, reduce
from .storage import CartStorage
from .validator import InventoryValidator

logger = get_logger(__name__)


def failure_message(error: CartError, operation_prefix: str) -> str:
    """User-facing copy for a failed add/update."""
    if isinstance(error, InsufficientInventory):
        return f"{operation_prefix}: {error.message}"
    if isinstance(error, PriceUnavailable):
        # Both add and update report a missing price with the add prefix
        return f"{ERROR_ADD_PREFIX}: {error.message}"
    return error.message


class _SlugLock:
    """A lock plus the number of tasks holding or waiting on it."""

    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = asyncio.Lock()
        self.users = 0


class CartStore:
    """
    Owns the in-memory cart for one browsing context.

    Lifecycle: create, ``await hydrate()``, use, ``close()``. The store
    follows identity changes published by ``AuthState`` and reloads the cart
    stored under the new identity key.

    Operations wait for any hydration in progress before they read the
    cart. Mutations on the same slug are serialized, so two concurrent adds
    validate one after the other. A validation that resolves after
    ``close()`` or an identity switch is discarded.
    """

    def __init__(
        self,
        auth: Optional[AuthState] = None,
        validator: Optional[InventoryValidator] = None,
        storage: Optional[CartStorage] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.auth = auth or AuthState()
        self.validator = validator or InventoryValidator()
        self.storage = storage or CartStorage()
        self.notifier = notifier or LoggingNotifier()

        self._cart = Cart()
        self._identity_key = self.auth.identity.cart_key
        self._locks: Dict[str, _SlugLock] = {}
        self._generation = 0
        self._closed = False
        # Cleared while a hydration is loading; operations wait on it
        self._hydrated = asyncio.Event()
        self._hydrated.set()
        self._unsubscribe = self.auth.subscribe(self._on_identity_change)

    async def __aenter__(self) -> "CartStore":
        await self.hydrate()
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def identity_key(self) -> str:
        return self._identity_key

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def total_display(self) -> str:
        """Cart total formatted as USD, e.g. ``$1,234.50``."""
        return format_money(self._cart.total_price, "USD")

    def checkout_payload(self) -> dict:
        """Snapshot of the cart handed to checkout as an opaque payload."""
        return self._cart.to_dict()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def hydrate(self) -> Cart:
        """
        Replace the in-memory cart with the one stored under the current identity.

        The identity key switches only once the new cart is loaded. If the
        load fails, the previous key and cart stay in place and the error
        propagates.
        """
        self._ensure_open()
        self._generation += 1
        generation = self._generation
        key = self.auth.identity.cart_key
        self._hydrated.clear()

        try:
            cart = await self.storage.load(key)
        finally:
            # A newer hydration owns the gate from here on
            if generation == self._generation:
                self._hydrated.set()

        if generation != self._generation:
            logger.debug(f"Discarding superseded hydration for {sanitize_string_for_logging(key)}")
            return self._cart

        self._identity_key = key
        self._cart, _ = reduce(self._cart, SetCart(cart))
        logger.info(f"Cart hydrated for {sanitize_string_for_logging(key)} ({cart.item_count} items)")
        return self._cart

    def close(self) -> None:
        """Tear the store down. In-flight operations will not dispatch."""
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._unsubscribe()
        self._locks.clear()
        # Wake operations parked behind an unfinished hydration
        self._hydrated.set()

    async def _on_identity_change(self, identity: Identity) -> None:
        if self._closed:
            return
        logger.info(f"Identity changed, switching cart to {sanitize_string_for_logging(identity.cart_key)}")
        await self.hydrate()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def add_to_cart(self, slug: str) -> Optional[Cart]:
        """Add one unit of ``slug``. Returns the new cart, or None on failure."""
        self._ensure_open()
        async with self._serialized(slug):
            await self._wait_hydrated()
            generation = self._generation
            desired = self._cart.quantity_of(slug) + 1
            try:
                product = await self.validator.validate(slug, desired)
            except CartError as e:
                self._notify(Notification.error(failure_message(e, ERROR_ADD_PREFIX)))
                return None

            if self._is_stale(generation, slug):
                return None
            return await self._dispatch(AddToCart(slug=slug, price=product.price, product_id=product.product_id))

    async def remove_from_cart(self, slug: str) -> Cart:
        """Remove ``slug`` entirely. Never validates; always succeeds."""
        self._ensure_open()
        await self._wait_hydrated()
        return await self._dispatch(RemoveFromCart(slug=slug))

    async def update_quantity(self, slug: str, quantity: int) -> Optional[Cart]:
        """
        Set ``slug`` to exactly ``quantity`` units.

        A non-positive quantity removes the line without a catalog round
        trip, since the result is a removal whatever the stock says.
        """
        self._ensure_open()
        async with self._serialized(slug):
            await self._wait_hydrated()
            if quantity <= 0:
                return await self._dispatch(UpdateQuantity(slug=slug, quantity=quantity))

            generation = self._generation
            try:
                product = await self.validator.validate(slug, quantity)
            except CartError as e:
                self._notify(Notification.error(failure_message(e, ERROR_UPDATE_PREFIX)))
                return None

            if self._is_stale(generation, slug):
                return None
            return await self._dispatch(
                UpdateQuantity(slug=slug, quantity=quantity, price=product.price, product_id=product.product_id)
            )

    async def clear_cart(self) -> Cart:
        """Empty the cart. Never validates."""
        self._ensure_open()
        await self._wait_hydrated()
        return await self._dispatch(ClearCart())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _dispatch(self, action: CartAction) -> Cart:
        # No await between the readiness check and this reduce
        self._cart, effect = reduce(self._cart, action)
        if effect is not None:
            self._notify(effect)
        await self.storage.save(self._identity_key, self._cart)
        return self._cart

    def _notify(self, notification: Notification) -> None:
        self.notifier.notify(notification)

    async def _wait_hydrated(self) -> None:
        await self._hydrated.wait()
        self._ensure_open()

    @asynccontextmanager
    async def _serialized(self, slug: str) -> AsyncIterator[None]:
        """Hold the per-slug lock; the entry is dropped once nobody uses it."""
        entry = self._locks.get(slug)
        if entry is None:
            entry = self._locks[slug] = _SlugLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0 and self._locks.get(slug) is entry:
                del self._locks[slug]

    def _is_stale(self, generation: int, slug: str) -> bool:
        if generation == self._generation:
            return False
        logger.info(f"Dropping stale cart update for {sanitize_string_for_logging(slug)}")
        return True

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError()


async def open_cart_store(
    auth: Optional[AuthState] = None,
    validator: Optional[InventoryValidator] = None,
    storage: Optional[CartStorage] = None,
    notifier: Optional[Notifier] = None,
) -> CartStore:
    """Create a CartStore and hydrate it under the current identity."""
    store = CartStore(auth=auth, validator=validator, storage=storage, notifier=notifier)
    await store.hydrate()
    return store
