"""
Identity collaborator interface.

The cart only reads the current user's display name (or its absence) to
derive the storage key, and listens for login/logout to swap carts.
"""
import json
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from storefront.db import StorageKeys
from storefront.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class User:
    name: str


@dataclass(frozen=True)
class Identity:
    user: Optional[User] = None
    token: str = ""

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def cart_key(self) -> str:
        """Storage key for this identity's cart: cart-<name> or cart-guest."""
        return StorageKeys.cart_key(self.user.name if self.user else None)

    @classmethod
    def guest(cls) -> "Identity":
        return cls()

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "Identity":
        """Parse a stored auth record; corrupt or missing data yields a guest."""
        if not raw:
            return cls.guest()
        try:
            data = json.loads(raw)
            user = data.get("user") or None
            return cls(user=User(name=user["name"]) if user else None, token=data.get("token", ""))
        except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Corrupted auth data, falling back to guest: {e}")
            return cls.guest()


IdentityListener = Callable[[Identity], Awaitable[None]]


class AuthState:
    """Read/write holder for the current identity with change listeners."""

    def __init__(self, identity: Optional[Identity] = None):
        self._identity = identity or Identity.guest()
        self._listeners: List[IdentityListener] = []

    @property
    def identity(self) -> Identity:
        return self._identity

    async def set_identity(self, identity: Optional[Identity]) -> None:
        """Switch identity; listeners run only when the cart key changes."""
        identity = identity or Identity.guest()
        previous, self._identity = self._identity, identity
        if previous.cart_key == identity.cart_key:
            return
        for listener in list(self._listeners):
            await listener(identity)

    def subscribe(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
