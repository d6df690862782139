"""
Cart reducer.

``reduce`` is a pure transition function. It returns the next cart together
with the notification the transition should produce; emitting it is the
caller's job.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple, Union

from storefront.errors import MSG_ADDED, MSG_CLEARED, MSG_QUANTITY_UPDATED, MSG_REMOVED
from .models import Cart, CartLineItem
from .notifications import Notification


@dataclass(frozen=True)
class SetCart:
    """Replace the whole state. Used only at hydration."""
    cart: Cart


@dataclass(frozen=True)
class AddToCart:
    slug: str
    price: Decimal
    product_id: str


@dataclass(frozen=True)
class RemoveFromCart:
    slug: str


@dataclass(frozen=True)
class UpdateQuantity:
    slug: str
    quantity: int
    price: Optional[Decimal] = None
    product_id: Optional[str] = None


@dataclass(frozen=True)
class ClearCart:
    pass


CartAction = Union[SetCart, AddToCart, RemoveFromCart, UpdateQuantity, ClearCart]


def reduce(state: Cart, action: CartAction) -> Tuple[Cart, Optional[Notification]]:
    """Compute the next cart for ``action``."""
    if isinstance(action, AddToCart):
        quantity = state.quantity_of(action.slug) + 1
        item = CartLineItem(quantity=quantity, price=action.price, product_id=action.product_id)
        return state.with_item(action.slug, item), Notification.success(MSG_ADDED)

    if isinstance(action, RemoveFromCart):
        return state.without(action.slug), Notification.success(MSG_REMOVED)

    if isinstance(action, UpdateQuantity):
        # Non-positive quantities remove the line and stay silent
        if action.quantity <= 0:
            return state.without(action.slug), None
        item = CartLineItem(quantity=action.quantity, price=action.price, product_id=action.product_id)
        return state.with_item(action.slug, item), Notification.success(MSG_QUANTITY_UPDATED)

    if isinstance(action, ClearCart):
        return Cart(), Notification.success(MSG_CLEARED)

    if isinstance(action, SetCart):
        return action.cart, None

    return state, None
