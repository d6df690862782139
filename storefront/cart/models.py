"""Cart models with Decimal-based pricing."""
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, RootModel, field_validator

from storefront.services.money import to_decimal, multiply


@dataclass(frozen=True)
class CartLineItem:
    """Quantity, price snapshot and product reference stored per slug."""
    quantity: int
    price: Decimal
    product_id: str

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("quantity must be a positive integer")
        object.__setattr__(self, "price", to_decimal(self.price))

    @property
    def total_price(self) -> Decimal:
        """Price for all units of this line."""
        return multiply(self.price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to the persisted/checkout shape."""
        return {
            "quantity": self.quantity,
            "price": str(self.price),
            "productId": self.product_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        """Create from a validated stored entry."""
        entry = StoredLineItem.model_validate(data)
        return cls(quantity=entry.quantity, price=entry.price, product_id=entry.product_id)


@dataclass(frozen=True)
class Cart:
    """
    Immutable mapping of product slug to line item.

    Every transition builds a new Cart; nothing mutates one in place.
    """
    items: Mapping[str, CartLineItem] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cart):
            return NotImplemented
        return dict(self.items) == dict(other.items)

    def __hash__(self):
        return hash(frozenset(self.items.items()))

    def __contains__(self, slug: str) -> bool:
        return slug in self.items

    def __getitem__(self, slug: str) -> CartLineItem:
        return self.items[slug]

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def get(self, slug: str) -> Optional[CartLineItem]:
        return self.items.get(slug)

    def quantity_of(self, slug: str) -> int:
        """Current quantity for slug, 0 when absent."""
        item = self.items.get(slug)
        return item.quantity if item else 0

    def with_item(self, slug: str, item: CartLineItem) -> "Cart":
        return Cart({**self.items, slug: item})

    def without(self, slug: str) -> "Cart":
        if slug not in self.items:
            return self
        return Cart({key: value for key, value in self.items.items() if key != slug})

    @property
    def item_count(self) -> int:
        """Number of distinct products in the cart."""
        return len(self.items)

    @property
    def total_price(self) -> Decimal:
        """Sum of price * quantity over all lines."""
        return sum((item.total_price for item in self.items.values()), Decimal("0"))

    def to_dict(self) -> Dict[str, dict]:
        """Convert to dictionary for storage and the checkout payload."""
        return {slug: item.to_dict() for slug, item in self.items.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "Cart":
        """Create from dictionary, validating every entry."""
        stored = StoredCart.model_validate(data)
        return cls({
            slug: CartLineItem(quantity=entry.quantity, price=entry.price, product_id=entry.product_id)
            for slug, entry in stored.root.items()
        })


# ============================================================
# Pydantic schemas (storage and catalog boundaries)
# ============================================================

class StoredLineItem(BaseModel):
    """Schema of one persisted line item."""
    model_config = ConfigDict(populate_by_name=True)

    quantity: int = Field(ge=1)
    price: Decimal
    product_id: str = Field(validation_alias=AliasChoices("productId", "product_id"))


class StoredCart(RootModel[Dict[str, StoredLineItem]]):
    """Schema of a persisted cart mapping."""


class ProductSnapshot(BaseModel):
    """Authoritative product record returned by the catalog lookup."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_id: str = Field(validation_alias=AliasChoices("_id", "productId", "product_id"))
    price: Optional[Decimal] = None
    quantity: int = 0

    @field_validator("price", mode="before")
    @classmethod
    def _normalize_price(cls, value):
        if value is None or value == "":
            return None
        return value

    @field_validator("quantity", mode="before")
    @classmethod
    def _normalize_quantity(cls, value):
        return 0 if value is None else value
