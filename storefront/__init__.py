"""
Storefront Cart

This package contains the client-side cart subsystem:
- cart: reducer, inventory validator, persistence adapter, CartStore
- auth: identity collaborator interface
- services: catalog lookup client, money helpers
- db: Upstash Redis client

Note: Imports are lazy so that importing the package does not require
storage credentials.
"""

__all__ = [
    "CartStore",
    "get_redis",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "get_redis":
        from storefront.db import get_redis
        return get_redis
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
