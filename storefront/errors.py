"""
User-facing message constants

The cart notification copy is shown verbatim to shoppers; keep it in one place.
"""

# Validation failures
ERROR_ITEM_NOT_FOUND = "Item does not exist"
ERROR_PRICE_UNAVAILABLE = "Price of product not available"
ERROR_NOT_ENOUGH_INVENTORY = "Not enough inventory"

# Operation-specific prefixes
ERROR_ADD_PREFIX = "Error added to cart"
ERROR_UPDATE_PREFIX = "Error updating quantity"

# Success copy
MSG_ADDED = "Add to Cart Successfully"
MSG_REMOVED = "Remove from Cart Successfully"
MSG_QUANTITY_UPDATED = "Update Cart Quantity Successfully"
MSG_CLEARED = "Cart Cleared Successfully"

# Storage
ERROR_CART_STORAGE = "Cart storage unavailable"
