"""
Environment configuration.

All settings are read once at import time from the process environment.
"""

import os

# Catalog (product lookup collaborator)
CATALOG_API_URL = os.environ.get("CATALOG_API_URL", "http://localhost:8080")
CATALOG_PRODUCT_PATH = os.environ.get("CATALOG_PRODUCT_PATH", "/api/v1/product/get-product/{slug}")
CATALOG_TIMEOUT = float(os.environ.get("CATALOG_TIMEOUT", "10.0"))

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
IS_PRODUCTION = os.environ.get("STOREFRONT_ENV", "development") == "production"
