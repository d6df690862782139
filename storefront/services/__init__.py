"""
Services Module

- catalog: product lookup client (CatalogClient, get_catalog_client)
- money: Decimal helpers
"""
