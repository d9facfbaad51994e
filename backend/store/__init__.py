from backend.store.store import (
    ProductStore,
    StoreError,
    StoreParseError,
    StoreReadError,
    StoreWriteError,
    parse_product_id,
)

__all__ = [
    "ProductStore",
    "StoreError",
    "StoreParseError",
    "StoreReadError",
    "StoreWriteError",
    "parse_product_id",
]
