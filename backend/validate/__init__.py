from backend.validate.validator import (
    CATEGORY_REQUIRED,
    NAME_REQUIRED,
    PRICE_NOT_POSITIVE,
    ProductPayload,
    coerce_price,
    validate_product,
)

__all__ = [
    "CATEGORY_REQUIRED",
    "NAME_REQUIRED",
    "PRICE_NOT_POSITIVE",
    "ProductPayload",
    "coerce_price",
    "validate_product",
]
