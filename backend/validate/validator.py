"""
Payload gatekeeping for product writes.

validate_product runs before a create or update reaches the store. It only
reports problems; it never rewrites the payload. The same rules apply to
create and update, so an update has to resupply name, price and category.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

NAME_REQUIRED = "Product name is required"
PRICE_NOT_POSITIVE = "Product price must be a positive number"
CATEGORY_REQUIRED = "Product category is required"

# Field order here is the order violations are reported in.
_VIOLATION_BY_FIELD = {
    "name": NAME_REQUIRED,
    "price": PRICE_NOT_POSITIVE,
    "category": CATEGORY_REQUIRED,
}


def coerce_price(value: Any) -> float | None:
    """
    Interpret `value` as a finite number. Accepts ints, floats and numeric
    strings ("12.50", " 3 "). Returns None for anything else, including bools.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


class ProductPayload(BaseModel):
    """The fields a create or update payload must carry."""

    model_config = ConfigDict(extra="ignore")

    name: str
    price: float
    category: str

    @field_validator("name", "category", mode="before")
    @classmethod
    def _require_text(cls, v: object) -> object:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("must be non-blank text")
        return v

    @field_validator("price", mode="before")
    @classmethod
    def _require_positive_price(cls, v: object) -> float:
        price = coerce_price(v)
        if price is None or price <= 0:
            raise ValueError("must be a positive number")
        return price


def validate_product(payload: Mapping[str, Any]) -> list[str]:
    """Return the list of violations for `payload`; empty means acceptable."""
    try:
        ProductPayload.model_validate(dict(payload))
    except ValidationError as exc:
        failed = {err["loc"][0] for err in exc.errors() if err["loc"]}
        return [msg for field, msg in _VIOLATION_BY_FIELD.items() if field in failed]
    return []
