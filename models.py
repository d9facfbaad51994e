from typing import Any

from pydantic import BaseModel, Field, model_validator


class Product(BaseModel):
    id: int = Field(gt=0)
    name: str
    description: str = ""
    price: float
    category: str

    def merged(self, partial: dict[str, Any]) -> "Product":
        """
        Shallow-merge `partial` over this record. Supplied fields overwrite,
        unspecified fields are kept, and `id` is never overwritten.
        """
        merged = self.model_dump()
        for field_name, value in partial.items():
            if field_name == "id" or field_name not in merged:
                continue
            merged[field_name] = value
        return Product.model_validate(merged)


class ProductCollection(BaseModel):
    """
    On-disk document: {"products": [...], "last_id": n}.

    last_id is the highest id ever issued, so deleting the newest product
    does not free its id. Older documents without it are accepted.
    """

    products: list[Product] = Field(default_factory=list)
    last_id: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _cover_existing_ids(self) -> "ProductCollection":
        """
        Documents written without last_id (or with a stale one) still hold ids
        that must never be issued again; raise last_id to cover them.
        """
        highest = max((p.id for p in self.products), default=0)
        if highest > self.last_id:
            self.last_id = highest
        return self

    def next_id(self) -> int:
        highest = max((p.id for p in self.products), default=0)
        return max(highest, self.last_id) + 1

    def index_of(self, product_id: int) -> int | None:
        for i, product in enumerate(self.products):
            if product.id == product_id:
                return i
        return None
