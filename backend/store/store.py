"""
JSON-file-backed product store.

Every mutation is a full cycle over one document:

  1. Read and parse the whole collection.
  2. Change it in memory.
  3. Write the whole collection to a temp file beside the target, then
     os.replace it over the target so readers never see a half-written file.

Writes are not synchronised unless the store is built with
serialize_writes=True. Without it, two concurrent mutations race and the
last writer wins.
"""
from __future__ import annotations

import logging
import os
import stat
import tempfile
import threading
from contextlib import nullcontext
from pathlib import Path
from typing import Any, ContextManager

from pydantic import ValidationError

from models import Product, ProductCollection

logger = logging.getLogger(__name__)

# mkstemp creates files as 0600; new documents are made world-readable.
DEFAULT_FILE_MODE = 0o644


class StoreError(Exception):
    """Base class for failures reading or writing the backing document."""


class StoreParseError(StoreError):
    """The backing document exists but is not a valid product collection."""


class StoreReadError(StoreError):
    """The backing document could not be read."""


class StoreWriteError(StoreError):
    """The backing document could not be written."""


def parse_product_id(value: Any) -> int | None:
    """
    Coerce a route or payload identifier to a product id.

    Accepts positive ints and strings of decimal digits (whitespace and a
    leading "+" allowed). Returns None for anything else.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.startswith("+"):
            text = text[1:]
        if not text.isdigit() or not text.isascii():
            return None
        parsed = int(text)
    else:
        return None
    return parsed if parsed > 0 else None


class ProductStore:
    """CRUD over the product collection stored at `path`."""

    def __init__(self, path: Path | str, *, serialize_writes: bool = False) -> None:
        self.path = Path(path)
        self._write_lock: threading.Lock | None = threading.Lock() if serialize_writes else None

    def list_all(self) -> list[Product]:
        return self._load().products

    def get_by_id(self, product_id: Any) -> Product | None:
        pid = parse_product_id(product_id)
        if pid is None:
            return None
        for product in self.list_all():
            if product.id == pid:
                return product
        return None

    def create(self, fields: dict[str, Any]) -> Product:
        """Assign the next id, append the product and rewrite the document."""
        with self._mutation():
            collection = self._load()
            new_id = collection.next_id()
            payload = {k: v for k, v in fields.items() if k != "id"}
            product = Product.model_validate({**payload, "id": new_id})
            collection.products.append(product)
            collection.last_id = new_id
            self._write(collection)
        logger.info("Created product %d", product.id)
        return product

    def update(self, product_id: Any, partial: dict[str, Any]) -> Product | None:
        """Merge `partial` over the stored product. None if it does not exist."""
        pid = parse_product_id(product_id)
        if pid is None:
            return None
        with self._mutation():
            collection = self._load()
            index = collection.index_of(pid)
            if index is None:
                return None
            updated = collection.products[index].merged(partial)
            collection.products[index] = updated
            self._write(collection)
        logger.info("Updated product %d", pid)
        return updated

    def delete(self, product_id: Any) -> bool:
        pid = parse_product_id(product_id)
        if pid is None:
            return False
        with self._mutation():
            collection = self._load()
            index = collection.index_of(pid)
            if index is None:
                return False
            del collection.products[index]
            self._write(collection)
        logger.info("Deleted product %d", pid)
        return True

    def write_collection(self, products: list[Product]) -> None:
        """Replace the whole collection with `products`, keeping their ids."""
        with self._mutation():
            self._write(ProductCollection(products=list(products)))

    def _mutation(self) -> ContextManager[Any]:
        return self._write_lock if self._write_lock is not None else nullcontext()

    def _load(self) -> ProductCollection:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return ProductCollection()
        except OSError as exc:
            raise StoreReadError(f"Could not read {self.path}: {exc}") from exc

        try:
            return ProductCollection.model_validate_json(raw)
        except ValidationError as exc:
            raise StoreParseError(f"Malformed product document {self.path}: {exc}") from exc

    def _file_mode(self) -> int:
        """Mode for the rewritten document: keep the current one, else 0644."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_FILE_MODE

    def _write(self, collection: ProductCollection) -> None:
        data = collection.model_dump_json(indent=2) + "\n"
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
            os.chmod(tmp_name, self._file_mode())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StoreWriteError(f"Could not write {self.path}: {exc}") from exc
        logger.debug("Wrote %d products to %s", len(collection.products), self.path)
