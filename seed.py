"""
Seed script: makes sure the product collection document exists, writing the
sample records from backend.corpus when it does not.

Safe to run repeatedly; an existing document is never touched.

Usage:
    uv run python seed.py
"""

import logging
from pathlib import Path

from backend.config import AppConfig
from backend.corpus import SEED_PRODUCTS
from backend.store import ProductStore
from models import Product

logger = logging.getLogger(__name__)


def seed_products() -> list[Product]:
    return [
        Product.model_validate({**fields, "id": i})
        for i, fields in enumerate(SEED_PRODUCTS, start=1)
    ]


def ensure_collection(path: Path) -> bool:
    """
    Create the parent directory of `path` and, if no document is there yet,
    write the seed records. Returns True when a new document was written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        logger.debug("Product collection already present at %s", path)
        return False

    products = seed_products()
    ProductStore(path).write_collection(products)
    logger.info("Seeded %d products into %s", len(products), path)
    return True


if __name__ == "__main__":
    config = AppConfig.from_env()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(message)s")
    ensure_collection(config.products_file)
