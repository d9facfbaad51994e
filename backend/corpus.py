"""
Paths and seed records for the product collection.

Single source of truth for:
- DATA_DIR              — directory holding the backing document
- DEFAULT_PRODUCTS_FILE — default location of the collection document
- SEED_PRODUCTS         — records written when no document exists yet
"""

from pathlib import Path

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
DEFAULT_PRODUCTS_FILE: Path = DATA_DIR / "products.json"

# Ids are assigned in order starting at 1 when the document is first written.
SEED_PRODUCTS: list[dict[str, object]] = [
    {
        "name": "Laptop",
        "description": "14-inch ultrabook with 16GB RAM and a 512GB SSD",
        "price": 999.99,
        "category": "Electronics",
    },
    {
        "name": "Coffee Mug",
        "description": "Ceramic mug, 350ml, dishwasher safe",
        "price": 12.5,
        "category": "Kitchen",
    },
    {
        "name": "Desk Chair",
        "description": "Ergonomic office chair with lumbar support",
        "price": 189.0,
        "category": "Furniture",
    },
]
