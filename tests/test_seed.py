import json
import tempfile
import unittest
from pathlib import Path

from backend.corpus import SEED_PRODUCTS
from backend.store import ProductStore
from seed import ensure_collection


class TestEnsureCollection(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "nested" / "data" / "products.json"

    def test_creates_parent_and_seeds_missing_document(self) -> None:
        self.assertTrue(ensure_collection(self.path))

        products = ProductStore(self.path).list_all()
        self.assertEqual([p.id for p in products], [1, 2, 3])
        self.assertEqual([p.name for p in products], [s["name"] for s in SEED_PRODUCTS])

    def test_is_idempotent_and_leaves_existing_document_alone(self) -> None:
        ensure_collection(self.path)
        store = ProductStore(self.path)
        store.delete(1)
        before = self.path.read_bytes()

        self.assertFalse(ensure_collection(self.path))
        self.assertEqual(self.path.read_bytes(), before)

    def test_seeded_document_continues_id_sequence(self) -> None:
        ensure_collection(self.path)
        document = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(document["last_id"], 3)

        created = ProductStore(self.path).create(
            {"name": "Pen", "price": 2, "category": "Office"}
        )
        self.assertEqual(created.id, 4)
