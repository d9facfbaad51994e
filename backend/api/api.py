"""
Product CRUD API.

Thin HTTP mapping over ProductStore: writes are validated first, store
results are translated to status codes, and store failures become 500s.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import Body, FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import ValidationError

from backend.config import AppConfig
from backend.store import ProductStore, StoreError
from backend.validate import coerce_price, validate_product
from models import Product
from seed import ensure_collection

logger = logging.getLogger(__name__)

ABOUT_TEXT = "About Us: We are learning to build web servers!"
NOT_FOUND_TEXT = "404 - Not Found"

DEMO_USERS: list[dict[str, Any]] = [
    {"id": 0, "name": "Tashfeen"},
    {"id": 1, "name": "Reed"},
    {"id": 2, "name": "Maxwell"},
    {"id": 3, "name": "Anga"},
]


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _as_fields(payload: Any) -> dict[str, Any]:
    """A body that is not a JSON object is validated as an empty payload."""
    return payload if isinstance(payload, dict) else {}


def _request_target(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def _normalize_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Store numeric strings such as "12.50" as numbers."""
    normalized = dict(payload)
    if "price" in normalized:
        price = coerce_price(normalized["price"])
        if price is not None:
            normalized["price"] = price
    return normalized


def _matches(product: Product, category: str | None, q: str | None) -> bool:
    if category is not None and product.category.lower() != category.lower():
        return False
    if q is not None:
        needle = q.lower()
        if needle not in product.name.lower() and needle not in product.description.lower():
            return False
    return True


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or AppConfig.from_env()
    store = ProductStore(config.products_file, serialize_writes=config.serialize_writes)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_collection(config.products_file)
        yield

    app = FastAPI(title="Product API", lifespan=lifespan)
    app.state.store = store

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(
            "%s - %s %s",
            datetime.now(timezone.utc).isoformat(),
            request.method,
            _request_target(request),
        )
        return await call_next(request)

    @app.exception_handler(404)
    async def not_found(request: Request, exc: Exception) -> PlainTextResponse:
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)

    @app.get("/about", response_class=PlainTextResponse)
    def about() -> str:
        return ABOUT_TEXT

    @app.get("/search", response_class=PlainTextResponse)
    def search(q: str | None = None) -> str:
        return f"Search results for: {q or 'No search term provided'}"

    @app.get("/api/users")
    def list_users() -> dict[str, Any]:
        return {"users": DEMO_USERS}

    @app.get("/api/users/{user_id}")
    def get_user(user_id: str) -> dict[str, Any]:
        return {"user": {"id": user_id, "name": f"User {user_id}"}}

    @app.post("/api/data", status_code=201)
    def receive_data(payload: Any = Body(None)) -> dict[str, Any]:
        return {"message": "Data received successfully", "data": payload}

    @app.get("/api/products", response_model=list[Product])
    def list_products(category: str | None = None, q: str | None = None) -> Any:
        try:
            products = store.list_all()
        except StoreError:
            logger.exception("Listing products failed")
            return _error(500, "Failed to retrieve products")
        return [p for p in products if _matches(p, category, q)]

    @app.get("/api/products/{product_id}", response_model=Product)
    def get_product(product_id: str) -> Any:
        try:
            product = store.get_by_id(product_id)
        except StoreError:
            logger.exception("Reading product %s failed", product_id)
            return _error(500, "Failed to retrieve product")
        if product is None:
            return _error(404, "Product not found")
        return product

    @app.post("/api/products", response_model=Product, status_code=201)
    def create_product(payload: Any = Body(None)) -> Any:
        fields = _as_fields(payload)
        violations = validate_product(fields)
        if violations:
            return JSONResponse(status_code=400, content={"errors": violations})
        try:
            return store.create(_normalize_payload(fields))
        except (StoreError, ValidationError):
            logger.exception("Creating product failed")
            return _error(500, "Failed to create product")

    @app.put("/api/products/{product_id}", response_model=Product)
    def update_product(product_id: str, payload: Any = Body(None)) -> Any:
        fields = _as_fields(payload)
        violations = validate_product(fields)
        if violations:
            return JSONResponse(status_code=400, content={"errors": violations})
        try:
            updated = store.update(product_id, _normalize_payload(fields))
        except (StoreError, ValidationError):
            logger.exception("Updating product %s failed", product_id)
            return _error(500, "Failed to update product")
        if updated is None:
            return _error(404, "Product not found")
        return updated

    @app.delete("/api/products/{product_id}", status_code=204)
    def delete_product(product_id: str) -> Response:
        try:
            removed = store.delete(product_id)
        except StoreError:
            logger.exception("Deleting product %s failed", product_id)
            return _error(500, "Failed to delete product")
        if not removed:
            return _error(404, "Product not found")
        return Response(status_code=204)

    if config.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=config.static_dir, html=True), name="static")

    return app


app = create_app()
