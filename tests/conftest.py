from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from ecocart.api import deps
from ecocart.core.config import DEFAULT_MODEL_PATH
from ecocart.core.errors import CartConflict, ConstraintViolation
from ecocart.domain.models.cart import Cart
from ecocart.domain.models.product import Product
from ecocart.ml.classifier import ClassifierHandle, load_from_path, train


def make_product(product_id: str, *, category: str = "kitchen", price: float = 100.0, eco_score: int = 50, **kw) -> Product:
    return Product(
        product_id=product_id,
        name=kw.pop("name", f"Product {product_id}"),
        category=category,
        price=price,
        eco_score=eco_score,
        **kw,
    )


class FakeProductRepo:
    """In-memory stand-in for ProductRepo with the same query semantics."""

    def __init__(self, products: Optional[List[Product]] = None):
        self.docs: Dict[str, Product] = {p.product_id: p for p in products or []}
        self.range_queries: List[Dict[str, Any]] = []

    async def ensure_indexes(self) -> None:
        return None

    async def get_by_product_id(self, product_id: str) -> Optional[Product]:
        return self.docs.get(product_id)

    async def get_many_by_product_ids(self, ids: List[str]) -> Dict[str, Product]:
        return {i: self.docs[i] for i in ids if i in self.docs}

    async def list_products(self, filters, *, sort="newest", skip=0, limit=12):
        items = list(self.docs.values())
        if "category" in filters:
            items = [p for p in items if p.category == filters["category"]]
        if "ai_label" in filters:
            items = [p for p in items if p.ai_label == filters["ai_label"]]
        if "eco_score" in filters:
            items = [p for p in items if p.eco_score >= filters["eco_score"]["$gte"]]
        if "price" in filters:
            items = [p for p in items if p.price <= filters["price"]["$lte"]]
        if sort == "eco_desc":
            items.sort(key=lambda p: (-p.eco_score, p.product_id))
        elif sort == "price_asc":
            items.sort(key=lambda p: (p.price, p.product_id))
        return items[skip:skip + limit], len(items)

    async def insert(self, product: Product) -> Product:
        if product.product_id in self.docs:
            raise ConstraintViolation(f"Product {product.product_id} already exists")
        self.docs[product.product_id] = product
        return product

    async def replace(self, product: Product) -> Optional[Product]:
        if product.product_id not in self.docs:
            return None
        self.docs[product.product_id] = product
        return product

    async def delete(self, product_id: str) -> bool:
        return self.docs.pop(product_id, None) is not None

    async def find_by_category_price_range(self, category, min_price, max_price, *, exclude_id, min_score, limit):
        self.range_queries.append(
            {"category": category, "min_price": min_price, "max_price": max_price,
             "exclude_id": exclude_id, "min_score": min_score, "limit": limit}
        )
        found = [
            p for p in self.docs.values()
            if p.category == category and p.eco_score > min_score
            and min_price <= p.price <= max_price and p.product_id != exclude_id
        ]
        found.sort(key=lambda p: (-p.eco_score, p.product_id))
        return found[:limit]

    def set_score(self, product_id: str, eco_score: int) -> None:
        self.docs[product_id] = self.docs[product_id].model_copy(update={"eco_score": eco_score})


class FakeCartRepo:
    """In-memory CartRepo with the same version compare-and-swap behaviour."""

    def __init__(self):
        self.docs: Dict[str, Cart] = {}
        self.conflicts_to_raise = 0
        self.saves = 0

    async def ensure_indexes(self) -> None:
        return None

    async def get(self, user_id: str) -> Optional[Cart]:
        return self.docs.get(user_id)

    async def save(self, cart: Cart) -> Cart:
        if self.conflicts_to_raise:
            self.conflicts_to_raise -= 1
            raise CartConflict("simulated concurrent write")
        current = self.docs.get(cart.user_id)
        if (current.version if current else 0) != cart.version:
            raise CartConflict("version mismatch")
        stored = cart.model_copy(update={"version": cart.version + 1})
        self.docs[cart.user_id] = stored
        self.saves += 1
        return stored


class FakeRedis:
    def __init__(self):
        self.store: Dict[str, str] = {}

    async def get(self, key: str):
        return self.store.get(key)

    async def set(self, key: str, value: str, ex: Optional[int] = None):
        self.store[key] = value

    async def incr(self, key: str) -> int:
        self.store[key] = str(int(self.store.get(key, 0)) + 1)
        return int(self.store[key])


@pytest.fixture(scope="session")
def classifier() -> ClassifierHandle:
    """The shipped artifact, as loaded at startup."""
    return load_from_path(DEFAULT_MODEL_PATH)


@pytest.fixture(scope="session")
def trained_classifier() -> ClassifierHandle:
    return ClassifierHandle(train())


@pytest.fixture
def catalog() -> FakeProductRepo:
    return FakeProductRepo([
        make_product("base", name="Plastic Lunch Box", price=100.0, eco_score=40),
        make_product("alt-a", name="Bamboo Lunch Box", price=110.0, eco_score=80),
        make_product("alt-b", name="Steel Lunch Box", price=95.0, eco_score=80),
        make_product("alt-c", name="Glass Lunch Box", price=120.0, eco_score=60),
        make_product("edge-low", name="Tin Lunch Box", price=80.0, eco_score=45),
        make_product("too-cheap", price=79.99, eco_score=90),
        make_product("too-pricey", price=120.01, eco_score=90),
        make_product("worse", price=100.0, eco_score=30),
        make_product("equal", price=100.0, eco_score=40),
        make_product("other-cat", category="garden", price=100.0, eco_score=95),
    ])


@pytest.fixture
def carts() -> FakeCartRepo:
    return FakeCartRepo()


@pytest.fixture
def app_client(catalog, carts, classifier):
    from ecocart.main import app

    app.dependency_overrides[deps.product_repo_dep] = lambda: catalog
    app.dependency_overrides[deps.cart_repo_dep] = lambda: carts
    app.dependency_overrides[deps.redis_dep] = lambda: None
    app.dependency_overrides[deps.classifier_dep] = lambda: classifier
    # No context manager: the lifespan (Mongo/Redis connections) is not started
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

