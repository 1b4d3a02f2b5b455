from ecocart.api import deps
from ecocart.main import app

USER = {"X-User-Id": "user-1"}


def test_health_is_tolerant(app_client):
    r = app_client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["checks"]["redis"] in ("skipped", "ok") or body["checks"]["redis"].startswith("error")
    assert "classifier" in body["checks"]


# ---- products ----

def test_create_product_computes_eco_fields(app_client, catalog):
    r = app_client.post("/api/products", json={
        "product_id": "tee-1",
        "name": "Tee",
        "category": "apparel",
        "price": 20,
        "description": "Organic cotton shirt, fair trade and ethically sourced",
        "materials": ["recycled cotton"],
        "packaging": "plastic",
        "shipping_type": "ground",
        "eco_tags": ["fair-trade"],
        "eco_score": 5,
    })
    assert r.status_code == 201
    body = r.json()
    assert body["eco_score"] == 70
    assert body["ai_label"] in ("high", "medium", "low")
    assert body["ai_keywords"]["positive"][:2] == ["recycled", "organic"]
    assert catalog.docs["tee-1"].eco_score == 70


def test_create_generates_id(app_client, catalog):
    r = app_client.post("/api/products", json={"name": "Mug", "category": "kitchen", "price": 8.5})
    assert r.status_code == 201
    assert r.json()["product_id"] in catalog.docs
    assert r.json()["eco_score"] == 50


def test_create_rejects_invalid_product(app_client):
    assert app_client.post("/api/products", json={"name": "X", "category": "", "price": 1}).status_code == 400
    assert app_client.post("/api/products", json={"name": "X", "category": "c", "price": -1}).status_code == 400


def test_create_duplicate_id(app_client):
    r = app_client.post("/api/products", json={"product_id": "base", "name": "Dup", "category": "kitchen", "price": 1})
    assert r.status_code == 409


def test_create_without_classifier_uses_default_label(app_client):
    app.dependency_overrides[deps.classifier_dep] = lambda: None
    r = app_client.post("/api/products", json={
        "name": "Bottle", "category": "kitchen", "price": 10, "materials": ["recycled steel"],
    })
    assert r.status_code == 201
    assert r.json()["eco_score"] == 65
    assert r.json()["ai_label"] == "medium"
    assert r.json()["ai_confidence"] == 0.0


def test_update_recomputes_score(app_client, catalog):
    r = app_client.put("/api/products/alt-a", json={"packaging": "plastic"})
    assert r.status_code == 200
    assert r.json()["eco_score"] == 40
    assert r.json()["name"] == "Bamboo Lunch Box"
    assert catalog.docs["alt-a"].eco_score == 40


def test_update_unknown_product(app_client):
    assert app_client.put("/api/products/ghost", json={"name": "x"}).status_code == 404


def test_get_and_delete(app_client, catalog):
    assert app_client.get("/api/products/alt-b").json()["name"] == "Steel Lunch Box"
    assert app_client.delete("/api/products/alt-b").json() == {"message": "Deleted"}
    assert "alt-b" not in catalog.docs
    assert app_client.get("/api/products/alt-b").status_code == 404
    assert app_client.delete("/api/products/alt-b").status_code == 404


def test_list_products_filters_and_pages(app_client):
    r = app_client.get("/api/products", params={"category": "kitchen", "min_score": 80, "sort": "eco_desc", "limit": 2})
    body = r.json()
    assert r.status_code == 200
    assert body["total"] == 4
    assert body["pages"] == 2
    assert [p["product_id"] for p in body["products"]] == ["too-cheap", "too-pricey"]


def test_alternatives_endpoint(app_client):
    r = app_client.get("/api/products/base/alternatives", params={"limit": 3})
    body = r.json()
    assert r.status_code == 200
    assert body["base"] == {"product_id": "base", "name": "Plastic Lunch Box", "price": 100.0, "eco_score": 40}
    assert [a["product_id"] for a in body["alternatives"]] == ["alt-a", "alt-b", "alt-c"]
    assert body["count"] == 3


def test_alternatives_empty_is_ok(app_client):
    r = app_client.get("/api/products/other-cat/alternatives")
    assert r.status_code == 200
    assert r.json()["alternatives"] == [] and r.json()["count"] == 0


def test_alternatives_unknown_product(app_client):
    assert app_client.get("/api/products/ghost/alternatives").status_code == 404


def test_explanation_template(app_client):
    r = app_client.get("/api/products/base/explanation")
    assert r.status_code == 200
    assert r.json()["explanation"] == "This product shows mixed signals."
    assert r.json()["source"] == "template"


# ---- eco ----

def test_score_endpoint(app_client):
    r = app_client.post("/api/eco/score", json={
        "materials": ["recycled cotton"], "packaging": "plastic", "shipping_type": "ground", "eco_tags": ["fair-trade"],
    })
    assert r.status_code == 200
    assert r.json()["eco_score"] == 70
    assert set(r.json()["eco_breakdown"]) == {"materials", "ethics", "packaging", "shipping", "lifespan"}


def test_classify_endpoint(app_client):
    r = app_client.post("/api/eco/classify", json={"text": "disposable plastic cutlery shipped by air freight"})
    body = r.json()
    assert r.status_code == 200
    assert body["label"] == "low"
    assert body["evidence"]["negative"] == ["plastic", "disposable", "air freight"]
    assert body["explanation"] == "This product may have a higher environmental impact due to: plastic, disposable, air freight."


def test_classify_from_fields(app_client):
    r = app_client.post("/api/eco/classify", json={
        "description": "Bamboo toothbrush", "materials": ["compostable packaging"], "eco_tags": ["zero waste", "carbon neutral"],
    })
    assert r.status_code == 200
    assert r.json()["label"] == "high"


def test_classify_without_model_is_503(app_client):
    app.dependency_overrides[deps.classifier_dep] = lambda: None
    r = app_client.post("/api/eco/classify", json={"text": "organic"})
    assert r.status_code == 503
    assert "detail" in r.json()
    # rule scoring does not need the model
    assert app_client.post("/api/eco/score", json={}).json()["eco_score"] == 50


# ---- cart ----

def test_cart_requires_user(app_client):
    assert app_client.get("/api/cart").status_code == 401
    assert app_client.post("/api/cart", json={"product_id": "alt-a"}).status_code == 401


def test_cart_flow(app_client):
    r = app_client.get("/api/cart", headers=USER)
    assert r.json()["items"] == [] and r.json()["cart_eco_score"] == 0

    r = app_client.post("/api/cart", json={"product_id": "alt-a", "quantity": 2}, headers=USER)
    assert r.status_code == 201
    r = app_client.post("/api/cart", json={"product_id": "alt-c"}, headers=USER)
    assert r.json()["cart_eco_score"] == 73  # (80*2 + 60) / 3 = 73.33

    r = app_client.patch("/api/cart", json={"product_id": "alt-c", "quantity": 2}, headers=USER)
    assert r.json()["cart_eco_score"] == 70

    r = app_client.delete("/api/cart/alt-c", headers=USER)
    assert [i["product_id"] for i in r.json()["items"]] == ["alt-a"]

    r = app_client.delete("/api/cart", headers=USER)
    assert r.json()["items"] == [] and r.json()["cart_eco_score"] == 0


def test_cart_errors(app_client):
    assert app_client.post("/api/cart", json={"product_id": "ghost"}, headers=USER).status_code == 404
    assert app_client.post("/api/cart", json={"product_id": "alt-a", "quantity": 0}, headers=USER).status_code == 400
    assert app_client.patch("/api/cart", json={"product_id": "alt-a", "quantity": 1}, headers=USER).status_code == 404
    app_client.post("/api/cart", json={"product_id": "alt-a"}, headers=USER)
    assert app_client.delete("/api/cart/ghost", headers=USER).status_code == 404


def test_carts_are_per_user(app_client):
    app_client.post("/api/cart", json={"product_id": "alt-a"}, headers=USER)
    assert app_client.get("/api/cart", headers={"X-User-Id": "user-2"}).json()["items"] == []


def test_greener_and_swap(app_client):
    app_client.post("/api/cart", json={"product_id": "base", "quantity": 2}, headers=USER)

    greener = app_client.get("/api/cart/greener", headers=USER).json()
    assert greener["count"] == 1
    best = greener["suggestions"][0]["alternatives"][0]["product_id"]
    assert best == "alt-a"

    r = app_client.post("/api/cart/swap", json={"old_product_id": "base", "new_product_id": best}, headers=USER)
    assert r.status_code == 200
    assert r.json()["message"] == "Item swapped"
    assert r.json()["cart"]["items"][0]["product_id"] == "alt-a"
    assert r.json()["cart"]["items"][0]["quantity"] == 2
    assert r.json()["cart"]["cart_eco_score"] == 80


def test_refresh_endpoint(app_client, catalog):
    app_client.post("/api/cart", json={"product_id": "alt-a", "quantity": 2}, headers=USER)
    catalog.set_score("alt-a", 20)

    r = app_client.post("/api/cart/refresh", json={"product_id": "alt-a"}, headers=USER)

    assert r.status_code == 200
    assert r.json()["cart_eco_score"] == 20
    assert r.json()["items"][0]["quantity"] == 2


def test_swap_across_categories_is_rejected(app_client, carts):
    app_client.post("/api/cart", json={"product_id": "base"}, headers=USER)
    r = app_client.post("/api/cart/swap", json={"old_product_id": "base", "new_product_id": "other-cat"}, headers=USER)
    assert r.status_code == 409
    assert [i.product_id for i in carts.docs["user-1"].items] == ["base"]


def test_greener_empty_cart(app_client):
    r = app_client.get("/api/cart/greener", headers=USER)
    assert r.json() == {"count": 0, "suggestions": [], "message": "Cart is empty"}
