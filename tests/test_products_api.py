# tests/test_products_api.py
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

import httpx
import pytest
from fastapi.testclient import TestClient


# --- Utilitare ----------------------------------------------------------------
def _dump_response(r: httpx.Response) -> str:
    """Diagnostic compact pentru mesaje de aserție."""
    try:
        j = r.json()
    except Exception:
        j = None
    snippet = (r.text or "")[:500].replace("\n", "\\n")
    return (
        f"status={r.status_code} {r.request.method} {r.request.url} "
        f"json={j!r} text='{snippet}...'"
    )


def _assert_status(r: httpx.Response, expected: int | tuple[int, ...]):
    if isinstance(expected, int):
        ok = r.status_code == expected
        exp_str = str(expected)
    else:
        ok = r.status_code in expected
        exp_str = "|".join(map(str, expected))
    assert ok, f"expected {exp_str} but got: {_dump_response(r)}"


def _body(**overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "sku": "ABC-100",
        "product_name": "Widget",
        "category_id": 1,
        "price": 19.99,
        "materials": [2, 3],
        "image_urls": ["http://x/1.png"],
    }
    body.update(overrides)
    return body


def create_product(c: TestClient, **overrides: Any) -> int:
    r = c.post("/api/products", json=_body(**overrides))
    _assert_status(r, 201)
    j = r.json()
    assert isinstance(j.get("product_id"), int), j
    return j["product_id"]


# --- Teste --------------------------------------------------------------------
@pytest.mark.timeout(10)
def test_create_then_get_returns_decrypted_view(client: TestClient):
    pid = create_product(client)

    r = client.get(f"/api/products/{pid}")
    _assert_status(r, 200)
    j = r.json()
    assert j["sku"] == "ABC-100", j
    assert j["product_name"] == "Widget", j
    assert j["category_name"] == "Furniture", j
    assert Decimal(str(j["price"])) == Decimal("19.99"), j
    assert sorted(j["materials"]) == [2, 3], j
    assert j["image_urls"] == ["http://x/1.png"], j


@pytest.mark.timeout(10)
def test_duplicate_sku_is_409_and_store_unchanged(client: TestClient):
    create_product(client)
    before = client.get("/api/products").json()

    r = client.post("/api/products", json=_body(product_name="Clone"))
    _assert_status(r, 409)
    assert r.json() == {"error": "Duplicate SKU is not allowed"}

    assert client.get("/api/products").json() == before


@pytest.mark.timeout(10)
def test_replace_updates_fields_and_replaces_associations(client: TestClient):
    pid = create_product(client)

    r = client.put(
        f"/api/products/{pid}",
        json=_body(product_name="Widget v2", price=24.50, materials=[2], image_urls=[]),
    )
    _assert_status(r, 200)
    assert r.json()["product_name"] == "Widget v2"

    j = client.get(f"/api/products/{pid}").json()
    assert j["materials"] == [2], j
    assert j["image_urls"] == [], j
    assert Decimal(str(j["price"])) == Decimal("24.50"), j
    assert j["sku"] == "ABC-100", j


@pytest.mark.timeout(10)
def test_replace_missing_product_is_404(client: TestClient):
    r = client.put("/api/products/9999", json=_body())
    _assert_status(r, 404)
    assert r.json() == {"error": "Product not found"}


@pytest.mark.timeout(10)
def test_replace_to_other_products_sku_is_409(client: TestClient):
    create_product(client, sku="A-1")
    pid = create_product(client, sku="B-1")
    r = client.put(f"/api/products/{pid}", json=_body(sku="A-1"))
    _assert_status(r, 409)


@pytest.mark.timeout(10)
def test_delete_then_get_is_404(client: TestClient):
    pid = create_product(client)

    r = client.delete(f"/api/products/{pid}")
    _assert_status(r, 200)
    assert r.json() == {"message": "Product deleted successfully"}

    _assert_status(client.get(f"/api/products/{pid}"), 404)
    _assert_status(client.delete(f"/api/products/{pid}"), 404)


@pytest.mark.timeout(10)
@pytest.mark.parametrize("field", ["sku", "product_name", "category_id", "price", "materials", "image_urls"])
def test_missing_field_is_400(client: TestClient, field: str):
    body = _body()
    body.pop(field)
    r = client.post("/api/products", json=body)
    _assert_status(r, 400)
    j = r.json()
    assert j["error"] == "Missing required fields", j
    assert any(field in f for f in j["fields"]), j


@pytest.mark.timeout(10)
def test_negative_price_is_400(client: TestClient):
    _assert_status(client.post("/api/products", json=_body(price=-1)), 400)


@pytest.mark.timeout(10)
def test_unknown_category_or_material_is_404(client: TestClient):
    r1 = client.post("/api/products", json=_body(category_id=77))
    _assert_status(r1, 404)
    assert "Category 77" in r1.json()["error"]

    r2 = client.post("/api/products", json=_body(materials=[1, 99]))
    _assert_status(r2, 404)
    assert client.get("/api/products").json() == []


@pytest.mark.timeout(10)
def test_get_unknown_product_is_404_json(client: TestClient):
    r = client.get("/api/products/123")
    _assert_status(r, 404)
    assert r.json() == {"error": "Product not found"}
    assert r.headers.get("X-Request-ID")


@pytest.mark.timeout(10)
def test_non_integer_id_is_400(client: TestClient):
    _assert_status(client.get("/api/products/abc"), 400)


@pytest.mark.timeout(10)
def test_list_products_uses_material_names(client: TestClient):
    create_product(client, materials=[1, 3])
    items = client.get("/api/products").json()
    assert len(items) == 1, items
    assert items[0]["materials"] == ["Glass", "Wood"], items
    assert items[0]["category_name"] == "Furniture", items


@pytest.mark.timeout(10)
def test_statistics_endpoints(client: TestClient):
    create_product(client, sku="S-1", price=100, image_urls=[])
    create_product(client, sku="S-2", price=750, category_id=2)
    create_product(client, sku="S-3", price=1500)

    r = client.get("/api/products/statistics/highest-price")
    _assert_status(r, 200)
    highest = {row["category_name"]: Decimal(str(row["highest_price"])) for row in r.json()}
    assert highest == {"Furniture": Decimal("1500"), "Lighting": Decimal("750")}

    r = client.get("/api/products/statistics/price-range")
    _assert_status(r, 200)
    assert [(b["price_range"], b["product_count"]) for b in r.json()] == [
        ("0-500", 1),
        ("501-1000", 1),
        ("1000+", 1),
    ]

    r = client.get("/api/products/statistics/no-media")
    _assert_status(r, 200)
    assert [p["product_name"] for p in r.json()] == ["Widget"]


@pytest.mark.timeout(10)
def test_categories_and_materials_lists(client: TestClient):
    r = client.get("/api/categories")
    _assert_status(r, 200)
    assert r.json() == [
        {"category_id": 1, "category_name": "Furniture"},
        {"category_id": 2, "category_name": "Lighting"},
    ]

    r = client.get("/api/materials")
    _assert_status(r, 200)
    assert [m["material_name"] for m in r.json()] == ["Wood", "Steel", "Glass", "Cotton", "Linen"]


@pytest.mark.timeout(10)
def test_request_id_is_propagated(client: TestClient):
    r = client.get("/api/categories", headers={"X-Request-ID": "req-123"})
    _assert_status(r, 200)
    assert r.headers.get("X-Request-ID") == "req-123"
    assert r.headers.get("X-Process-Time", "").endswith("ms")
