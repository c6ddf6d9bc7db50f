# tests/conftest.py
from __future__ import annotations

import os

# --- Config din env: trebuie setată ÎNAINTE de importul pachetului ----------
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENCRYPTION_KEY", "0123456789abcdef0123456789abcdef")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from decimal import Decimal
from typing import Any, Dict, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from catalog import models  # noqa: F401  (populează metadata)
from catalog.core.crypto import SkuCipher, get_cipher
from catalog.database import Base, SessionLocal, engine
from catalog.models.category import Category
from catalog.models.material import Material

CATEGORIES = {1: "Furniture", 2: "Lighting"}
MATERIALS = {1: "Wood", 2: "Steel", 3: "Glass", 4: "Cotton", 5: "Linen"}


def product_payload(**overrides: Any) -> Dict[str, Any]:
    """Payload valid pentru create/replace; câmpurile pot fi suprascrise."""
    payload: Dict[str, Any] = {
        "sku": "ABC-100",
        "product_name": "Widget",
        "category_id": 1,
        "price": Decimal("19.99"),
        "materials": [2, 3],
        "image_urls": ["http://x/1.png"],
    }
    payload.update(overrides)
    return payload


# --- Fixuri ------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _fresh_schema() -> Iterator[None]:
    """Schema nouă + categorii/materiale seed pentru fiecare test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as s:
        s.add_all(Category(category_id=k, category_name=v) for k, v in CATEGORIES.items())
        s.add_all(Material(material_id=k, material_name=v) for k, v in MATERIALS.items())
        s.commit()
    yield


@pytest.fixture()
def db() -> Iterator[Session]:
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def cipher() -> SkuCipher:
    return get_cipher()


@pytest.fixture()
def client() -> Iterator[TestClient]:
    """TestClient cu lifespan (startup check + create_all idempotent)."""
    from catalog.main import app

    with TestClient(app) as c:
        yield c
