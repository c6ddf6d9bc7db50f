# tests/test_seed.py
from __future__ import annotations

from sqlalchemy.orm import Session

from catalog.crud import category as category_crud
from catalog.crud import material as material_crud
from catalog.seed import seed_catalog


def test_seed_inserts_only_missing_names(db: Session):
    created = seed_catalog(db, ["Furniture", "Garden", "Garden", " "], ["Wood", "Bamboo"])
    db.commit()

    assert created == (1, 1)
    assert [c.category_name for c in category_crud.list_categories(db)] == ["Furniture", "Lighting", "Garden"]
    assert material_crud.get_by_name(db, "Bamboo") is not None


def test_seed_is_idempotent(db: Session):
    seed_catalog(db, ["Garden"], ["Bamboo"])
    db.commit()
    assert seed_catalog(db, ["Garden"], ["Bamboo"]) == (0, 0)


def test_missing_material_ids_keeps_input_order(db: Session):
    assert material_crud.missing_ids(db, [9, 1, 8, 9]) == [9, 8]
    assert material_crud.missing_ids(db, []) == []
