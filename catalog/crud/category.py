# catalog/crud/category.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.models.category import Category


def list_categories(db: Session) -> list[Category]:
    """Toate categoriile, ordonate după id (fără paginare)."""
    stmt = select(Category).order_by(Category.category_id.asc())
    return list(db.execute(stmt).scalars().all())


def get(db: Session, category_id: int) -> Optional[Category]:
    return db.get(Category, category_id)


def exists(db: Session, category_id: int) -> bool:
    stmt = select(Category.category_id).where(Category.category_id == category_id)
    return db.execute(stmt).scalar_one_or_none() is not None


def get_by_name(db: Session, name: str) -> Optional[Category]:
    if not name:
        return None
    stmt = select(Category).where(Category.category_name == name).limit(1)
    return db.execute(stmt).scalar_one_or_none()


def create(db: Session, name: str) -> Category:
    """Folosit doar de seed; commit-ul aparține apelantului."""
    obj = Category(category_name=name)
    db.add(obj)
    db.flush()
    return obj
