# catalog/crud/material.py
from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalog.models.material import Material


def list_materials(db: Session) -> list[Material]:
    stmt = select(Material).order_by(Material.material_id.asc())
    return list(db.execute(stmt).scalars().all())


def missing_ids(db: Session, material_ids: Iterable[int]) -> list[int]:
    """Întoarce id-urile din input care NU există în 'material' (ordinea din input)."""
    wanted = list(dict.fromkeys(material_ids))
    if not wanted:
        return []
    stmt = select(Material.material_id).where(Material.material_id.in_(wanted))
    found = set(db.execute(stmt).scalars().all())
    return [m for m in wanted if m not in found]


def get_by_name(db: Session, name: str) -> Optional[Material]:
    if not name:
        return None
    stmt = select(Material).where(Material.material_name == name).limit(1)
    return db.execute(stmt).scalar_one_or_none()


def create(db: Session, name: str) -> Material:
    """Folosit doar de seed; commit-ul aparține apelantului."""
    obj = Material(material_name=name)
    db.add(obj)
    db.flush()
    return obj
