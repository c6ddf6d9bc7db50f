# catalog/crud/product.py
"""
Instrucțiuni SQL pentru produs și tabelele dependente.

Funcțiile de aici NU fac commit/rollback: granița tranzacției aparține
serviciilor (`catalog.services.product_write`), care le apelează în
interiorul `write_transaction`.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import Row, delete, select, update
from sqlalchemy.orm import Session

from catalog.models.category import Category
from catalog.models.material import Material
from catalog.models.product import Product, ProductMaterial, ProductMedia


# -------------------------- Reads --------------------------

def find_id_by_sku(
    db: Session,
    encrypted_sku: str,
    *,
    exclude_id: Optional[int] = None,
    lock: bool = False,
) -> Optional[int]:
    """
    Caută un produs după SKU-ul criptat (egalitate pe ciphertext).
    - exclude_id: ignoră produsul curent (replace).
    - lock: SELECT ... FOR UPDATE (ignorat de SQLite).
    """
    stmt = select(Product.product_id).where(Product.sku == encrypted_sku)
    if exclude_id is not None:
        stmt = stmt.where(Product.product_id != exclude_id)
    if lock:
        stmt = stmt.with_for_update()
    return db.execute(stmt.limit(1)).scalar_one_or_none()


def select_rows(db: Session, product_id: Optional[int] = None) -> Sequence[Row]:
    """Produs ⋈ categorie; un rând per produs, ordonat după id."""
    stmt = (
        select(
            Product.product_id,
            Product.sku,
            Product.product_name,
            Product.category_id,
            Category.category_name,
            Product.price,
        )
        .join(Category, Category.category_id == Product.category_id)
        .order_by(Product.product_id.asc())
    )
    if product_id is not None:
        stmt = stmt.where(Product.product_id == product_id)
    return db.execute(stmt).all()


def select_material_rows(db: Session, product_ids: Sequence[int]) -> Sequence[Row]:
    """(product_id, material_id, material_name) pentru produsele date."""
    if not product_ids:
        return []
    stmt = (
        select(ProductMaterial.product_id, Material.material_id, Material.material_name)
        .join(Material, Material.material_id == ProductMaterial.material_id)
        .where(ProductMaterial.product_id.in_(product_ids))
        .order_by(ProductMaterial.product_id, Material.material_id)
    )
    return db.execute(stmt).all()


def select_media_rows(db: Session, product_ids: Sequence[int]) -> Sequence[Row]:
    """(product_id, url) în ordinea de inserare (media_id)."""
    if not product_ids:
        return []
    stmt = (
        select(ProductMedia.product_id, ProductMedia.url)
        .where(ProductMedia.product_id.in_(product_ids))
        .order_by(ProductMedia.media_id.asc())
    )
    return db.execute(stmt).all()


# -------------------------- Mutations --------------------------

def insert(
    db: Session,
    *,
    sku: str,
    product_name: str,
    category_id: int,
    price: Decimal,
) -> int:
    """Inserează rândul de produs; întoarce product_id generat (flush, fără commit)."""
    obj = Product(sku=sku, product_name=product_name, category_id=category_id, price=price)
    db.add(obj)
    db.flush()
    return obj.product_id


def update_fields(
    db: Session,
    product_id: int,
    *,
    sku: str,
    product_name: str,
    category_id: int,
    price: Decimal,
) -> int:
    """UPDATE in-place; întoarce numărul de rânduri potrivite (0 = produs inexistent)."""
    res = db.execute(
        update(Product)
        .where(Product.product_id == product_id)
        .values(sku=sku, product_name=product_name, category_id=category_id, price=price)
    )
    return int(res.rowcount or 0)


def add_material(db: Session, product_id: int, material_id: int) -> None:
    db.add(ProductMaterial(product_id=product_id, material_id=material_id))


def add_materials(db: Session, product_id: int, material_ids: Iterable[int]) -> None:
    for material_id in material_ids:
        add_material(db, product_id, material_id)
    db.flush()


def clear_materials(db: Session, product_id: int) -> int:
    res = db.execute(delete(ProductMaterial).where(ProductMaterial.product_id == product_id))
    return int(res.rowcount or 0)


def add_media(db: Session, product_id: int, urls: List[str]) -> None:
    # unit-of-work păstrează ordinea add() → media_id crescător = ordinea din input
    for url in urls:
        db.add(ProductMedia(product_id=product_id, url=url))
    db.flush()


def clear_media(db: Session, product_id: int) -> int:
    res = db.execute(delete(ProductMedia).where(ProductMedia.product_id == product_id))
    return int(res.rowcount or 0)


def delete_row(db: Session, product_id: int) -> int:
    res = db.execute(delete(Product).where(Product.product_id == product_id))
    return int(res.rowcount or 0)
