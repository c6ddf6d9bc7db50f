# catalog/crud/statistics.py
"""
Agregări read-only (o singură instrucțiune fiecare, fără tranzacție explicită).
"""
from __future__ import annotations

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from catalog.models.category import Category
from catalog.models.product import Product, ProductMedia

# Bucket-uri fixe; ordinea de aici e ordinea din răspuns
PRICE_BUCKETS = ("0-500", "501-1000", "1000+")


def highest_price_per_category(db: Session) -> list[dict]:
    """Prețul maxim per categorie (doar categoriile care au produse)."""
    stmt = (
        select(Category.category_name, func.max(Product.price).label("highest_price"))
        .join(Product, Product.category_id == Category.category_id)
        .group_by(Category.category_name)
        .order_by(Category.category_name.asc())
    )
    return [dict(r) for r in db.execute(stmt).mappings().all()]


def price_histogram(db: Session) -> list[dict]:
    """
    Număr de produse pe interval de preț:
      - '0-500'    : price <= 500
      - '501-1000' : 500 < price <= 1000
      - '1000+'    : price > 1000
    Întoarce mereu cele trei bucket-uri (inclusiv cu 0).
    """
    # agregare condiționată: un singur SELECT, fără GROUP BY pe expresie CASE
    conditions = (
        Product.price <= 500,
        (Product.price > 500) & (Product.price <= 1000),
        Product.price > 1000,
    )
    stmt = select(
        *(
            func.coalesce(func.sum(case((cond, 1), else_=0)), 0).label(f"b{i}")
            for i, cond in enumerate(conditions)
        )
    )
    row = db.execute(stmt).one()
    return [
        {"price_range": label, "product_count": int(row[i] or 0)}
        for i, label in enumerate(PRICE_BUCKETS)
    ]


def products_without_media(db: Session) -> list[dict]:
    stmt = (
        select(Product.product_id, Product.product_name)
        .outerjoin(ProductMedia, ProductMedia.product_id == Product.product_id)
        .where(ProductMedia.product_id.is_(None))
        .order_by(Product.product_id.asc())
    )
    return [dict(r) for r in db.execute(stmt).mappings().all()]
