# catalog/services/product_read.py
"""
Vederi denormalizate pentru produs (join + agregare) cu SKU decriptat.

Agregarea materialelor/media se face în Python din trei interogări portabile,
în loc de GROUP_CONCAT (specific MySQL/SQLite).
"""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from sqlalchemy import Row
from sqlalchemy.orm import Session

from catalog.core.crypto import SkuCipher
from catalog.crud import product as crud
from catalog.errors import NotFoundError
from catalog.schemas.product import ProductDetail, ProductSummary


def _distinct(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))


def _media_by_product(db: Session, ids: Sequence[int]) -> Dict[int, List[str]]:
    media: Dict[int, List[str]] = defaultdict(list)
    for r in crud.select_media_rows(db, ids):
        media[r.product_id].append(r.url)
    return {pid: _distinct(urls) for pid, urls in media.items()}


def list_products(db: Session, cipher: SkuCipher) -> List[ProductSummary]:
    """Toate produsele; materialele ca nume (distincte, sortate)."""
    rows: Sequence[Row] = crud.select_rows(db)
    ids = [r.product_id for r in rows]

    names: Dict[int, set] = defaultdict(set)
    for r in crud.select_material_rows(db, ids):
        names[r.product_id].add(r.material_name)
    media = _media_by_product(db, ids)

    return [
        ProductSummary(
            product_id=r.product_id,
            sku=cipher.decrypt(r.sku),
            product_name=r.product_name,
            category_name=r.category_name,
            price=r.price,
            materials=sorted(names.get(r.product_id, ())),
            image_urls=media.get(r.product_id, []),
        )
        for r in rows
    ]


def get_product(db: Session, cipher: SkuCipher, product_id: int) -> ProductDetail:
    """Un produs; materialele ca id-uri. NotFoundError dacă nu există."""
    rows = crud.select_rows(db, product_id)
    if not rows:
        raise NotFoundError("Product not found")
    r = rows[0]

    material_ids = sorted({m.material_id for m in crud.select_material_rows(db, [product_id])})
    media = _media_by_product(db, [product_id])

    return ProductDetail(
        product_id=r.product_id,
        sku=cipher.decrypt(r.sku),
        product_name=r.product_name,
        category_id=r.category_id,
        category_name=r.category_name,
        price=r.price,
        materials=material_ids,
        image_urls=media.get(product_id, []),
    )


__all__ = ["list_products", "get_product"]
