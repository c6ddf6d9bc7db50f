# catalog/routers/product.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from catalog.core.crypto import SkuCipher, get_cipher
from catalog.crud import statistics as stats
from catalog.database import get_db
from catalog.schemas.product import (
    Message,
    ProductCreated,
    ProductDetail,
    ProductSummary,
    ProductWrite,
)
from catalog.schemas.statistics import (
    CategoryHighestPrice,
    PriceRangeCount,
    ProductWithoutMedia,
)
from catalog.services import product_read, product_write

router = APIRouter(prefix="/api/products", tags=["products"])


# ---------- Statistics (înaintea rutelor cu /{product_id}) ----------

@router.get(
    "/statistics/highest-price",
    response_model=List[CategoryHighestPrice],
    summary="Highest product price per category",
)
def highest_price_per_category(db: Session = Depends(get_db)):
    return stats.highest_price_per_category(db)


@router.get(
    "/statistics/price-range",
    response_model=List[PriceRangeCount],
    summary="Product count per price range (0-500, 501-1000, 1000+)",
)
def price_histogram(db: Session = Depends(get_db)):
    return stats.price_histogram(db)


@router.get(
    "/statistics/no-media",
    response_model=List[ProductWithoutMedia],
    summary="Products without any media",
)
def products_without_media(db: Session = Depends(get_db)):
    return stats.products_without_media(db)


# ---------- CRUD ----------

@router.get(
    "",
    response_model=List[ProductSummary],
    summary="List products (materials as names)",
)
def list_products(
    db: Session = Depends(get_db),
    cipher: SkuCipher = Depends(get_cipher),
):
    return product_read.list_products(db, cipher)


@router.get(
    "/{product_id}",
    response_model=ProductDetail,
    summary="Get a product by id (materials as ids)",
)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    cipher: SkuCipher = Depends(get_cipher),
):
    return product_read.get_product(db, cipher, product_id)


@router.post(
    "",
    response_model=ProductCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product with its materials and media",
)
def create_product(
    payload: ProductWrite,
    db: Session = Depends(get_db),
    cipher: SkuCipher = Depends(get_cipher),
):
    product_id = product_write.create_product(db, cipher, payload)
    return ProductCreated(product_id=product_id)


@router.put(
    "/{product_id}",
    response_model=ProductDetail,
    summary="Replace a product (fields, materials and media)",
)
def replace_product(
    product_id: int,
    payload: ProductWrite,
    db: Session = Depends(get_db),
    cipher: SkuCipher = Depends(get_cipher),
):
    product_write.replace_product(db, cipher, product_id, payload)
    return product_read.get_product(db, cipher, product_id)


@router.delete(
    "/{product_id}",
    response_model=Message,
    summary="Delete a product with its materials and media",
)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    product_write.delete_product(db, product_id)
    return Message(message="Product deleted successfully")
