# catalog/services/product_write.py
"""
Calea de scriere pentru produs: create / replace / delete.

Fiecare operație:
  - validează input-ul ÎNAINTE de a deschide tranzacția (ValidationError);
  - rulează într-o singură tranzacție (`write_transaction`): commit la succes,
    rollback la orice eroare, fără stare parțială vizibilă;
  - folosește sesiunea primită (o conexiune din pool per operație),
    pe care o închide apelantul (`get_db` / `session_scope`).

Unicitatea SKU se verifică pe ciphertext (criptare deterministă); indexul UNIC
din DB rămâne plasa de siguranță pentru scrieri concurente.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from catalog.core.crypto import SkuCipher
from catalog.crud import category as category_crud
from catalog.crud import material as material_crud
from catalog.crud import product as crud
from catalog.database import write_transaction
from catalog.errors import ConflictError, NotFoundError, ValidationError
from catalog.schemas.product import ProductWrite

logger = logging.getLogger(__name__)

ProductInput = Union[ProductWrite, Mapping[str, Any]]


def _validate(data: ProductInput) -> ProductWrite:
    if isinstance(data, ProductWrite):
        return data
    if not isinstance(data, Mapping):
        raise ValidationError("Missing required fields")
    try:
        return ProductWrite.model_validate(dict(data))
    except PydanticValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ValidationError(f"Missing required fields: {', '.join(fields)}") from e


def _check_references(db: Session, payload: ProductWrite) -> None:
    if not category_crud.exists(db, payload.category_id):
        raise NotFoundError(f"Category {payload.category_id} not found")
    missing = material_crud.missing_ids(db, payload.materials)
    if missing:
        raise NotFoundError(f"Material(s) not found: {', '.join(map(str, missing))}")


def create_product(db: Session, cipher: SkuCipher, data: ProductInput) -> int:
    """Creează produsul + materialele + media; întoarce product_id."""
    payload = _validate(data)
    encrypted_sku = cipher.encrypt(payload.sku)

    with write_transaction(db):
        if crud.find_id_by_sku(db, encrypted_sku, lock=True) is not None:
            logger.warning("Create rejected: duplicate SKU")
            raise ConflictError("Duplicate SKU is not allowed")
        _check_references(db, payload)

        product_id = crud.insert(
            db,
            sku=encrypted_sku,
            product_name=payload.product_name,
            category_id=payload.category_id,
            price=payload.price,
        )
        crud.add_materials(db, product_id, payload.materials)
        crud.add_media(db, product_id, payload.image_urls)

    logger.info(
        "Product %s created (materials=%d, media=%d)",
        product_id, len(payload.materials), len(payload.image_urls),
    )
    return product_id


def replace_product(db: Session, cipher: SkuCipher, product_id: int, data: ProductInput) -> None:
    """
    Înlocuire completă: câmpurile produsului + setul de materiale + lista de media.
    Asocierile vechi sunt șterse și reinserate (nu diff).
    """
    payload = _validate(data)
    encrypted_sku = cipher.encrypt(payload.sku)

    with write_transaction(db):
        if crud.find_id_by_sku(db, encrypted_sku, exclude_id=product_id, lock=True) is not None:
            logger.warning("Replace of product %s rejected: duplicate SKU", product_id)
            raise ConflictError("Duplicate SKU is not allowed")
        _check_references(db, payload)

        matched = crud.update_fields(
            db,
            product_id,
            sku=encrypted_sku,
            product_name=payload.product_name,
            category_id=payload.category_id,
            price=payload.price,
        )
        if not matched:
            raise NotFoundError("Product not found")

        crud.clear_materials(db, product_id)
        crud.add_materials(db, product_id, payload.materials)
        crud.clear_media(db, product_id)
        crud.add_media(db, product_id, payload.image_urls)

    logger.info("Product %s replaced", product_id)


def delete_product(db: Session, product_id: int) -> None:
    """
    Șterge media, materialele, apoi produsul (copii înaintea părintelui).
    Produs inexistent → NotFoundError (iar rollback-ul anulează tot).
    """
    with write_transaction(db):
        crud.clear_media(db, product_id)
        crud.clear_materials(db, product_id)
        if not crud.delete_row(db, product_id):
            raise NotFoundError("Product not found")

    logger.info("Product %s deleted", product_id)


__all__ = ["create_product", "replace_product", "delete_product"]
