#!/usr/bin/env python3
"""
Populează categoriile și materialele (API-ul nu le expune la scriere).

Idempotent: un nume deja existent nu se inserează a doua oară.

Usage:
    python -m catalog.seed --category Furniture --material Oak --material Steel
    python -m catalog.seed            # set implicit
"""
from __future__ import annotations

import argparse
import logging
from typing import Iterable, Tuple

from sqlalchemy.orm import Session

from catalog.core.logging import setup_logging
from catalog.core.settings import settings
from catalog.crud import category as category_crud
from catalog.crud import material as material_crud
from catalog.database import init_db, session_scope

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("Furniture", "Lighting", "Decor")
DEFAULT_MATERIALS = ("Wood", "Steel", "Glass", "Cotton")


def seed_catalog(db: Session, categories: Iterable[str], materials: Iterable[str]) -> Tuple[int, int]:
    """Întoarce (categorii create, materiale create). Commit-ul aparține apelantului."""
    created_cat = 0
    for name in dict.fromkeys(n.strip() for n in categories if n and n.strip()):
        if not category_crud.get_by_name(db, name):
            category_crud.create(db, name)
            created_cat += 1

    created_mat = 0
    for name in dict.fromkeys(n.strip() for n in materials if n and n.strip()):
        if not material_crud.get_by_name(db, name):
            material_crud.create(db, name)
            created_mat += 1

    return created_cat, created_mat


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed categories and materials")
    parser.add_argument("--category", "-c", action="append", default=[], help="Category name (repeatable)")
    parser.add_argument("--material", "-m", action="append", default=[], help="Material name (repeatable)")
    args = parser.parse_args(argv)

    setup_logging(settings.LOG_LEVEL)

    categories = args.category
    materials = args.material
    if not categories and not materials:
        categories, materials = list(DEFAULT_CATEGORIES), list(DEFAULT_MATERIALS)

    init_db()
    with session_scope() as db:
        created_cat, created_mat = seed_catalog(db, categories, materials)

    logger.info("Seeded %d categories, %d materials", created_cat, created_mat)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
