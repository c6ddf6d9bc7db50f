# catalog/routers/category.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from catalog.crud import category as crud
from catalog.database import get_db
from catalog.schemas.category import CategoryRead

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get(
    "",
    response_model=List[CategoryRead],
    summary="List categories",
)
def list_categories(db: Session = Depends(get_db)):
    return crud.list_categories(db)
