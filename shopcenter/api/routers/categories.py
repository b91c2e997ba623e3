# shopcenter/api/routers/categories.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shopcenter.api.deps import require_admin
from shopcenter.data.database import get_db
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.schemas import CategoryIn, CategoryOut, CategoryUpdate
from shopcenter.services.catalog_service import CatalogService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@router.get("/{slug}", response_model=CategoryOut)
def get_category(slug: str, db: Session = Depends(get_db)):
    category = CatalogService(db).get_category_by_slug(slug)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


@router.post("/", response_model=CategoryOut, status_code=201, dependencies=[Depends(require_admin)])
def create_category(payload: CategoryIn, db: Session = Depends(get_db)):
    return CatalogService(db).create_category(payload)


@router.put("/{category_id}", response_model=CategoryOut, dependencies=[Depends(require_admin)])
def update_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_category(category_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{category_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_category(category_id: int, db: Session = Depends(get_db)):
    if not CatalogService(db).delete_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
