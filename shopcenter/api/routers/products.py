# shopcenter/api/routers/products.py
from decimal import Decimal
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from shopcenter.api.deps import require_admin
from shopcenter.data.database import get_db
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.filters import ProductFilter
from shopcenter.domain.schemas import ProductIn, ProductListOut, ProductOut, ProductUpdate
from shopcenter.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


def product_filter(
    category_id: int | None = Query(None, gt=0),
    search: str | None = Query(None, max_length=200),
    sort_by: str | None = Query(None),
    sort_order: Literal["asc", "desc"] = Query("asc"),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    brand: str | None = Query(None),
    featured: bool = Query(False),
    limit: int | None = Query(None, ge=1, le=100),
    offset: int | None = Query(None, ge=0),
) -> ProductFilter:
    return ProductFilter(
        category_id=category_id,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        min_price=min_price,
        max_price=max_price,
        brand=brand,
        featured=featured,
        limit=limit,
        offset=offset,
    )


@router.get("/", response_model=ProductListOut)
def list_products(params: ProductFilter = Depends(product_filter), db: Session = Depends(get_db)):
    return CatalogService(db).list_products(params)


@router.get("/featured", response_model=List[ProductOut])
def featured_products(limit: int = Query(8, ge=1, le=50), db: Session = Depends(get_db)):
    return CatalogService(db).get_featured_products(limit)


@router.get("/slug/{slug}", response_model=ProductOut)
def get_product_by_slug(slug: str, db: Session = Depends(get_db)):
    product = CatalogService(db).get_product_by_slug(slug)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    product = CatalogService(db).get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("/", response_model=ProductOut, status_code=201, dependencies=[Depends(require_admin)])
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    return CatalogService(db).create_product(payload)


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).update_product(product_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(product_id: int, db: Session = Depends(get_db)):
    if not CatalogService(db).delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
