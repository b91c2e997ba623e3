# shopcenter/api/routers/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopcenter.api.deps import require_admin
from shopcenter.api.routers.products import product_filter
from shopcenter.data.database import get_db
from shopcenter.domain.filters import ProductFilter
from shopcenter.domain.schemas import DashboardStatsOut, ProductListOut
from shopcenter.services.analytics_service import AnalyticsService
from shopcenter.services.catalog_service import CatalogService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=DashboardStatsOut)
def dashboard_stats(db: Session = Depends(get_db)):
    return AnalyticsService(db).get_dashboard_stats()


@router.get("/products", response_model=ProductListOut)
def list_all_products(params: ProductFilter = Depends(product_filter), db: Session = Depends(get_db)):
    """Same filters as the storefront, inactive products included."""
    return CatalogService(db).list_products(params, include_inactive=True)
