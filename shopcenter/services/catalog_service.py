# shopcenter/services/catalog_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from shopcenter.data.models.category import CategoryModel
from shopcenter.data.models.product import ProductModel
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.filters import ProductFilter
from shopcenter.domain.schemas import (
    CategoryIn,
    CategoryUpdate,
    ProductIn,
    ProductUpdate,
)
from shopcenter.repos.category_repo import CategoryRepo
from shopcenter.repos.product_repo import ProductRepo
from shopcenter.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """
    Categories and products.
    Public reads only ever see active products, the admin listing sees all.
    """

    def __init__(self, db: Session):
        self.products = ProductRepo(db)
        self.categories = CategoryRepo(db)

    # query
    def list_products(self, params: ProductFilter, include_inactive: bool = False) -> Dict[str, Any]:
        products, total = self.products.list_products(params, include_inactive=include_inactive)
        return {"products": products, "total": total}

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.products.get_product(product_id)

    def get_product_by_slug(self, slug: str) -> ProductModel | None:
        return self.products.get_product_by_slug(slug)

    def get_featured_products(self, limit: int = 8) -> List[ProductModel]:
        return self.products.get_featured_products(limit)

    def list_categories(self) -> List[CategoryModel]:
        return self.categories.list_categories()

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.categories.get_category(category_id)

    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.categories.get_category_by_slug(slug)

    # commands
    def create_product(self, payload: ProductIn) -> ProductModel:
        data = payload.model_dump()
        try:
            product = self.products.add_product(ProductModel(**data))
            self.products.commit()
        except Exception:
            self.products.rollback()
            raise

        logger.info(f"Created product {product.id} ({product.slug})")
        return product

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        changes = payload.model_dump(exclude_unset=True)
        for key, value in changes.items():
            setattr(product, key, value)
        product.updated_at = datetime.now(timezone.utc)

        try:
            self.products.commit()
        except Exception:
            self.products.rollback()
            raise

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return product

    def delete_product(self, product_id: int) -> bool:
        deleted = self.products.delete_product(product_id)
        self.products.commit()
        if deleted:
            logger.info(f"Deleted product {product_id}")
        return deleted

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        try:
            category = self.categories.add_category(CategoryModel(**payload.model_dump()))
            self.categories.commit()
        except Exception:
            self.categories.rollback()
            raise

        logger.info(f"Created category {category.id} ({category.slug})")
        return category

    def update_category(self, category_id: int, payload: CategoryUpdate) -> CategoryModel:
        category = self.categories.get_category(category_id)
        if not category:
            raise NotFoundError("Category not found")

        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(category, key, value)

        try:
            self.categories.commit()
        except Exception:
            self.categories.rollback()
            raise
        return category

    def delete_category(self, category_id: int) -> bool:
        # children and products are detached (SET NULL), not deleted
        deleted = self.categories.delete_category(category_id)
        self.categories.commit()
        if deleted:
            logger.info(f"Deleted category {category_id}")
        return deleted
