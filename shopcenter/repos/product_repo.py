# shopcenter/repos/product_repo.py
from typing import List, Tuple

from sqlalchemy import select, func, or_, delete, update
from sqlalchemy.orm import Session

from shopcenter.data.models.product import ProductModel
from shopcenter.domain.filters import ProductFilter

# whitelisted sort keys, anything else falls back to created desc
SORT_COLUMNS = {
    "price": ProductModel.price,
    "name": ProductModel.name,
    "rating": ProductModel.rating,
    "created": ProductModel.created_at,
}


def _conditions(params: ProductFilter, include_inactive: bool = False) -> list:
    """
    Shared predicate builder for the page query and the count query.
    Every supplied filter is ANDed.
    """
    conditions = []

    if not include_inactive:
        conditions.append(ProductModel.is_active.is_(True))

    if params.category_id is not None:
        conditions.append(ProductModel.category_id == params.category_id)

    if params.search:
        term = params.search
        conditions.append(
            or_(
                ProductModel.name.contains(term, autoescape=True),
                ProductModel.description.contains(term, autoescape=True),
                ProductModel.brand.contains(term, autoescape=True),
            )
        )

    if params.min_price is not None:
        conditions.append(ProductModel.price >= params.min_price)

    if params.max_price is not None:
        conditions.append(ProductModel.price <= params.max_price)

    if params.brand:
        conditions.append(ProductModel.brand == params.brand)

    if params.featured:
        conditions.append(ProductModel.is_featured.is_(True))

    return conditions


def _ordering(params: ProductFilter) -> list:
    column = SORT_COLUMNS.get(params.sort_by) if params.sort_by else None

    if column is None:
        return [ProductModel.created_at.desc(), ProductModel.id.desc()]

    # id breaks ties in the same direction as the sort key
    if params.sort_order == "desc":
        return [column.desc(), ProductModel.id.desc()]
    return [column.asc(), ProductModel.id.asc()]


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(
        self, params: ProductFilter, include_inactive: bool = False
    ) -> Tuple[List[ProductModel], int]:
        conditions = _conditions(params, include_inactive)

        query = select(ProductModel).where(*conditions).order_by(*_ordering(params))
        if params.limit is not None:
            query = query.limit(params.limit)
        if params.offset is not None:
            query = query.offset(params.offset)

        count_query = select(func.count()).select_from(ProductModel).where(*conditions)

        products = self.db.execute(query).scalars().all()
        total = self.db.execute(count_query).scalar_one()
        return list(products), total

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.slug == slug)
        ).scalar_one_or_none()

    def get_featured_products(self, limit: int = 8) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.is_featured.is_(True), ProductModel.is_active.is_(True))
                .order_by(ProductModel.rating.desc(), ProductModel.id.asc())
                .limit(limit)
            ).scalars().all()
        )

    def count_active(self) -> int:
        return self.db.execute(
            select(func.count()).select_from(ProductModel).where(ProductModel.is_active.is_(True))
        ).scalar_one()

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def decrement_stock(self, product: ProductModel, quantity: int) -> bool:
        """
        Takes quantity units off the stock in one conditional UPDATE.
        False when the row no longer holds enough stock.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product.id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        # the in-memory stock may be stale, reload on next access
        self.db.expire(product, ["stock"])
        return result.rowcount > 0

    def delete_product(self, product_id: int) -> bool:
        # Core delete so the database cascades dependents
        result = self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        return result.rowcount > 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
