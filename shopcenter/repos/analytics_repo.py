# shopcenter/repos/analytics_repo.py
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from shopcenter.data.models.order import OrderModel
from shopcenter.data.models.order_item import OrderItemModel
from shopcenter.data.models.product import ProductModel
from shopcenter.domain.pricing import to_money

PAID = "paid"


class AnalyticsRepo:
    def __init__(self, db: Session):
        self.db = db

    def paid_sales(self) -> Tuple[Decimal, int]:
        """Sum of totals and count over orders with payment status paid."""
        total, count = self.db.execute(
            select(func.coalesce(func.sum(OrderModel.total), 0), func.count(OrderModel.id))
            .where(OrderModel.payment_status == PAID)
        ).one()
        return to_money(total), count

    def top_products(self, limit: int = 5) -> List[Tuple[ProductModel, int, Decimal]]:
        """
        Products ranked by quantity sold in paid orders, then revenue, then id.
        Products without sales participate with zero.
        """
        sold = (
            select(
                OrderItemModel.product_id.label("product_id"),
                func.sum(OrderItemModel.quantity).label("sold_count"),
                func.sum(OrderItemModel.total).label("revenue"),
            )
            .join(OrderModel, OrderItemModel.order_id == OrderModel.id)
            .where(OrderModel.payment_status == PAID, OrderItemModel.product_id.is_not(None))
            .group_by(OrderItemModel.product_id)
            .subquery()
        )

        sold_count = func.coalesce(sold.c.sold_count, 0)
        revenue = func.coalesce(sold.c.revenue, 0)

        rows = self.db.execute(
            select(ProductModel, sold_count, revenue)
            .outerjoin(sold, sold.c.product_id == ProductModel.id)
            .order_by(sold_count.desc(), revenue.desc(), ProductModel.id.asc())
            .limit(limit)
        ).all()

        return [(product, int(count), to_money(rev)) for product, count, rev in rows]
