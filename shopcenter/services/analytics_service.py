# shopcenter/services/analytics_service.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from shopcenter.domain.schemas import OrderOut, ProductOut
from shopcenter.repos.analytics_repo import AnalyticsRepo
from shopcenter.repos.order_repo import OrderRepo
from shopcenter.repos.product_repo import ProductRepo
from shopcenter.repos.user_repo import UserRepo


class AnalyticsService:
    def __init__(self, db: Session):
        self.repo = AnalyticsRepo(db)
        self.orders = OrderRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    def get_dashboard_stats(self) -> Dict[str, Any]:
        """
        Admin dashboard report. Sales figures and top products both count
        paid orders only.
        """
        total_sales, total_orders = self.repo.paid_sales()

        top_products = []
        for product, sold_count, revenue in self.repo.top_products(limit=5):
            entry = ProductOut.model_validate(product).model_dump()
            entry["sold_count"] = sold_count
            entry["revenue"] = revenue
            top_products.append(entry)

        return {
            "total_sales": total_sales,
            "total_orders": total_orders,
            "total_products": self.products.count_active(),
            "total_customers": self.users.count_by_role("customer"),
            "recent_orders": [OrderOut.model_validate(o) for o in self.orders.recent_orders(5)],
            "top_products": top_products,
        }
