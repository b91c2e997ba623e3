# shopcenter/repos/order_repo.py
from datetime import datetime, timezone
from typing import List, Tuple, Iterable

from sqlalchemy import select, func, update
from sqlalchemy.orm import Session

from shopcenter.data.models.order import OrderModel
from shopcenter.data.models.order_item import OrderItemModel
from shopcenter.data.models.product import ProductModel
from shopcenter.domain.filters import OrderFilter


def _conditions(params: OrderFilter) -> list:
    conditions = []
    if params.user_id:
        conditions.append(OrderModel.user_id == params.user_id)
    if params.status:
        conditions.append(OrderModel.status == params.status)
    return conditions


NEWEST_FIRST = (OrderModel.created_at.desc(), OrderModel.id.desc())


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def create_order_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def create_order_with_items(
        self, order: OrderModel, items: Iterable[OrderItemModel]
    ) -> OrderModel:
        """Header and line items go out in the same flush."""
        order.items.extend(items)
        self.db.add(order)
        self.db.flush()
        return order

    def list_orders(self, params: OrderFilter) -> Tuple[List[OrderModel], int]:
        conditions = _conditions(params)

        query = select(OrderModel).where(*conditions).order_by(*NEWEST_FIRST)
        if params.limit is not None:
            query = query.limit(params.limit)
        if params.offset is not None:
            query = query.offset(params.offset)

        count_query = select(func.count()).select_from(OrderModel).where(*conditions)

        orders = self.db.execute(query).scalars().all()
        total = self.db.execute(count_query).scalar_one()
        return list(orders), total

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_order_by_number(self, order_number: str) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(OrderModel.order_number == order_number)
        ).scalar_one_or_none()

    def get_user_orders(self, user_id: str) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).where(OrderModel.user_id == user_id).order_by(*NEWEST_FIRST)
            ).scalars().all()
        )

    def get_order_items(self, order_id: int) -> List[Tuple[OrderItemModel, ProductModel | None]]:
        # outer join: items of deleted products keep their snapshot
        rows = self.db.execute(
            select(OrderItemModel, ProductModel)
            .outerjoin(ProductModel, OrderItemModel.product_id == ProductModel.id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.id.asc())
        ).all()
        return [(item, product) for item, product in rows]

    def update_order(self, order: OrderModel, **fields) -> OrderModel:
        for key, value in fields.items():
            setattr(order, key, value)
        order.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return order

    def transition_status(self, order: OrderModel, current: str, status: str) -> bool:
        """
        Compare-and-set on the status column. False when the stored status
        is no longer `current`; the order is reloaded either way.
        """
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order.id, OrderModel.status == current)
            .values(status=status, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        self.db.refresh(order)
        return result.rowcount > 0

    def recent_orders(self, limit: int = 5) -> List[OrderModel]:
        return list(
            self.db.execute(select(OrderModel).order_by(*NEWEST_FIRST).limit(limit)).scalars().all()
        )

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
