# shopcenter/repos/cart_repo.py
from datetime import datetime, timezone
from typing import List, Tuple

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from shopcenter.data.models.cart_item import CartItemModel
from shopcenter.data.models.product import ProductModel
from shopcenter.data.upsert import dialect_insert


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart_items(self, user_id: str) -> List[Tuple[CartItemModel, ProductModel]]:
        """Cart rows joined with their current product, newest first."""
        rows = self.db.execute(
            select(CartItemModel, ProductModel)
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.created_at.desc(), CartItemModel.id.desc())
        ).all()
        return [(item, product) for item, product in rows]

    def get_cart_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def upsert_item(self, user_id: str, product_id: int, quantity: int) -> CartItemModel:
        """
        Insert-or-increment in one statement, guarded by the
        (user_id, product_id) unique constraint.
        """
        now = datetime.now(timezone.utc)
        stmt = dialect_insert(self.db, CartItemModel).values(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "product_id"],
            set_={
                "quantity": CartItemModel.quantity + stmt.excluded.quantity,
                "updated_at": now,
            },
        ).returning(CartItemModel.id)

        item_id = self.db.execute(stmt).scalar_one()
        return self.db.get(CartItemModel, item_id, populate_existing=True)

    def set_quantity(self, item: CartItemModel, quantity: int) -> CartItemModel:
        item.quantity = quantity
        item.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return item

    def delete_item(self, item_id: int) -> bool:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.id == item_id))
        return result.rowcount > 0

    def delete_user_items(self, user_id: str) -> bool:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))
        return result.rowcount > 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
