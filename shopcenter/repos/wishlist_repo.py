# shopcenter/repos/wishlist_repo.py
from typing import List, Tuple

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from shopcenter.data.models.product import ProductModel
from shopcenter.data.models.wishlist import WishlistModel
from shopcenter.data.upsert import dialect_insert


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_wishlist(self, user_id: str) -> List[Tuple[WishlistModel, ProductModel]]:
        rows = self.db.execute(
            select(WishlistModel, ProductModel)
            .join(ProductModel, WishlistModel.product_id == ProductModel.id)
            .where(WishlistModel.user_id == user_id)
            .order_by(WishlistModel.created_at.desc(), WishlistModel.id.desc())
        ).all()
        return [(entry, product) for entry, product in rows]

    def get_entry(self, user_id: str, product_id: int) -> WishlistModel | None:
        return self.db.execute(
            select(WishlistModel).where(
                WishlistModel.user_id == user_id,
                WishlistModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_entry(self, user_id: str, product_id: int) -> WishlistModel:
        """Insert-or-ignore; an existing (user, product) entry is returned as is."""
        stmt = (
            dialect_insert(self.db, WishlistModel)
            .values(user_id=user_id, product_id=product_id)
            .on_conflict_do_nothing(index_elements=["user_id", "product_id"])
        )
        self.db.execute(stmt)
        return self.get_entry(user_id, product_id)

    def delete_entry(self, user_id: str, product_id: int) -> bool:
        result = self.db.execute(
            delete(WishlistModel).where(
                WishlistModel.user_id == user_id,
                WishlistModel.product_id == product_id,
            )
        )
        return result.rowcount > 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
