# shopcenter/services/wishlist_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from shopcenter.data.models.wishlist import WishlistModel
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.schemas import ProductOut
from shopcenter.repos.product_repo import ProductRepo
from shopcenter.repos.wishlist_repo import WishlistRepo


class WishlistService:
    def __init__(self, db: Session):
        self.repo = WishlistRepo(db)
        self.products = ProductRepo(db)

    def get_wishlist(self, user_id: str) -> List[Dict[str, Any]]:
        return [
            {
                "id": entry.id,
                "product_id": entry.product_id,
                "created_at": entry.created_at,
                "product": ProductOut.model_validate(product),
            }
            for entry, product in self.repo.get_wishlist(user_id)
        ]

    def add_to_wishlist(self, user_id: str, product_id: int) -> WishlistModel:
        # adding twice keeps a single entry
        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        entry = self.repo.add_entry(user_id, product_id)
        self.repo.commit()
        return entry

    def remove_from_wishlist(self, user_id: str, product_id: int) -> bool:
        deleted = self.repo.delete_entry(user_id, product_id)
        self.repo.commit()
        return deleted
