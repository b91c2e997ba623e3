# shopcenter/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.orm import Session

from shopcenter.domain.errors import NotFoundError, ProductUnavailableError
from shopcenter.domain.pricing import PricingPolicy, effective_price
from shopcenter.domain.schemas import ProductOut
from shopcenter.repos.cart_repo import CartRepo
from shopcenter.repos.product_repo import ProductRepo
from shopcenter.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Cart use cases for one user.
    commands (add, update, remove, clear) modify state
    query (get) is read only
    """

    def __init__(self, db: Session, pricing: PricingPolicy | None = None):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.pricing = pricing or PricingPolicy()

    # query
    def get_cart(self, user_id: str) -> Dict[str, Any]:
        rows = self.repo.get_cart_items(user_id)

        items = []
        subtotal = Decimal("0.00")
        for item, product in rows:
            unit_price = effective_price(product)
            line_total = unit_price * item.quantity
            subtotal += line_total
            items.append(
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "unit_price": unit_price,
                    "line_total": line_total,
                    "product": ProductOut.model_validate(product),
                    "created_at": item.created_at,
                    "updated_at": item.updated_at,
                }
            )

        totals = self.pricing.totals(subtotal)
        return {
            "items": items,
            "subtotal": totals.subtotal,
            "tax": totals.tax,
            "shipping": totals.shipping,
            "total": totals.total,
        }

    # commands
    def add_to_cart(self, user_id: str, product_id: int, quantity: int):
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        if not product.is_active:
            raise ProductUnavailableError(f"Product {product_id} is not available")

        try:
            item = self.repo.upsert_item(user_id, product_id, quantity)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Failed to add product {product_id} to cart of user {user_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(f"Cart of user {user_id}: product {product_id} quantity now {item.quantity}")
        return item

    def update_quantity(self, user_id: str, item_id: int, quantity: int):
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        item = self.repo.get_cart_item(item_id)
        if not item:
            raise NotFoundError("Cart item not found")
        if item.user_id != user_id:
            raise PermissionError("No access to this cart item")

        # absolute set, not a delta
        self.repo.set_quantity(item, quantity)
        self.repo.commit()
        return item

    def remove_from_cart(self, user_id: str, item_id: int) -> bool:
        item = self.repo.get_cart_item(item_id)
        if not item:
            return False
        if item.user_id != user_id:
            raise PermissionError("No access to this cart item")

        deleted = self.repo.delete_item(item_id)
        self.repo.commit()
        return deleted

    def clear_cart(self, user_id: str) -> bool:
        deleted = self.repo.delete_user_items(user_id)
        self.repo.commit()
        logger.info(f"Cleared cart of user {user_id}")
        return deleted
