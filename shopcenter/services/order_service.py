# shopcenter/services/order_service.py
import secrets
import time
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from shopcenter.data.models.order import OrderModel
from shopcenter.data.models.order_item import OrderItemModel
from shopcenter.domain.errors import (
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    ProductUnavailableError,
)
from shopcenter.domain.filters import OrderFilter
from shopcenter.domain.order_status import PAYMENT_STATUSES, check_transition
from shopcenter.domain.pricing import PricingPolicy, effective_price
from shopcenter.domain.schemas import CheckoutIn, OrderOut, ProductOut
from shopcenter.repos.cart_repo import CartRepo
from shopcenter.repos.order_repo import OrderRepo
from shopcenter.repos.product_repo import ProductRepo
from shopcenter.utils.logging import get_logger

logger = get_logger(__name__)


def generate_order_number() -> str:
    return f"ORD-{int(time.time() * 1000)}-{secrets.token_hex(3).upper()}"


class OrderService:
    """
    Orders: checkout from the cart, listing, status and payment updates.
    """

    def __init__(self, db: Session, pricing: PricingPolicy | None = None):
        self.repo = OrderRepo(db)
        self.cart = CartRepo(db)
        self.products = ProductRepo(db)
        self.pricing = pricing or PricingPolicy()

    def place_order(self, user_id: str, checkout: CheckoutIn) -> Dict[str, Any]:
        """
        Use case: turn the user's cart into an order.

        1. reads the cart with current product data
        2. checks every product is active and in stock
        3. snapshots unit price and line total per item
        4. writes header + items, decrements stock, clears the cart

        Everything happens in one transaction.
        """
        rows = self.cart.get_cart_items(user_id)
        if not rows:
            raise EmptyCartError("Cart is empty")

        items = []
        subtotal = Decimal("0.00")
        for cart_item, product in rows:
            if not product.is_active:
                raise ProductUnavailableError(f"Product '{product.name}' is no longer available")
            if product.stock < cart_item.quantity:
                raise InsufficientStockError(
                    f"Only {product.stock} of '{product.name}' left in stock"
                )

            unit_price = effective_price(product)
            line_total = unit_price * cart_item.quantity
            subtotal += line_total
            items.append(
                OrderItemModel(
                    product_id=product.id,
                    quantity=cart_item.quantity,
                    price=unit_price,
                    total=line_total,
                )
            )

        totals = self.pricing.totals(subtotal)
        shipping_address = checkout.shipping_address.model_dump()
        billing_address = (checkout.billing_address or checkout.shipping_address).model_dump()

        order = OrderModel(
            user_id=user_id,
            order_number=generate_order_number(),
            status="pending",
            subtotal=totals.subtotal,
            tax=totals.tax,
            shipping=totals.shipping,
            total=totals.total,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=checkout.payment_method,
            payment_status="pending",
            notes=checkout.notes,
        )

        try:
            self.repo.create_order_with_items(order, items)
            for cart_item, product in rows:
                # the check above ran on a plain read, the stored row decides
                if not self.products.decrement_stock(product, cart_item.quantity):
                    raise InsufficientStockError(f"'{product.name}' sold out during checkout")
            self.cart.delete_user_items(user_id)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Checkout failed for user {user_id}: {e}")
            self.repo.rollback()
            raise

        logger.info(
            f"Order {order.order_number} placed by user {user_id}: "
            f"{len(items)} items, total {order.total}"
        )
        return self.get_order_detail(order.id)

    def create_order(self, order: OrderModel, items: List[OrderItemModel]) -> OrderModel:
        """Writes a prepared header and its line items in one transaction."""
        if not items:
            raise ValueError("An order needs at least one item")

        try:
            created = self.repo.create_order(order)
            for item in items:
                item.order_id = created.id
                self.repo.create_order_item(item)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {created.order_number} created with {len(items)} items")
        return created

    def list_orders(self, params: OrderFilter) -> Dict[str, Any]:
        orders, total = self.repo.list_orders(params)
        return {"orders": orders, "total": total}

    def get_user_orders(self, user_id: str) -> List[OrderModel]:
        return self.repo.get_user_orders(user_id)

    def get_order(self, order_id: int, user_id: str | None = None) -> OrderModel | None:
        """user_id restricts access to the owner, None means unrestricted."""
        order = self.repo.get_order(order_id)
        if not order:
            return None
        if user_id is not None and order.user_id != user_id:
            raise PermissionError("No access to this order")
        return order

    def get_order_by_number(self, order_number: str) -> OrderModel | None:
        return self.repo.get_order_by_number(order_number)

    def get_order_items(self, order_id: int) -> List[Dict[str, Any]]:
        return [
            {
                "id": item.id,
                "order_id": item.order_id,
                "product_id": item.product_id,
                "quantity": item.quantity,
                "price": item.price,
                "total": item.total,
                "product": ProductOut.model_validate(product) if product else None,
                "created_at": item.created_at,
            }
            for item, product in self.repo.get_order_items(order_id)
        ]

    def get_order_detail(self, order_id: int, user_id: str | None = None) -> Dict[str, Any] | None:
        order = self.get_order(order_id, user_id)
        if not order:
            return None

        detail = OrderOut.model_validate(order).model_dump()
        detail["items"] = self.get_order_items(order_id)
        return detail

    def update_status(self, order_id: int, status: str) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        try:
            while True:
                previous = order.status
                check_transition(previous, status)
                # stored status moved on since the read: re-check against it
                if self.repo.transition_status(order, previous, status):
                    break
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order.order_number} status {previous} -> {status}")
        return order

    def update_payment_status(self, order_id: int, payment_status: str) -> OrderModel:
        if payment_status not in PAYMENT_STATUSES:
            raise ValueError(f"Unknown payment status '{payment_status}'")

        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        self.repo.update_order(order, payment_status=payment_status)
        self.repo.commit()

        logger.info(f"Order {order.order_number} payment status -> {payment_status}")
        return order
