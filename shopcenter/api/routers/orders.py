# shopcenter/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from shopcenter.api.deps import get_current_user, get_pricing, require_admin
from shopcenter.data.database import get_db
from shopcenter.data.models.user import UserModel
from shopcenter.domain.errors import InvalidStatusTransition, NotFoundError
from shopcenter.domain.filters import OrderFilter
from shopcenter.domain.pricing import PricingPolicy
from shopcenter.domain.schemas import (
    CheckoutIn,
    OrderDetailOut,
    OrderListOut,
    OrderOut,
    OrderStatusUpdate,
    PaymentStatusUpdate,
)
from shopcenter.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session = Depends(get_db), pricing: PricingPolicy = Depends(get_pricing)):
    return OrderService(db, pricing=pricing)


@router.post("/", response_model=OrderDetailOut, status_code=201)
def place_order(
    payload: CheckoutIn,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """
    Places an order from the current cart.
    Totals are computed server side, the cart is emptied.
    """
    try:
        return svc.place_order(user.id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/", response_model=OrderListOut)
def list_orders(
    status: str | None = Query(None),
    limit: int | None = Query(None, ge=1, le=100),
    offset: int | None = Query(None, ge=0),
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    """Customers see their own orders, admins see everything."""
    user_id = None if user.role == "admin" else user.id
    return svc.list_orders(OrderFilter(user_id=user_id, status=status, limit=limit, offset=offset))


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(
    order_id: int,
    user: UserModel = Depends(get_current_user),
    svc: OrderService = Depends(get_service),
):
    owner = None if user.role == "admin" else user.id
    try:
        order = svc.get_order_detail(order_id, owner)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.put("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_status(
    order_id: int,
    payload: OrderStatusUpdate,
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.update_status(order_id, payload.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{order_id}/payment", response_model=OrderOut, dependencies=[Depends(require_admin)])
def update_payment_status(
    order_id: int,
    payload: PaymentStatusUpdate,
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.update_payment_status(order_id, payload.payment_status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
