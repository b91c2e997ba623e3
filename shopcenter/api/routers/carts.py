# shopcenter/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shopcenter.api.deps import get_current_user, get_pricing
from shopcenter.data.database import get_db
from shopcenter.data.models.user import UserModel
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.pricing import PricingPolicy
from shopcenter.domain.schemas import CartItemIn, CartItemUpdate, CartOut
from shopcenter.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db), pricing: PricingPolicy = Depends(get_pricing)):
    return CartService(db, pricing=pricing)


@router.get("/", response_model=CartOut)
def get_cart(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    return svc.get_cart(user.id)


@router.post("/", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        svc.add_to_cart(user.id, payload.product_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return svc.get_cart(user.id)


@router.put("/{item_id}", response_model=CartOut)
def update_item(
    item_id: int,
    payload: CartItemUpdate,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        svc.update_quantity(user.id, item_id, payload.quantity)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return svc.get_cart(user.id)


@router.delete("/{item_id}", response_model=CartOut)
def remove_item(
    item_id: int,
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    try:
        removed = svc.remove_from_cart(user.id, item_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if not removed:
        raise HTTPException(status_code=404, detail="Cart item not found")
    return svc.get_cart(user.id)


@router.delete("/", response_model=CartOut)
def clear_cart(
    user: UserModel = Depends(get_current_user),
    svc: CartService = Depends(get_service),
):
    svc.clear_cart(user.id)
    return svc.get_cart(user.id)
