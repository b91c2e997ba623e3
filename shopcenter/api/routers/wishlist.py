# shopcenter/api/routers/wishlist.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shopcenter.api.deps import get_current_user
from shopcenter.data.database import get_db
from shopcenter.data.models.user import UserModel
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.schemas import WishlistIn, WishlistOut
from shopcenter.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


@router.get("/", response_model=List[WishlistOut])
def get_wishlist(user: UserModel = Depends(get_current_user), db: Session = Depends(get_db)):
    return WishlistService(db).get_wishlist(user.id)


@router.post("/", response_model=List[WishlistOut])
def add_to_wishlist(
    payload: WishlistIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = WishlistService(db)
    try:
        svc.add_to_wishlist(user.id, payload.product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return svc.get_wishlist(user.id)


@router.delete("/{product_id}", status_code=204)
def remove_from_wishlist(
    product_id: int,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not WishlistService(db).remove_from_wishlist(user.id, product_id):
        raise HTTPException(status_code=404, detail="Product is not on the wishlist")
