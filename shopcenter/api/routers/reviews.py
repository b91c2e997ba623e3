# shopcenter/api/routers/reviews.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from shopcenter.api.deps import get_current_user
from shopcenter.data.database import get_db
from shopcenter.data.models.user import UserModel
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.schemas import ReviewIn, ReviewOut
from shopcenter.services.review_service import ReviewService

router = APIRouter(prefix="/products/{product_id}/reviews", tags=["reviews"])


@router.get("/", response_model=List[ReviewOut])
def list_reviews(product_id: int, db: Session = Depends(get_db)):
    return ReviewService(db).get_product_reviews(product_id)


@router.post("/", response_model=ReviewOut, status_code=201)
def create_review(
    product_id: int,
    payload: ReviewIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = ReviewService(db)
    try:
        review = svc.create_review(user.id, product_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return review
