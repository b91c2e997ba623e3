# shopcenter/repos/review_repo.py
from decimal import Decimal
from typing import List, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from shopcenter.data.models.review import ReviewModel
from shopcenter.data.models.user import UserModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product_reviews(self, product_id: int) -> List[Tuple[ReviewModel, UserModel]]:
        rows = self.db.execute(
            select(ReviewModel, UserModel)
            .join(UserModel, ReviewModel.user_id == UserModel.id)
            .where(ReviewModel.product_id == product_id)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        ).all()
        return [(review, user) for review, user in rows]

    def create_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.flush()
        return review

    def rating_summary(self, product_id: int) -> Tuple[Decimal, int]:
        avg, count = self.db.execute(
            select(func.avg(ReviewModel.rating), func.count(ReviewModel.id))
            .where(ReviewModel.product_id == product_id)
        ).one()
        return Decimal(str(avg or 0)), count

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
