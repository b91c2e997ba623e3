# shopcenter/services/review_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from shopcenter.data.models.review import ReviewModel
from shopcenter.domain.errors import NotFoundError
from shopcenter.domain.pricing import to_money
from shopcenter.domain.schemas import ReviewIn, UserRead
from shopcenter.repos.product_repo import ProductRepo
from shopcenter.repos.review_repo import ReviewRepo
from shopcenter.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.products = ProductRepo(db)

    def get_product_reviews(self, product_id: int) -> List[Dict[str, Any]]:
        return [
            {
                "id": review.id,
                "product_id": review.product_id,
                "user_id": review.user_id,
                "rating": review.rating,
                "title": review.title,
                "comment": review.comment,
                "is_verified": review.is_verified,
                "created_at": review.created_at,
                "user": UserRead.model_validate(user),
            }
            for review, user in self.repo.get_product_reviews(product_id)
        ]

    def create_review(self, user_id: str, product_id: int, payload: ReviewIn) -> ReviewModel:
        """Stores the review and refreshes the product's rating and review count."""
        product = self.products.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        try:
            review = self.repo.create_review(
                ReviewModel(
                    product_id=product_id,
                    user_id=user_id,
                    rating=payload.rating,
                    title=payload.title,
                    comment=payload.comment,
                )
            )
            average, count = self.repo.rating_summary(product_id)
            product.rating = to_money(average)
            product.review_count = count
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Review {review.id} on product {product_id}, rating now {product.rating}")
        return review
