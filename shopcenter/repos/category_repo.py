# shopcenter/repos/category_repo.py
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from shopcenter.data.models.category import CategoryModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> List[CategoryModel]:
        return list(
            self.db.execute(
                select(CategoryModel).order_by(CategoryModel.name.asc())
            ).scalars().all()
        )

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        ).scalar_one_or_none()

    def add_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.flush()
        return category

    def delete_category(self, category_id: int) -> bool:
        result = self.db.execute(delete(CategoryModel).where(CategoryModel.id == category_id))
        return result.rowcount > 0

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
