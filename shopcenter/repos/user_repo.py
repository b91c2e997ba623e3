# shopcenter/repos/user_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from shopcenter.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.commit()
        self.db.refresh(user)
        return user

    def count_by_role(self, role: str) -> int:
        return self.db.execute(
            select(func.count()).select_from(UserModel).where(UserModel.role == role)
        ).scalar_one()
