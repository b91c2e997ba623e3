# shopcenter/services/user_service.py
from sqlalchemy.orm import Session

from shopcenter.data.models.user import UserModel
from shopcenter.repos.user_repo import UserRepo
from shopcenter.domain.schemas import UserUpsert, UserRead
from shopcenter.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def upsert_user(self, payload: UserUpsert) -> UserRead:
        """Insert or refresh a user from identity-provider claims. Role is never touched."""
        existing = self.repo.get_user(payload.id)
        if existing:
            for key, value in payload.model_dump(exclude={"id"}).items():
                setattr(existing, key, value)
            user = self.repo.save(existing)
            return UserRead.model_validate(user)

        user = self.repo.create_user(UserModel(**payload.model_dump()))
        logger.info(f"Registered user {user.id}")
        return UserRead.model_validate(user)

    def get_user(self, user_id: str) -> UserModel | None:
        return self.repo.get_user(user_id)
