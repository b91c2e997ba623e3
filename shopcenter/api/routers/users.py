# shopcenter/api/routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shopcenter.api.deps import get_current_user
from shopcenter.data.database import get_db
from shopcenter.data.models.user import UserModel
from shopcenter.domain.schemas import UserUpsert, UserRead
from shopcenter.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead)
def upsert_user(payload: UserUpsert, db: Session = Depends(get_db)):
    """Called by the identity provider callback after sign-in."""
    return UserService(db).upsert_user(payload)


@router.get("/me", response_model=UserRead)
def get_me(user: UserModel = Depends(get_current_user)):
    return user
