# shopcenter/api/deps.py
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from shopcenter.data.database import get_db
from shopcenter.data.models.user import UserModel
from shopcenter.domain.pricing import PricingPolicy
from shopcenter.repos.user_repo import UserRepo


def get_pricing(request: Request) -> PricingPolicy:
    return PricingPolicy.from_settings(request.app.state.settings)


def get_current_user(
    x_user_id: str | None = Header(None),
    db: Session = Depends(get_db),
) -> UserModel:
    # identity is established upstream, the provider forwards the user id
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = UserRepo(db).get_user(x_user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
