from sqlalchemy import Column, String, DateTime

from shopcenter.data.database import Base
from shopcenter.data.models._common import utcnow


class UserModel(Base):
    __tablename__ = "users"

    # issued by the identity provider
    id = Column(String, primary_key=True)
    email = Column(String, unique=True, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    profile_image_url = Column(String, nullable=True)
    role = Column(String(20), nullable=False, default="customer")  # customer, admin

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
