# shopcenter/domain/filters.py
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


class ProductFilter(BaseModel):
    """Recognized product listing options, all optional and conjunctive."""

    category_id: int | None = None
    search: str | None = None
    sort_by: str | None = None
    sort_order: Literal["asc", "desc"] = "asc"
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)
    brand: str | None = None
    featured: bool = False
    limit: int | None = Field(None, ge=1)
    offset: int | None = Field(None, ge=0)


class OrderFilter(BaseModel):
    user_id: str | None = None
    status: str | None = None
    limit: int | None = Field(None, ge=1)
    offset: int | None = Field(None, ge=0)
