# shopcenter/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Literal
from decimal import Decimal
from datetime import datetime

from shopcenter.domain.order_status import ORDER_STATUSES, PAYMENT_STATUSES

OrderStatus = Literal[ORDER_STATUSES]
PaymentStatus = Literal[PAYMENT_STATUSES]


# ---------------------------------------------------------------- users
class UserUpsert(BaseModel):
    """Schema for claims forwarded by the identity provider."""

    id: str = Field(..., min_length=1, description="Identity-provider user id")
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None


class UserRead(BaseModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: str

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------- catalog
class CategoryIn(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    image_url: str | None = None
    parent_id: int | None = Field(None, gt=0)


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    slug: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    image_url: str | None = None
    parent_id: int | None = Field(None, gt=0)


class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    parent_id: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Dimensions(BaseModel):
    length: float
    width: float
    height: float


class ProductIn(BaseModel):
    """Schema for creating a product."""

    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    short_description: str | None = Field(None, max_length=500)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    sale_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    sku: str | None = Field(None, max_length=100)
    stock: int = Field(0, ge=0)
    images: List[str] = Field(default_factory=list)
    category_id: int | None = Field(None, gt=0)
    brand: str | None = Field(None, max_length=100)
    is_active: bool = True
    is_featured: bool = False
    weight: Decimal | None = Field(None, ge=0)
    dimensions: Dimensions | None = None
    tags: List[str] | None = None


class ProductUpdate(BaseModel):
    """Schema for a partial product update, only sent fields are written."""

    name: str | None = Field(None, min_length=1, max_length=200)
    slug: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    short_description: str | None = Field(None, max_length=500)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    sale_price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    sku: str | None = None
    stock: int | None = Field(None, ge=0)
    images: List[str] | None = None
    category_id: int | None = Field(None, gt=0)
    brand: str | None = None
    is_active: bool | None = None
    is_featured: bool | None = None
    weight: Decimal | None = Field(None, ge=0)
    dimensions: Dimensions | None = None
    tags: List[str] | None = None


class ProductOut(BaseModel):
    id: int
    name: str
    slug: str
    description: str | None = None
    short_description: str | None = None
    price: Decimal
    sale_price: Decimal | None = None
    sku: str | None = None
    stock: int
    images: List[str] = Field(default_factory=list)
    category_id: int | None = None
    brand: str | None = None
    rating: Decimal
    review_count: int
    is_active: bool
    is_featured: bool
    weight: Decimal | None = None
    dimensions: Dimensions | None = None
    tags: List[str] | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListOut(BaseModel):
    products: List[ProductOut]
    total: int


# ---------------------------------------------------------------- cart
class CartItemIn(BaseModel):
    """Schema for adding a product to the cart."""

    product_id: int = Field(..., gt=0, description="Product id (must be > 0)")
    quantity: int = Field(1, gt=0, description="Quantity (must be > 0)")


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., gt=0, description="New absolute quantity")


class CartItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    product: ProductOut
    created_at: datetime
    updated_at: datetime


class CartOut(BaseModel):
    """Schema for the cart (response)."""

    items: List[CartItemOut]
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


# ---------------------------------------------------------------- orders
class Address(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


class CheckoutIn(BaseModel):
    """Schema for placing an order from the current cart."""

    shipping_address: Address
    billing_address: Address | None = Field(None, description="Defaults to the shipping address")
    payment_method: str = Field(..., min_length=1, max_length=50)
    notes: str | None = None


class OrderItemOut(BaseModel):
    id: int
    order_id: int
    product_id: int | None = None
    quantity: int
    price: Decimal
    total: Decimal
    product: ProductOut | None = None
    created_at: datetime


class OrderOut(BaseModel):
    """Schema for an order header (response)."""

    id: int
    user_id: str
    order_number: str
    status: str
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    shipping_address: Address | None = None
    billing_address: Address | None = None
    payment_method: str | None = None
    payment_status: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderDetailOut(OrderOut):
    items: List[OrderItemOut]


class OrderListOut(BaseModel):
    orders: List[OrderOut]
    total: int


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus


# ---------------------------------------------------------------- reviews / wishlist
class ReviewIn(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    title: str | None = Field(None, max_length=200)
    comment: str | None = None


class ReviewOut(BaseModel):
    id: int
    product_id: int
    user_id: str
    rating: int
    title: str | None = None
    comment: str | None = None
    is_verified: bool
    created_at: datetime
    user: UserRead

    model_config = ConfigDict(from_attributes=True)


class WishlistIn(BaseModel):
    product_id: int = Field(..., gt=0)


class WishlistOut(BaseModel):
    id: int
    product_id: int
    created_at: datetime
    product: ProductOut


# ---------------------------------------------------------------- analytics
class TopProductOut(ProductOut):
    sold_count: int
    revenue: Decimal


class DashboardStatsOut(BaseModel):
    total_sales: Decimal
    total_orders: int
    total_products: int
    total_customers: int
    recent_orders: List[OrderOut]
    top_products: List[TopProductOut]


# ---------------------------------------------------------------- assistant
class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime | None = None


class ChatIn(BaseModel):
    message: str = Field(..., min_length=1, max_length=2000)
    history: List[ChatMessage] = Field(default_factory=list)


class ChatOut(BaseModel):
    response: str


class RecommendationIn(BaseModel):
    query: str = Field(..., max_length=500)
