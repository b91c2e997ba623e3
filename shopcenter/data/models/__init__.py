# import all models so SQLAlchemy registers them in Base.metadata
from shopcenter.data.models.user import UserModel
from shopcenter.data.models.category import CategoryModel
from shopcenter.data.models.product import ProductModel
from shopcenter.data.models.cart_item import CartItemModel
from shopcenter.data.models.order import OrderModel
from shopcenter.data.models.order_item import OrderItemModel
from shopcenter.data.models.review import ReviewModel
from shopcenter.data.models.wishlist import WishlistModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
    "ReviewModel",
    "WishlistModel",
]
