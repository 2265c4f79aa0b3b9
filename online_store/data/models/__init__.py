#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from online_store.data.models.user import UserModel
from online_store.data.models.product import ProductModel
from online_store.data.models.cart import CartModel
from online_store.data.models.cart_item import CartItemModel
from online_store.data.models.delivery import DeliveryModel
from online_store.data.models.payment import PaymentModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "DeliveryModel",
    "PaymentModel",
]
