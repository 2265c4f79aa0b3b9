# online_store/domain/schemas.py
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, EmailStr
from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime


# =====================================================
# PRODUCTS
# =====================================================
class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=3, max_length=100, description="Nazwa produktu")
    description: Optional[str] = Field(None, max_length=500)
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2, description="Cena (musi być > 0)")
    stock_quantity: int = Field(0, ge=0, description="Stan magazynowy (>= 0)")


class ProductUpdate(BaseModel):
    """Schema dla częściowej aktualizacji produktu - nadpisywane są tylko podane pola."""

    name: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(None, ge=0)


class ProductQuery(BaseModel):
    """Filtry i sortowanie listy produktów."""

    search_term: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    in_stock: Optional[bool] = None
    sort_by: Optional[str] = None
    sort_descending: bool = False


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


class ProductBrief(BaseModel):
    id: int
    name: str
    price: Decimal
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CARTS
# =====================================================
class CreateCartIn(BaseModel):
    """Schema dla tworzenia koszyka."""

    user_id: int = Field(..., gt=0, description="ID użytkownika (musi być > 0)")


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    cart_id: int = Field(..., gt=0, description="ID koszyka (musi być > 0)")
    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(..., gt=0, description="Ilość produktu (musi być > 0)")


class ItemUpdateIn(BaseModel):
    """Schema dla zmiany ilości pozycji koszyka."""

    id: int = Field(..., gt=0, description="ID pozycji koszyka")
    quantity: int = Field(..., gt=0, description="Nowa ilość (musi być > 0)")


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: int
    cart_id: int
    product_id: int
    quantity: int
    product: Optional[ProductBrief] = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    """Schema dla koszyka (response). Total liczony z aktualnych cen."""

    id: int
    user_id: int
    status: Optional[str] = None
    items: List[CartItemOut]
    total_price: Decimal


# =====================================================
# ORDERS
# =====================================================
class OrderItemOut(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class OrderOut(BaseModel):
    """Zamówienie = koszyk z niepustym statusem."""

    cart_id: int
    user_id: int
    status: str
    items: List[OrderItemOut]
    total_amount: Decimal
    # komentarz admina, jesli jest
    admin_comment: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)


class AdminDecisionIn(BaseModel):
    comment: Optional[str] = Field(None, max_length=1000)


class OrderStatsOut(BaseModel):
    total_orders: int
    pending_orders: int
    total_revenue: Decimal


# =====================================================
# USERS
# =====================================================
class UserCreate(BaseModel):
    """Schema dla rejestracji użytkownika."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=200)


class UserUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=200)


class UserRead(BaseModel):
    """Schema dla użytkownika (response). Hash hasła nigdy nie wychodzi na zewnątrz."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Principal(BaseModel):
    """Tożsamość wywołującego przekazana przez zewnętrzny gateway."""

    email: Optional[str] = None
    role: Literal["guest", "user", "admin"] = "user"


# =====================================================
# DELIVERIES / PAYMENTS
# =====================================================
class DeliveryCreate(BaseModel):
    order_id: int = Field(..., gt=0, description="ID zamówienia (koszyka)")
    status: str = Field(..., min_length=1, max_length=50)
    delivery_date: datetime


class DeliveryUpdate(BaseModel):
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    delivery_date: Optional[datetime] = None


class DeliveryOut(BaseModel):
    id: int
    order_id: int = Field(validation_alias=AliasChoices("cart_id", "order_id"))
    status: str
    delivery_date: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentCreate(BaseModel):
    order_id: int = Field(..., gt=0, description="ID zamówienia (koszyka)")
    status: str = Field(..., min_length=1, max_length=50)
    amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)


class PaymentUpdate(BaseModel):
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    amount: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)


class PaymentOut(BaseModel):
    id: int
    order_id: int = Field(validation_alias=AliasChoices("cart_id", "order_id"))
    status: str
    amount: Decimal
    payment_date: datetime

    model_config = ConfigDict(from_attributes=True)
