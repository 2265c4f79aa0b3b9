# online_store/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from online_store.data.database import transaction
from online_store.data.models.cart import CartModel
from online_store.data.models.cart_item import CartItemModel
from online_store.domain import order_status
from online_store.domain.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from online_store.repos.cart_repo import CartRepo
from online_store.repos.product_repo import ProductRepo
from online_store.repos.user_repo import UserRepo
from online_store.utils.logging import get_logger
from online_store.utils.retry import conflict_retry

logger = get_logger(__name__)

CENT = Decimal("0.01")


def item_to_dict(item: CartItemModel) -> Dict[str, Any]:
    product = item.product
    return {
        "id": item.id,
        "cart_id": item.cart_id,
        "product_id": item.product_id,
        "quantity": item.quantity,
        "product": {
            "id": product.id,
            "name": product.name,
            "price": product.price,
            "stock_quantity": product.stock_quantity,
        } if product else None,
    }


def cart_total(items: List[CartItemModel]) -> Decimal:
    #cena zawsze aktualna, liczona przy odczycie
    total = sum(
        (i.quantity * i.product.price for i in items if i.product is not None),
        Decimal("0.00"),
    )
    return Decimal(total).quantize(CENT)


def cart_to_dict(cart: CartModel) -> Dict[str, Any]:
    return {
        "id": cart.id,
        "user_id": cart.user_id,
        "status": cart.status,
        "items": [item_to_dict(i) for i in cart.items],
        "total_price": cart_total(cart.items),
    }


class CartService:
    """
    Koszyk uzytkownika.
    Koszyk ze statusem NULL mozna modyfikowac, po checkout jest juz zamowieniem.
    Stan magazynowy nie jest tu ruszany - rezerwacja dopiero przy checkout.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)
        self.users = UserRepo(db)

    # =====================================================
    # QUERY
    # =====================================================
    def get_cart(self, cart_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise NotFoundError(f"Cart {cart_id} not found")
        return cart_to_dict(cart)

    def list_carts(self) -> List[Dict[str, Any]]:
        return [cart_to_dict(c) for c in self.repo.list_carts()]

    def list_user_carts(self, user_id: int) -> List[Dict[str, Any]]:
        self._ensure_user(user_id)
        return [cart_to_dict(c) for c in self.repo.list_user_carts(user_id)]

    def get_item(self, item_id: int) -> Dict[str, Any]:
        item = self.repo.get_item(item_id)
        if not item:
            raise NotFoundError(f"Cart item {item_id} not found")
        return item_to_dict(item)

    def get_or_create_by_user(self, user_id: int) -> Dict[str, Any]:
        """
        Odczyt ktory tworzy: wolajacy zawsze dostaje biezacy koszyk.
        Biezacy = najnowszy koszyk usera bez statusu.
        """
        self._ensure_user(user_id)

        existing = self.repo.get_current_cart_by_user(user_id)
        if existing:
            return cart_to_dict(existing)

        with transaction(self.db):
            created = self.repo.create_cart(CartModel(user_id=user_id, status=None, version=1))

        logger.info(f"Utworzono nowy koszyk {created.id} dla uzytkownika {user_id}")
        return cart_to_dict(created)

    # =====================================================
    # COMMANDS
    # =====================================================
    def create_cart(self, user_id: int) -> Dict[str, Any]:
        self._ensure_user(user_id)

        with transaction(self.db):
            created = self.repo.create_cart(CartModel(user_id=user_id, status=None, version=1))

        logger.info(f"Utworzono nowy koszyk {created.id} dla uzytkownika {user_id}")
        return cart_to_dict(created)

    @conflict_retry()
    def add_item(self, cart_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationFailedError(
                "Quantity must be greater than 0", {"quantity": "must be greater than 0"}
            )

        try:
            with transaction(self.db):
                cart = self._get_open_cart(cart_id)

                if not self.products.get_product(product_id):
                    raise NotFoundError(f"Product {product_id} not found")

                # ten sam produkt = ta sama pozycja, zwiekszamy ilosc
                existing_item = self.repo.get_cart_item(cart_id, product_id)
                if existing_item:
                    logger.info(
                        f"Produkt {product_id} juz jest w koszyku {cart_id}, zwiekszam ilosc "
                        f"z {existing_item.quantity} do {existing_item.quantity + quantity}"
                    )
                    existing_item.quantity += quantity
                    item = existing_item
                else:
                    item = self.repo.add_cart_item(
                        CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity)
                    )

                self._bump_version(cart)
                item_id = item.id
        except IntegrityError as e:
            # rownolegle dodanie tego samego produktu (u_cart_product)
            raise ConflictError(f"Cart {cart_id} was modified concurrently") from e

        return self.get_item(item_id)

    @conflict_retry()
    def remove_item(self, item_id: int) -> bool:
        with transaction(self.db):
            item = self.repo.get_item(item_id)
            if not item:
                return False

            cart = self._get_open_cart(item.cart_id)
            self.repo.delete_cart_item(item)
            self._bump_version(cart)

        logger.info(f"Usunieto pozycje {item_id} z koszyka {cart.id}")
        return True

    @conflict_retry()
    def update_item_quantity(self, item_id: int, quantity: int) -> Dict[str, Any]:
        if quantity <= 0:
            raise ValidationFailedError(
                "Quantity must be greater than 0", {"quantity": "must be greater than 0"}
            )

        with transaction(self.db):
            item = self.repo.get_item(item_id)
            if not item:
                raise NotFoundError(f"Cart item {item_id} not found")

            cart = self._get_open_cart(item.cart_id)
            item.quantity = quantity
            self._bump_version(cart)
            cart_id = cart.id

        return self.get_cart(cart_id)

    @conflict_retry()
    def clear(self, user_id: int) -> bool:
        with transaction(self.db):
            cart = self.repo.get_current_cart_by_user(user_id)
            if not cart:
                return False

            removed = self.repo.delete_cart_items(cart.id)
            if removed == 0:
                return False
            self._bump_version(cart)

        logger.info(f"Wyczyszczono koszyk {cart.id} uzytkownika {user_id} ({removed} pozycji)")
        return True

    def delete_cart(self, cart_id: int) -> bool:
        with transaction(self.db):
            cart = self.repo.get_cart(cart_id)
            if not cart:
                return False
            # Pending trzyma zarezerwowany towar, usuniecie by go zgubilo
            if cart.status == order_status.PENDING:
                raise InvalidStateError(
                    f"Cart {cart_id} is a pending order; approve or reject it first"
                )
            self.repo.delete_cart(cart)

        logger.info(f"Usunieto koszyk {cart_id}")
        return True

    # =====================================================
    # HELPERS
    # =====================================================
    def _ensure_user(self, user_id: int) -> None:
        if not self.users.get_user(user_id):
            raise NotFoundError(f"User {user_id} not found")

    def _get_open_cart(self, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise NotFoundError(f"Cart {cart_id} not found")
        if cart.status is not None:
            raise InvalidStateError(
                f"Cart {cart_id} is already an order ({cart.status}) and cannot be modified"
            )
        return cart

    def _bump_version(self, cart: CartModel) -> None:
        # Optimistic locking warunek na wersje
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={},
        )
        if rowcount == 0:
            logger.warning(f"Konflikt wspolbieznosci na koszyku {cart.id}")
            raise ConflictError(f"Cart {cart.id} was modified by another operation")
