# online_store/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from online_store.data.database import transaction
from online_store.data.models.cart import CartModel
from online_store.domain import order_status
from online_store.domain.errors import ConflictError, InvalidStateError, NotFoundError
from online_store.repos.cart_repo import CartRepo
from online_store.services.cart_service import CENT
from online_store.services.comment_store import CommentStore
from online_store.services.lock_service import LockService
from online_store.services.notification_service import NotificationService
from online_store.services.product_service import ProductService
from online_store.utils.logging import get_logger
from online_store.utils.retry import conflict_retry

logger = get_logger(__name__)


class OrderService:
    """
    Cykl zycia zamowienia. Zamowienie to koszyk z niepustym statusem.

    NULL --checkout--> Pending --approve--> Approved
                               --reject---> Rejected (towar wraca na magazyn)

    Towar jest zdejmowany przy checkout i oddawany przy reject.
    Kazde przejscie: lock koszyka w Redis + optimistic locking na wersji,
    wszystko w jednej transakcji.
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        comment_store: CommentStore | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.repo = CartRepo(db)
        self.products = ProductService(db)
        self.lock_service = lock_service
        self.comments = comment_store if comment_store is not None else CommentStore()
        self.notification_service = notification_service or NotificationService()

    # =====================================================
    # QUERY
    # =====================================================
    def get_order(self, cart_id: int) -> Dict[str, Any]:
        cart = self.repo.get_cart(cart_id)
        if not cart or cart.status is None:
            raise NotFoundError(f"Order {cart_id} not found")
        return self._with_comment(self._to_order_dict(cart))

    def list_orders(self) -> List[Dict[str, Any]]:
        return [self._with_comment(self._to_order_dict(c)) for c in self.repo.list_orders()]

    # =====================================================
    # COMMANDS
    # =====================================================
    @conflict_retry()
    def checkout(self, cart_id: int) -> Dict[str, Any]:
        """
        Koszyk -> zamowienie Pending.
        Brak towaru dla ktorejkolwiek pozycji = rollback calosci, status zostaje NULL.
        """
        with self.lock_service.cart_lock(cart_id):
            with transaction(self.db):
                cart = self._get_cart(cart_id)

                if cart.status is not None:
                    raise InvalidStateError(
                        f"Cart {cart_id} is already an order ({cart.status})"
                    )

                items = self.repo.get_cart_items(cart_id)
                if not items:
                    raise InvalidStateError(f"Cannot checkout empty cart {cart_id}")

                self._claim_transition(cart, order_status.PENDING)

                # staly porzadek produktow, zeby dwa checkouty nie zakleszczyly sie na wierszach
                for item in sorted(items, key=lambda i: i.product_id):
                    if not self.products.reserve(item.product_id, item.quantity):
                        raise InvalidStateError(
                            f"Insufficient stock for product {item.product_id} "
                            f"(requested {item.quantity})"
                        )

                user_id = cart.user_id

        logger.info(f"Koszyk {cart_id} -> {order_status.PENDING}, towar zarezerwowany")
        self.notification_service.send_order_status_notification(
            user_id, cart_id, order_status.PENDING
        )
        return self.get_order(cart_id)

    @conflict_retry()
    def update_status(self, cart_id: int, new_status: str) -> Dict[str, Any]:
        """
        Bezposrednie ustawienie statusu, BEZ zwrotu towaru na magazyn.
        Omija niezmiennik reject -> restock; zostawione swiadomie.
        NULL -> Pending tutaj nie rezerwuje towaru, wiec pozniejszy reject
        oddaje towar, ktorego nigdy nie zdjeto (stan magazynowy rosnie).
        """
        with self.lock_service.cart_lock(cart_id):
            with transaction(self.db):
                cart = self._get_cart(cart_id)
                previous = cart.status
                self._claim_transition(cart, new_status)
                user_id = cart.user_id

        logger.warning(
            f"Status koszyka {cart_id} zmieniony bezposrednio: {previous} -> {new_status} "
            f"(bez korekty stanu magazynowego)"
        )
        if previous is None and new_status == order_status.PENDING:
            # Pending bez checkout: nic nie zarezerwowano, a reject i tak odda towar
            logger.warning(
                f"Koszyk {cart_id} jest Pending bez rezerwacji towaru, "
                f"pozniejszy reject zawyzy stan magazynowy"
            )
        self.notification_service.send_order_status_notification(user_id, cart_id, new_status)
        return self.get_order(cart_id)

    # =====================================================
    # HELPERS
    # =====================================================
    def _get_cart(self, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise NotFoundError(f"Order {cart_id} not found")
        return cart

    def _claim_transition(self, cart: CartModel, new_status: str) -> None:
        # UPDATE ... WHERE version = :seen, 0 wierszy = ktos zmienil koszyk w miedzyczasie
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"status": new_status},
        )
        if rowcount == 0:
            logger.warning(f"Konflikt wspolbieznosci na koszyku {cart.id}")
            raise ConflictError(f"Order {cart.id} was modified by another operation")

    def _with_comment(self, order: Dict[str, Any]) -> Dict[str, Any]:
        order["admin_comment"] = self.comments.get_comment(order["cart_id"])
        return order

    @staticmethod
    def _to_order_dict(cart: CartModel) -> Dict[str, Any]:
        items = []
        total = Decimal("0.00")
        for item in cart.items:
            product = item.product
            line_total = (item.quantity * product.price).quantize(CENT)
            total += line_total
            items.append(
                {
                    "product_id": item.product_id,
                    "product_name": product.name,
                    "quantity": item.quantity,
                    "unit_price": product.price,
                    "line_total": line_total,
                }
            )

        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "status": cart.status,
            "items": items,
            "total_amount": total.quantize(CENT),
        }
