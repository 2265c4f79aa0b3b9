# online_store/services/admin_order_service.py
from decimal import Decimal
from typing import Any, Dict

from online_store.data.database import transaction
from online_store.data.models.cart import CartModel
from online_store.domain import order_status
from online_store.domain.errors import InvalidStateError
from online_store.services.cart_service import CENT
from online_store.services.order_service import OrderService
from online_store.utils.logging import get_logger
from online_store.utils.retry import conflict_retry

logger = get_logger(__name__)


class AdminOrderService(OrderService):
    """
    Decyzje administratora (approve / reject), statystyki i komentarze.
    Komentarz trafia do CommentStore dopiero po commicie - nie jest czescia transakcji.
    """

    @conflict_retry()
    def approve(self, cart_id: int, comment: str | None = None) -> Dict[str, Any]:
        # towar zostal juz zdjety przy checkout
        with self.lock_service.cart_lock(cart_id):
            with transaction(self.db):
                cart = self._get_pending_cart(cart_id)
                self._claim_transition(cart, order_status.APPROVED)
                user_id = cart.user_id

        self._after_decision(user_id, cart_id, order_status.APPROVED, comment)
        return self.get_order(cart_id)

    @conflict_retry()
    def reject(self, cart_id: int, comment: str | None = None) -> Dict[str, Any]:
        with self.lock_service.cart_lock(cart_id):
            with transaction(self.db):
                cart = self._get_pending_cart(cart_id)
                items = self.repo.get_cart_items(cart_id)

                self._claim_transition(cart, order_status.REJECTED)

                #zwrot dokladnie tego co zarezerwowal checkout
                for item in sorted(items, key=lambda i: i.product_id):
                    self.products.restock(item.product_id, item.quantity)

                user_id = cart.user_id

        self._after_decision(user_id, cart_id, order_status.REJECTED, comment)
        return self.get_order(cart_id)

    def stats(self) -> Dict[str, Any]:
        # przychod z AKTUALNYCH cen, bez snapshotu z chwili zamowienia
        revenue = sum(
            (quantity * price for quantity, price in self.repo.get_priced_lines(order_status.APPROVED)),
            Decimal("0.00"),
        )
        return {
            "total_orders": self.repo.count_orders(),
            "pending_orders": self.repo.count_orders(order_status.PENDING),
            "total_revenue": Decimal(revenue).quantize(CENT),
        }

    def get_order_with_comment(self, cart_id: int) -> Dict[str, Any]:
        return self.get_order(cart_id)

    def get_comment(self, cart_id: int) -> str | None:
        return self.comments.get_comment(cart_id)

    # ---------- helpers ----------
    def _get_pending_cart(self, cart_id: int) -> CartModel:
        cart = self._get_cart(cart_id)
        if cart.status in order_status.TERMINAL:
            raise InvalidStateError(f"Order {cart_id} was already {cart.status.lower()}")
        if cart.status != order_status.PENDING:
            raise InvalidStateError(
                f"Order {cart_id} is not pending (current status: {cart.status})"
            )
        return cart

    def _after_decision(self, user_id: int, cart_id: int, status: str, comment: str | None) -> None:
        if comment is not None:
            self.comments.set_comment(cart_id, comment)

        logger.info(f"Zamowienie {cart_id} -> {status}")
        self.notification_service.send_order_status_notification(user_id, cart_id, status)
