# online_store/services/payment_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from online_store.data.database import transaction
from online_store.data.models.payment import PaymentModel
from online_store.domain.errors import ConflictError, NotFoundError
from online_store.domain.schemas import PaymentCreate, PaymentUpdate
from online_store.repos.cart_repo import CartRepo
from online_store.repos.payment_repo import PaymentRepo
from online_store.utils.logging import get_logger

logger = get_logger(__name__)


class PaymentService:
    """Platnosci - maksymalnie jedna na zamowienie."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentRepo(db)
        self.carts = CartRepo(db)

    def list_payments(self) -> list[PaymentModel]:
        return self.repo.list_payments()

    def get_payment(self, payment_id: int) -> PaymentModel:
        payment = self.repo.get_payment(payment_id)
        if not payment:
            raise NotFoundError(f"Payment {payment_id} not found")
        return payment

    def create_payment(self, payload: PaymentCreate) -> PaymentModel:
        try:
            with transaction(self.db):
                cart = self.carts.get_cart(payload.order_id)
                if not cart or cart.status is None:
                    raise NotFoundError(f"Order {payload.order_id} not found")

                if self.repo.get_payment_for_order(cart.id):
                    raise ConflictError(f"Payment for order {cart.id} already exists")

                payment = self.repo.create_payment(
                    PaymentModel(
                        cart_id=cart.id,
                        status=payload.status,
                        amount=payload.amount,
                    )
                )
        except IntegrityError as e:
            # rownolegla platnosc dla tego samego zamowienia (unique cart_id)
            raise ConflictError(f"Payment for order {payload.order_id} already exists") from e

        logger.info(f"Utworzono platnosc {payment.id} dla zamowienia {payload.order_id}")
        return payment

    def update_payment(self, payment_id: int, payload: PaymentUpdate) -> PaymentModel:
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        with transaction(self.db):
            payment = self.get_payment(payment_id)
            for field, value in changes.items():
                setattr(payment, field, value)
            self.db.flush()
        return payment

    def delete_payment(self, payment_id: int) -> bool:
        with transaction(self.db):
            payment = self.repo.get_payment(payment_id)
            if not payment:
                return False
            self.repo.delete_payment(payment)
        return True
