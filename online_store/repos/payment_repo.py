# online_store/repos/payment_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from online_store.data.models.payment import PaymentModel


class PaymentRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_payment(self, payment_id: int) -> PaymentModel | None:
        return self.db.get(PaymentModel, payment_id)

    def get_payment_for_order(self, cart_id: int) -> PaymentModel | None:
        return self.db.execute(
            select(PaymentModel).where(PaymentModel.cart_id == cart_id)
        ).scalar_one_or_none()

    def list_payments(self) -> list[PaymentModel]:
        return list(
            self.db.execute(select(PaymentModel).order_by(PaymentModel.id)).scalars().all()
        )

    def create_payment(self, payment: PaymentModel) -> PaymentModel:
        self.db.add(payment)
        self.db.flush()
        return payment

    def delete_payment(self, payment: PaymentModel) -> None:
        self.db.delete(payment)
        self.db.flush()
