# online_store/repos/user_repo.py
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from online_store.data.models.cart import CartModel
from online_store.data.models.delivery import DeliveryModel
from online_store.data.models.payment import PaymentModel
from online_store.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        ).scalar_one_or_none()

    def list_users(self) -> list[UserModel]:
        return list(self.db.execute(select(UserModel).order_by(UserModel.id)).scalars().all())

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def delete_user(self, user: UserModel) -> None:
        cart_ids = select(CartModel.id).where(CartModel.user_id == user.id)

        # brak back-pointerow, wiec zaleznosci usuwamy jawnie
        self.db.execute(delete(DeliveryModel).where(DeliveryModel.cart_id.in_(cart_ids)))
        self.db.execute(delete(PaymentModel).where(PaymentModel.cart_id.in_(cart_ids)))
        for cart in self.db.execute(
            select(CartModel).where(CartModel.user_id == user.id)
        ).scalars().all():
            self.db.delete(cart)

        self.db.delete(user)
        self.db.flush()
