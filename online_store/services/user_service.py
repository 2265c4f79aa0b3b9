# online_store/services/user_service.py
from sqlalchemy.orm import Session

from online_store.data.database import transaction
from online_store.data.models.cart import CartModel
from online_store.data.models.user import UserModel
from online_store.domain import order_status
from online_store.domain.errors import ConflictError, NotFoundError
from online_store.domain.schemas import UserCreate, UserRead, UserUpdate
from online_store.repos.cart_repo import CartRepo
from online_store.repos.user_repo import UserRepo
from online_store.services.product_service import ProductService
from online_store.utils import passwords
from online_store.utils.logging import get_logger
from online_store.utils.retry import conflict_retry
from online_store.utils.settings import ADMIN_EMAILS

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)
        self.carts = CartRepo(db)
        self.products = ProductService(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        """Rejestracja + pusty koszyk, w jednej transakcji."""
        with transaction(self.db):
            self._ensure_email_free(payload.email)

            user = self.repo.create_user(
                UserModel(
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    email=payload.email,
                    password_hash=passwords.hash_password(payload.password),
                    phone=payload.phone,
                    address=payload.address,
                )
            )
            self.carts.create_cart(CartModel(user_id=user.id, status=None, version=1))

        logger.info(f"Utworzono uzytkownika {user.id}")
        return UserRead.model_validate(user)

    def get_user(self, user_id: int) -> UserRead:
        return UserRead.model_validate(self._get(user_id))

    def get_user_by_email(self, email: str) -> UserRead:
        user = self.repo.get_user_by_email(email)
        if not user:
            raise NotFoundError(f"User with email {email} not found")
        return UserRead.model_validate(user)

    def list_users(self) -> list[UserRead]:
        return [UserRead.model_validate(u) for u in self.repo.list_users()]

    def update_user(self, user_id: int, payload: UserUpdate) -> UserRead:
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        with transaction(self.db):
            user = self._get(user_id)

            new_email = changes.get("email")
            if new_email and new_email.lower() != user.email.lower():
                self._ensure_email_free(new_email)

            password = changes.pop("password", None)
            if password:
                user.password_hash = passwords.hash_password(password)

            for field, value in changes.items():
                setattr(user, field, value)
            self.db.flush()

        logger.info(f"Zaktualizowano uzytkownika {user_id}: {sorted(changes)}")
        return UserRead.model_validate(user)

    @conflict_retry()
    def delete_user(self, user_id: int) -> bool:
        with transaction(self.db):
            user = self.repo.get_user(user_id)
            if not user:
                return False
            self._release_pending_orders(user_id)
            self.repo.delete_user(user)

        logger.info(f"Usunieto uzytkownika {user_id} razem z koszykami")
        return True

    def verify_credentials(self, email: str, password: str) -> bool:
        # dla zewnetrznego dostawcy tozsamosci, sami nie wydajemy tokenow
        user = self.repo.get_user_by_email(email)
        return bool(user) and passwords.verify_password(password, user.password_hash)

    @staticmethod
    def is_admin(email: str) -> bool:
        return email.strip().lower() in ADMIN_EMAILS

    # ---------- helpers ----------
    def _get(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def _release_pending_orders(self, user_id: int) -> None:
        # towar zarezerwowany przy checkout wraca na magazyn razem z usunieciem koszyka
        for cart in self.carts.list_user_carts(user_id):
            if cart.status != order_status.PENDING:
                continue

            # ten sam warunek na wersje co reject, wiec towar nie wroci dwa razy
            rowcount = self.carts.update_cart_version(
                cart_id=cart.id,
                old_version=cart.version,
                new_data={"status": order_status.REJECTED},
            )
            if rowcount == 0:
                raise ConflictError(f"Order {cart.id} was modified by another operation")

            for item in sorted(self.carts.get_cart_items(cart.id), key=lambda i: i.product_id):
                self.products.restock(item.product_id, item.quantity)
            logger.info(f"Zwrocono towar z zamowienia {cart.id} usuwanego uzytkownika {user_id}")

    def _ensure_email_free(self, email: str) -> None:
        if self.repo.get_user_by_email(email):
            raise ConflictError(f"User with email {email} already exists")
