# online_store/services/delivery_service.py
from sqlalchemy.orm import Session

from online_store.data.database import transaction
from online_store.data.models.delivery import DeliveryModel
from online_store.domain.errors import NotFoundError
from online_store.domain.schemas import DeliveryCreate, DeliveryUpdate
from online_store.repos.cart_repo import CartRepo
from online_store.repos.delivery_repo import DeliveryRepo
from online_store.utils.logging import get_logger

logger = get_logger(__name__)


class DeliveryService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = DeliveryRepo(db)
        self.carts = CartRepo(db)

    def list_deliveries(self) -> list[DeliveryModel]:
        return self.repo.list_deliveries()

    def get_delivery(self, delivery_id: int) -> DeliveryModel:
        delivery = self.repo.get_delivery(delivery_id)
        if not delivery:
            raise NotFoundError(f"Delivery {delivery_id} not found")
        return delivery

    def create_delivery(self, payload: DeliveryCreate) -> DeliveryModel:
        with transaction(self.db):
            cart = self.carts.get_cart(payload.order_id)
            if not cart or cart.status is None:
                raise NotFoundError(f"Order {payload.order_id} not found")

            delivery = self.repo.create_delivery(
                DeliveryModel(
                    cart_id=cart.id,
                    status=payload.status,
                    delivery_date=payload.delivery_date,
                )
            )

        logger.info(f"Utworzono dostawe {delivery.id} dla zamowienia {payload.order_id}")
        return delivery

    def update_delivery(self, delivery_id: int, payload: DeliveryUpdate) -> DeliveryModel:
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        with transaction(self.db):
            delivery = self.get_delivery(delivery_id)
            for field, value in changes.items():
                setattr(delivery, field, value)
            self.db.flush()
        return delivery

    def delete_delivery(self, delivery_id: int) -> bool:
        with transaction(self.db):
            delivery = self.repo.get_delivery(delivery_id)
            if not delivery:
                return False
            self.repo.delete_delivery(delivery)
        return True
