# online_store/repos/delivery_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from online_store.data.models.delivery import DeliveryModel


class DeliveryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_delivery(self, delivery_id: int) -> DeliveryModel | None:
        return self.db.get(DeliveryModel, delivery_id)

    def list_deliveries(self) -> list[DeliveryModel]:
        return list(
            self.db.execute(select(DeliveryModel).order_by(DeliveryModel.id)).scalars().all()
        )

    def create_delivery(self, delivery: DeliveryModel) -> DeliveryModel:
        self.db.add(delivery)
        self.db.flush()
        return delivery

    def delete_delivery(self, delivery: DeliveryModel) -> None:
        self.db.delete(delivery)
        self.db.flush()
