# online_store/data/models/delivery.py
from sqlalchemy import Column, Integer, ForeignKey, String, DateTime

from online_store.data.database import Base


class DeliveryModel(Base):
    __tablename__ = "deliveries"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(String(50), nullable=False)
    delivery_date = Column(DateTime(timezone=True), nullable=False)
