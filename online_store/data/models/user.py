# online_store/data/models/user.py
from sqlalchemy import Column, Integer, String

from online_store.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    phone = Column(String(20), nullable=True)
    address = Column(String(200), nullable=True)
