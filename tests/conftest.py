import os

# przed importem pakietu: settings czyta env tylko raz
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["ADMIN_EMAILS"] = "boss@example.com"
os.environ["IDENTITY_SERVICE_URL"] = ""
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"

import threading
import uuid
from contextlib import contextmanager
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from online_store.api.deps import get_lock_service
from online_store.data import models  # noqa: F401
from online_store.data.database import Base, SessionLocal, engine
from online_store.domain.errors import ConflictError
from online_store.domain.schemas import ProductCreate, UserCreate
from online_store.main import create_app
from online_store.services.comment_store import CommentStore
from online_store.services.product_service import ProductService
from online_store.services.user_service import UserService

ADMIN_HEADERS = {"X-User-Email": "admin@example.com", "X-User-Role": "admin"}
USER_HEADERS = {"X-User-Email": "jan@example.com", "X-User-Role": "user"}


class InMemoryLockService:
    """Ten sam kontrakt co LockService, bez Redisa."""

    def __init__(self):
        self._locks: dict[int, str] = {}
        self._mutex = threading.Lock()
        self.acquire_attempts = 0

    def acquire_cart_lock(self, cart_id: int, ttl: int = 30) -> str | None:
        with self._mutex:
            self.acquire_attempts += 1
            if cart_id in self._locks:
                return None
            token = uuid.uuid4().hex
            self._locks[cart_id] = token
            return token

    def release_cart_lock(self, cart_id: int, token: str) -> bool:
        with self._mutex:
            if self._locks.get(cart_id) != token:
                return False
            del self._locks[cart_id]
            return True

    @contextmanager
    def cart_lock(self, cart_id: int):
        token = self.acquire_cart_lock(cart_id)
        if token is None:
            raise ConflictError(f"Cart {cart_id} is being modified by another operation")
        try:
            yield
        finally:
            self.release_cart_lock(cart_id, token)


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def lock_service():
    return InMemoryLockService()


@pytest.fixture
def comment_store():
    return CommentStore()


@pytest.fixture
def app(lock_service, comment_store):
    application = create_app()
    application.state.comment_store = comment_store
    application.dependency_overrides[get_lock_service] = lambda: lock_service
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest.fixture
def user_headers():
    return dict(USER_HEADERS)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email: str | None = None):
        counter["n"] += 1
        return UserService(db).create_user(
            UserCreate(
                first_name="Jan",
                last_name="Kowalski",
                email=email or f"user{counter['n']}@example.com",
                password="secret123",
            )
        )

    return _make


@pytest.fixture
def make_product(db):
    def _make(name: str = "Widget", price: str = "5.00", stock: int = 10, description: str | None = None):
        return ProductService(db).create(
            ProductCreate(
                name=name,
                description=description,
                price=Decimal(price),
                stock_quantity=stock,
            )
        )

    return _make
