import pytest
from pydantic import ValidationError

from online_store.data.models.user import UserModel
from online_store.domain.errors import ConflictError, NotFoundError
from online_store.domain.schemas import UserCreate, UserUpdate
from online_store.services.admin_order_service import AdminOrderService
from online_store.services.cart_service import CartService
from online_store.services.order_service import OrderService
from online_store.services.product_service import ProductService
from online_store.services.user_service import UserService
from online_store.utils.passwords import verify_password


def test_create_user_with_initial_cart(db, make_user):
    user = make_user("anna@example.com")

    carts = CartService(db).list_user_carts(user.id)

    assert user.email == "anna@example.com"
    assert len(carts) == 1
    assert carts[0]["status"] is None


def test_password_is_hashed_with_own_salt(db, make_user):
    first = make_user("a@example.com")
    second = make_user("b@example.com")

    hash_a = db.get(UserModel, first.id).password_hash
    hash_b = db.get(UserModel, second.id).password_hash

    assert hash_a != hash_b
    assert "secret123" not in hash_a
    assert verify_password("secret123", hash_a)


def test_duplicate_email_is_conflict(db, make_user):
    make_user("dup@example.com")

    with pytest.raises(ConflictError):
        make_user("DUP@example.com")


def test_invalid_email_rejected():
    with pytest.raises(ValidationError):
        UserCreate(first_name="A", last_name="B", email="not-an-email", password="secret123")


def test_update_rehashes_password_and_checks_email(db, make_user):
    user = make_user("old@example.com")
    make_user("taken@example.com")
    svc = UserService(db)

    updated = svc.update_user(user.id, UserUpdate(first_name="Janina", password="newsecret"))
    assert updated.first_name == "Janina"
    assert svc.verify_credentials("old@example.com", "newsecret")
    assert not svc.verify_credentials("old@example.com", "secret123")

    with pytest.raises(ConflictError):
        svc.update_user(user.id, UserUpdate(email="taken@example.com"))


def test_get_by_email_and_missing(db, make_user):
    user = make_user("find@example.com")
    svc = UserService(db)

    assert svc.get_user_by_email("FIND@example.com").id == user.id
    with pytest.raises(NotFoundError):
        svc.get_user_by_email("nobody@example.com")
    with pytest.raises(NotFoundError):
        svc.get_user(999)


def test_delete_user_removes_carts(db, make_user):
    user = make_user()
    svc = UserService(db)

    assert svc.delete_user(user.id) is True
    assert svc.delete_user(user.id) is False
    assert CartService(db).list_carts() == []


def test_is_admin_uses_configured_emails():
    assert UserService.is_admin("Boss@Example.com")
    assert not UserService.is_admin("someone@example.com")


def test_delete_user_returns_stock_of_pending_orders(db, make_user, make_product, lock_service):
    user = make_user()
    product = make_product(stock=10)
    carts = CartService(db)
    cart = carts.get_or_create_by_user(user.id)
    carts.add_item(cart["id"], product.id, 3)
    OrderService(db, lock_service).checkout(cart["id"])
    assert ProductService(db).get(product.id).stock_quantity == 7

    assert UserService(db).delete_user(user.id) is True

    assert ProductService(db).get(product.id).stock_quantity == 10


def test_delete_user_keeps_stock_of_decided_orders(db, make_user, make_product, lock_service):
    user = make_user()
    product = make_product(stock=10)
    carts = CartService(db)
    cart = carts.get_or_create_by_user(user.id)
    carts.add_item(cart["id"], product.id, 3)
    admin = AdminOrderService(db, lock_service)
    admin.checkout(cart["id"])
    admin.approve(cart["id"])

    UserService(db).delete_user(user.id)

    assert ProductService(db).get(product.id).stock_quantity == 7
