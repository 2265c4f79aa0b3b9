from decimal import Decimal

import pytest
from pydantic import ValidationError

from online_store.domain.errors import NotFoundError, ValidationFailedError
from online_store.domain.schemas import ProductCreate, ProductQuery, ProductUpdate
from online_store.services.product_service import ProductService


def test_create_rejects_non_positive_price():
    with pytest.raises(ValidationError):
        ProductCreate(name="Widget", price=Decimal("0"), stock_quantity=1)


def test_create_rejects_short_name():
    with pytest.raises(ValidationError):
        ProductCreate(name="ab", price=Decimal("1.00"))


def test_list_filters_and_sorts(db, make_product):
    make_product("Blue mug", "12.00", 3, "ceramic")
    make_product("Red mug", "8.00", 0, "ceramic")
    make_product("Teapot", "30.00", 5, "large MUG-shaped teapot")

    svc = ProductService(db)

    found = svc.list_products(ProductQuery(search_term="mug"))
    # wyszukiwanie bez rozrozniania wielkosci liter, takze w opisie
    assert [p.name for p in found] == ["Blue mug", "Red mug", "Teapot"]

    in_stock = svc.list_products(ProductQuery(in_stock=True, sort_by="price"))
    assert [p.name for p in in_stock] == ["Blue mug", "Teapot"]

    bounded = svc.list_products(
        ProductQuery(min_price=Decimal("8.00"), max_price=Decimal("12.00"), sort_by="price", sort_descending=True)
    )
    assert [p.name for p in bounded] == ["Blue mug", "Red mug"]


def test_unknown_sort_falls_back_to_id(db, make_product):
    first = make_product("Zebra toy", "1.00")
    second = make_product("Apple box", "2.00")

    result = ProductService(db).list_products(ProductQuery(sort_by="colour"))

    assert [p.id for p in result] == [first.id, second.id]


def test_sort_ties_broken_by_id(db, make_product):
    a = make_product("Same price A", "5.00")
    b = make_product("Same price B", "5.00")

    result = ProductService(db).list_products(ProductQuery(sort_by="price", sort_descending=True))

    assert [p.id for p in result] == [a.id, b.id]


def test_search_matches_list_with_term(db, make_product):
    make_product("Keyboard", "50.00")
    make_product("Mouse", "20.00")

    assert [p.name for p in ProductService(db).search("KEY")] == ["Keyboard"]


def test_update_overwrites_only_supplied_fields(db, make_product):
    product = make_product("Lamp", "40.00", 2, "desk lamp")

    updated = ProductService(db).update(product.id, ProductUpdate(price=Decimal("35.50")))

    assert updated.price == Decimal("35.50")
    assert updated.name == "Lamp"
    assert updated.description == "desk lamp"
    assert updated.stock_quantity == 2


def test_update_missing_product(db):
    with pytest.raises(NotFoundError):
        ProductService(db).update(999, ProductUpdate(name="Nothing"))


def test_delete_returns_false_when_absent(db, make_product):
    product = make_product()
    svc = ProductService(db)

    assert svc.delete(product.id) is True
    assert svc.delete(product.id) is False


def test_reserve_decrements_only_when_enough_stock(db, make_product):
    product = make_product(stock=5)
    svc = ProductService(db)

    assert svc.reserve(product.id, 3) is True
    db.commit()
    assert svc.get(product.id).stock_quantity == 2

    assert svc.reserve(product.id, 3) is False
    db.commit()
    assert svc.get(product.id).stock_quantity == 2


def test_reserve_and_restock_validate_input(db, make_product):
    product = make_product()
    svc = ProductService(db)

    with pytest.raises(ValidationFailedError):
        svc.reserve(product.id, 0)
    with pytest.raises(ValidationFailedError):
        svc.restock(product.id, -1)
    with pytest.raises(NotFoundError):
        svc.reserve(12345, 1)
    with pytest.raises(NotFoundError):
        svc.restock(12345, 1)


def test_restock_adds_quantity(db, make_product):
    product = make_product(stock=1)
    svc = ProductService(db)

    svc.restock(product.id, 4)
    db.commit()

    assert svc.get(product.id).stock_quantity == 5
