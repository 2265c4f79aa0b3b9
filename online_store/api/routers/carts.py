# online_store/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from online_store.api.deps import get_current_principal, require_admin
from online_store.data.database import get_db
from online_store.domain.errors import InvalidStateError, NotFoundError
from online_store.domain.schemas import (
    CartItemOut,
    CartOut,
    CreateCartIn,
    ItemIn,
    ItemUpdateIn,
)
from online_store.services.cart_service import CartService

router = APIRouter(
    prefix="/carts",
    tags=["carts"],
    dependencies=[Depends(get_current_principal)],
)


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=List[CartOut], dependencies=[Depends(require_admin)])
def list_carts(db: Session = Depends(get_db)):
    return get_service(db).list_carts()


@router.post("", response_model=CartOut, status_code=201)
def create_cart(payload: CreateCartIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.create_cart(payload.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# /items/... przed /{user_id}, inaczej "items" trafi do parametru
@router.get("/items/{item_id}", response_model=CartItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_item(item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/items", response_model=CartItemOut, status_code=201)
def add_item(payload: ItemIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_item(payload.cart_id, payload.product_id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/items", response_model=CartOut)
def update_item(payload: ItemUpdateIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_item_quantity(payload.id, payload.quantity)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/items/{item_id}", status_code=204)
def remove_item(item_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        removed = svc.remove_item(item_id)
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not removed:
        raise HTTPException(status_code=404, detail=f"Cart item {item_id} not found")
    return Response(status_code=204)


@router.get("/{user_id}", response_model=CartOut)
def get_cart_by_user(user_id: int, db: Session = Depends(get_db)):
    """Biezacy koszyk uzytkownika, tworzony jesli go nie ma."""
    svc = get_service(db)
    try:
        return svc.get_or_create_by_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{user_id}/clear", status_code=204)
def clear_cart(user_id: int, db: Session = Depends(get_db)):
    if not get_service(db).clear(user_id):
        raise HTTPException(status_code=404, detail="Koszyk nie znaleziony albo pusty")
    return Response(status_code=204)


@router.delete("/{cart_id}", status_code=204)
def delete_cart(cart_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        deleted = svc.delete_cart(cart_id)
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Koszyk nie znaleziony")
    return Response(status_code=204)
