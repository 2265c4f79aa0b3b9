# online_store/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from online_store.api.deps import (
    get_comment_store,
    get_current_principal,
    get_lock_service,
    require_admin,
)
from online_store.data.database import get_db
from online_store.domain.errors import InvalidStateError, NotFoundError
from online_store.domain.schemas import OrderOut, OrderStatusUpdate
from online_store.services.comment_store import CommentStore
from online_store.services.lock_service import LockService
from online_store.services.order_service import OrderService

router = APIRouter(
    prefix="/orders",
    tags=["orders"],
    dependencies=[Depends(get_current_principal)],
)


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    comment_store: CommentStore = Depends(get_comment_store),
) -> OrderService:
    return OrderService(db=db, lock_service=lock_service, comment_store=comment_store)


@router.get("", response_model=List[OrderOut], dependencies=[Depends(require_admin)])
def list_orders(svc: OrderService = Depends(get_service)):
    return svc.list_orders()


@router.post("/cart/{cart_id}/checkout", response_model=OrderOut)
def checkout(cart_id: int, svc: OrderService = Depends(get_service)):
    """
    Koszyk -> zamowienie Pending, towar zdejmowany z magazynu.
    Wysyla powiadomienie asynchronicznie.
    """
    try:
        return svc.checkout(cart_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{cart_id}", response_model=OrderOut)
def get_order(cart_id: int, svc: OrderService = Depends(get_service)):
    try:
        return svc.get_order(cart_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{cart_id}/status", response_model=OrderOut)
def update_status(
    cart_id: int,
    payload: OrderStatusUpdate,
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.update_status(cart_id, payload.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
