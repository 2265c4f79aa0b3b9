# online_store/api/routers/admin_orders.py
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from online_store.api.deps import get_comment_store, get_lock_service, require_admin
from online_store.data.database import get_db
from online_store.domain.errors import InvalidStateError, NotFoundError
from online_store.domain.schemas import (
    AdminDecisionIn,
    OrderOut,
    OrderStatsOut,
    OrderStatusUpdate,
)
from online_store.services.admin_order_service import AdminOrderService
from online_store.services.comment_store import CommentStore
from online_store.services.lock_service import LockService

router = APIRouter(
    prefix="/admin/orders",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def get_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    comment_store: CommentStore = Depends(get_comment_store),
) -> AdminOrderService:
    return AdminOrderService(db=db, lock_service=lock_service, comment_store=comment_store)


@router.get("", response_model=List[OrderOut])
def list_orders(svc: AdminOrderService = Depends(get_service)):
    return svc.list_orders()


@router.get("/stats", response_model=OrderStatsOut)
def stats(svc: AdminOrderService = Depends(get_service)):
    return svc.stats()


@router.get("/{cart_id}", response_model=OrderOut)
def get_order(cart_id: int, svc: AdminOrderService = Depends(get_service)):
    try:
        return svc.get_order(cart_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{cart_id}/with-comment", response_model=OrderOut)
def get_order_with_comment(cart_id: int, svc: AdminOrderService = Depends(get_service)):
    try:
        return svc.get_order_with_comment(cart_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{cart_id}/approve", response_model=OrderOut)
def approve(
    cart_id: int,
    payload: AdminDecisionIn | None = Body(None),
    svc: AdminOrderService = Depends(get_service),
):
    comment = payload.comment if payload else None
    try:
        return svc.approve(cart_id, comment)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{cart_id}/reject", response_model=OrderOut)
def reject(
    cart_id: int,
    payload: AdminDecisionIn | None = Body(None),
    svc: AdminOrderService = Depends(get_service),
):
    """Odrzucenie zwraca caly zarezerwowany towar na magazyn."""
    comment = payload.comment if payload else None
    try:
        return svc.reject(cart_id, comment)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{cart_id}/status", response_model=OrderOut)
def update_status(
    cart_id: int,
    payload: OrderStatusUpdate,
    svc: AdminOrderService = Depends(get_service),
):
    try:
        return svc.update_status(cart_id, payload.status)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
