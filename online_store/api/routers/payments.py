# online_store/api/routers/payments.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from online_store.api.deps import get_current_principal, require_admin
from online_store.data.database import get_db
from online_store.domain.errors import ConflictError, NotFoundError
from online_store.domain.schemas import PaymentCreate, PaymentOut, PaymentUpdate
from online_store.services.payment_service import PaymentService

router = APIRouter(
    prefix="/payments",
    tags=["payments"],
    dependencies=[Depends(get_current_principal)],
)


def get_service(db: Session):
    return PaymentService(db)


@router.get("", response_model=List[PaymentOut], dependencies=[Depends(require_admin)])
def list_payments(db: Session = Depends(get_db)):
    return get_service(db).list_payments()


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(payment_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_payment(payment_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=PaymentOut, status_code=201)
def create_payment(payload: PaymentCreate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.create_payment(payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{payment_id}", response_model=PaymentOut, dependencies=[Depends(require_admin)])
def update_payment(payment_id: int, payload: PaymentUpdate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_payment(payment_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{payment_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_payment(payment_id: int, db: Session = Depends(get_db)):
    if not get_service(db).delete_payment(payment_id):
        raise HTTPException(status_code=404, detail=f"Payment {payment_id} not found")
    return Response(status_code=204)
