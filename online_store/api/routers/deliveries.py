# online_store/api/routers/deliveries.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from online_store.api.deps import get_current_principal, require_admin
from online_store.data.database import get_db
from online_store.domain.errors import NotFoundError
from online_store.domain.schemas import DeliveryCreate, DeliveryOut, DeliveryUpdate
from online_store.services.delivery_service import DeliveryService

router = APIRouter(
    prefix="/deliveries",
    tags=["deliveries"],
    dependencies=[Depends(get_current_principal)],
)


def get_service(db: Session):
    return DeliveryService(db)


@router.get("", response_model=List[DeliveryOut], dependencies=[Depends(require_admin)])
def list_deliveries(db: Session = Depends(get_db)):
    return get_service(db).list_deliveries()


@router.get("/{delivery_id}", response_model=DeliveryOut)
def get_delivery(delivery_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_delivery(delivery_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=DeliveryOut, status_code=201)
def create_delivery(payload: DeliveryCreate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.create_delivery(payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{delivery_id}", response_model=DeliveryOut)
def update_delivery(delivery_id: int, payload: DeliveryUpdate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_delivery(delivery_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{delivery_id}", status_code=204)
def delete_delivery(delivery_id: int, db: Session = Depends(get_db)):
    if not get_service(db).delete_delivery(delivery_id):
        raise HTTPException(status_code=404, detail=f"Delivery {delivery_id} not found")
    return Response(status_code=204)
