# online_store/api/routers/users.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import EmailStr
from sqlalchemy.orm import Session

from online_store.api.deps import get_current_principal, require_admin
from online_store.data.database import get_db
from online_store.domain.errors import ConflictError, NotFoundError
from online_store.domain.schemas import CartOut, UserCreate, UserRead, UserUpdate
from online_store.services.cart_service import CartService
from online_store.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def get_service(db: Session):
    return UserService(db)


@router.post("", response_model=UserRead, status_code=201)
def create_user(payload: UserCreate, response: Response, db: Session = Depends(get_db)):
    """Rejestracja - uzytkownik dostaje od razu pusty koszyk."""
    svc = get_service(db)
    try:
        user = svc.create_user(payload)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    response.headers["Location"] = f"/users/{user.id}"
    return user


@router.get("", response_model=List[UserRead], dependencies=[Depends(require_admin)])
def list_users(db: Session = Depends(get_db)):
    return get_service(db).list_users()


@router.get("/email", response_model=UserRead, dependencies=[Depends(require_admin)])
def get_user_by_email(email: EmailStr = Query(...), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_user_by_email(email)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/is-admin/{email}", response_model=bool, dependencies=[Depends(require_admin)])
def is_admin(email: str):
    return UserService.is_admin(email)


@router.get("/{user_id}", response_model=UserRead, dependencies=[Depends(get_current_principal)])
def get_user(user_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get(
    "/{user_id}/carts",
    response_model=List[CartOut],
    dependencies=[Depends(get_current_principal)],
)
def list_user_carts(user_id: int, db: Session = Depends(get_db)):
    try:
        return CartService(db).list_user_carts(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{user_id}", response_model=UserRead, dependencies=[Depends(get_current_principal)])
def update_user(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update_user(user_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{user_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_user(user_id: int, db: Session = Depends(get_db)):
    if not get_service(db).delete_user(user_id):
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return Response(status_code=204)
