# online_store/api/routers/products.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from online_store.api.deps import require_admin
from online_store.data.database import get_db
from online_store.domain.errors import NotFoundError
from online_store.domain.schemas import ProductCreate, ProductOut, ProductQuery, ProductUpdate
from online_store.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=List[ProductOut])
def list_products(
    search_term: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    in_stock: Optional[bool] = Query(None),
    sort_by: Optional[str] = Query(None),
    sort_descending: bool = Query(False),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.list_products(
        ProductQuery(
            search_term=search_term,
            min_price=min_price,
            max_price=max_price,
            in_stock=in_stock,
            sort_by=sort_by,
            sort_descending=sort_descending,
        )
    )


@router.get("/search", response_model=List[ProductOut])
def search_products(term: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return get_service(db).search(term)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=ProductOut, status_code=201, dependencies=[Depends(require_admin)])
def create_product(payload: ProductCreate, response: Response, db: Session = Depends(get_db)):
    product = get_service(db).create(payload)
    response.headers["Location"] = f"/products/{product.id}"
    return product


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.update(product_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_admin)])
def delete_product(product_id: int, db: Session = Depends(get_db)):
    if not get_service(db).delete(product_id):
        raise HTTPException(status_code=404, detail=f"Product {product_id} not found")
    return Response(status_code=204)
