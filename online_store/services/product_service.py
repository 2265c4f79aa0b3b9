# online_store/services/product_service.py
from sqlalchemy.orm import Session

from online_store.data.database import transaction
from online_store.data.models.product import ProductModel
from online_store.domain.errors import NotFoundError, ValidationFailedError
from online_store.domain.schemas import ProductCreate, ProductQuery, ProductUpdate
from online_store.repos.product_repo import ProductRepo
from online_store.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """
    Katalog produktow: CRUD, filtrowanie i dwie operacje na stanie magazynowym.
    reserve zdejmuje towar, restock go oddaje - nigdy jedna funkcja ze znakiem.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)

    #query
    def get(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def list_products(self, query: ProductQuery | None = None) -> list[ProductModel]:
        query = query or ProductQuery()
        return self.repo.list_products(
            search_term=query.search_term,
            min_price=query.min_price,
            max_price=query.max_price,
            in_stock=query.in_stock,
            sort_by=query.sort_by,
            sort_descending=query.sort_descending,
        )

    def search(self, term: str) -> list[ProductModel]:
        return self.list_products(ProductQuery(search_term=term))

    #commands
    def create(self, payload: ProductCreate) -> ProductModel:
        with transaction(self.db):
            product = self.repo.add_product(
                ProductModel(
                    name=payload.name,
                    description=payload.description,
                    price=payload.price,
                    stock_quantity=payload.stock_quantity,
                )
            )
        logger.info(f"Utworzono produkt {product.id} ({product.name})")
        return product

    def update(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        # PUT z semantyka PATCH, nadpisujemy tylko podane pola
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        with transaction(self.db):
            product = self.get(product_id)
            for field, value in changes.items():
                setattr(product, field, value)
            self.db.flush()

        logger.info(f"Zaktualizowano produkt {product_id}: {sorted(changes)}")
        return product

    def delete(self, product_id: int) -> bool:
        with transaction(self.db):
            product = self.repo.get_product(product_id)
            if not product:
                return False
            self.repo.delete_product(product)

        logger.info(f"Usunieto produkt {product_id}")
        return True

    # =====================================================
    # STAN MAGAZYNOWY
    # Nie commituja - wolajacy trzyma transakcje (np. checkout).
    # =====================================================
    def reserve(self, product_id: int, quantity: int) -> bool:
        if quantity <= 0:
            raise ValidationFailedError(
                "Reserved quantity must be positive",
                {"quantity": "must be greater than 0"},
            )

        if self.repo.decrement_stock(product_id, quantity):
            return True

        # 0 wierszy: albo brak produktu, albo za malo towaru
        self.get(product_id)
        logger.info(f"Za malo towaru dla produktu {product_id} (potrzeba {quantity})")
        return False

    def restock(self, product_id: int, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationFailedError(
                "Restocked quantity must be positive",
                {"quantity": "must be greater than 0"},
            )

        if not self.repo.increment_stock(product_id, quantity):
            raise NotFoundError(f"Product {product_id} not found")
