# online_store/repos/product_repo.py
from decimal import Decimal

from sqlalchemy import delete, or_, select, update
from sqlalchemy.orm import Session

from online_store.data.models.cart_item import CartItemModel
from online_store.data.models.product import ProductModel

_SORT_COLUMNS = {
    "name": ProductModel.name,
    "price": ProductModel.price,
    "id": ProductModel.id,
}


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(
        self,
        search_term: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        in_stock: bool | None = None,
        sort_by: str | None = None,
        sort_descending: bool = False,
    ) -> list[ProductModel]:
        stmt = select(ProductModel)

        if search_term and search_term.strip():
            pattern = f"%{search_term.strip()}%"
            stmt = stmt.where(
                or_(
                    ProductModel.name.ilike(pattern),
                    ProductModel.description.ilike(pattern),
                )
            )
        if min_price is not None:
            stmt = stmt.where(ProductModel.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(ProductModel.price <= max_price)
        if in_stock:
            stmt = stmt.where(ProductModel.stock_quantity > 0)

        column = _SORT_COLUMNS.get((sort_by or "id").lower(), ProductModel.id)
        stmt = stmt.order_by(column.desc() if sort_descending else column.asc())
        # remisy zawsze po id rosnaco
        if column is not ProductModel.id:
            stmt = stmt.order_by(ProductModel.id.asc())

        return list(self.db.execute(stmt).scalars().all())

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.execute(
            delete(CartItemModel).where(CartItemModel.product_id == product.id)
        )
        self.db.delete(product)
        self.db.flush()

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        """
        Compare-and-swap w bazie: UPDATE ... WHERE stock_quantity >= quantity.
        Zwraca liczbe zmienionych wierszy (0 = za malo towaru albo brak produktu).
        """
        result = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product_id,
                ProductModel.stock_quantity >= quantity,
            )
            .values(stock_quantity=ProductModel.stock_quantity - quantity)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def increment_stock(self, product_id: int, quantity: int) -> int:
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id)
            .values(stock_quantity=ProductModel.stock_quantity + quantity)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount
