# online_store/repos/cart_repo.py
from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from online_store.data.models.cart import CartModel
from online_store.data.models.cart_item import CartItemModel
from online_store.data.models.product import ProductModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    # ---------- carts ----------
    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def get_current_cart_by_user(self, user_id: int) -> CartModel | None:
        #najnowszy koszyk ktory nie jest jeszcze zamowieniem
        return self.db.execute(
            select(CartModel)
            .where(CartModel.user_id == user_id, CartModel.status.is_(None))
            .order_by(CartModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def list_carts(self) -> list[CartModel]:
        return list(
            self.db.execute(select(CartModel).order_by(CartModel.id)).scalars().all()
        )

    def list_user_carts(self, user_id: int) -> list[CartModel]:
        return list(
            self.db.execute(
                select(CartModel).where(CartModel.user_id == user_id).order_by(CartModel.id)
            ).scalars().all()
        )

    def list_orders(self) -> list[CartModel]:
        return list(
            self.db.execute(
                select(CartModel).where(CartModel.status.is_not(None)).order_by(CartModel.id)
            ).scalars().all()
        )

    def create_cart(self, cart: CartModel) -> CartModel:
        self.db.add(cart)
        self.db.flush()
        return cart

    def delete_cart(self, cart: CartModel) -> None:
        self.db.delete(cart)
        self.db.flush()

    def update_cart_version(self, cart_id: int, old_version: int, new_data: dict) -> int:
        """
        Optimistic locking:
        UPDATE carts SET ..., version = old + 1 WHERE id = :id AND version = :old
        0 zmienionych wierszy = ktos nas wyprzedzil.
        """
        result = self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id, CartModel.version == old_version)
            .values(version=old_version + 1, **new_data)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    # ---------- items ----------
    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
            ).scalars().all()
        )

    def get_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id)

    def get_cart_item(self, cart_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def delete_cart_items(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.cart_id == cart_id)
        )
        return result.rowcount

    # ---------- statystyki ----------
    def count_orders(self, status: str | None = None) -> int:
        stmt = select(func.count(CartModel.id))
        if status is None:
            stmt = stmt.where(CartModel.status.is_not(None))
        else:
            stmt = stmt.where(CartModel.status == status)
        return self.db.execute(stmt).scalar_one()

    def get_priced_lines(self, status: str) -> list[tuple]:
        """(ilosc, aktualna cena) dla wszystkich pozycji koszykow o danym statusie."""
        return list(
            self.db.execute(
                select(CartItemModel.quantity, ProductModel.price)
                .join(CartModel, CartModel.id == CartItemModel.cart_id)
                .join(ProductModel, ProductModel.id == CartItemModel.product_id)
                .where(CartModel.status == status)
            ).all()
        )
