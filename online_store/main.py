# online_store/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from online_store.api.errors import register_exception_handlers
from online_store.api.routers import (
    admin_orders,
    carts,
    deliveries,
    health,
    orders,
    payments,
    products,
    users,
)
from online_store.data import models  # noqa: F401  rejestracja tabel w Base.metadata
from online_store.data.database import Base, engine
from online_store.services.comment_store import CommentStore
from online_store.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Tabele w Base.metadata: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)
    logger.info("Baza danych gotowa")
    yield
    # komentarze admina zyja tylko tyle co proces
    app.state.comment_store.clear()
    logger.info("Zamykanie aplikacji")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Online Store",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.comment_store = CommentStore()

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(admin_orders.router)
    app.include_router(deliveries.router)
    app.include_router(payments.router)

    register_exception_handlers(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
