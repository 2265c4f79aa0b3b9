# online_store/data/database.py
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from online_store.utils.settings import DATABASE_URL


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_timeout": 10}

    kwargs = {"connect_args": {"check_same_thread": False}}
    # baza w pamieci: jedno polaczenie wspoldzielone miedzy watkami
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Commit na koncu bloku, rollback przy kazdym bledzie (rowniez anulowaniu)."""
    try:
        yield db
        db.commit()
    except BaseException:
        db.rollback()
        raise
