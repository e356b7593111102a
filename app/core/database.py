"""Database handles and per-request session management."""

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Largest value a 32-bit INTEGER primary key can hold.
MAX_INTEGER_ID = 2**31 - 1


def is_storable_id(value: int) -> bool:
    """True if value fits the integer primary keys; larger ids cannot exist."""
    return 1 <= value <= MAX_INTEGER_ID


class Database:
    """
    Engine plus session factory for one relational store.

    Opened by the application lifespan and disposed at shutdown; request
    handlers reach it through app.state rather than a module global.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        kwargs: dict = {"echo": echo}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection so every session sees the same in-memory DB.
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True
        self.engine: Engine = create_engine(url, **kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a main-store session and closes it when done."""
    db = request.app.state.db.session()
    try:
        yield db
    finally:
        db.close()


def get_products_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that yields a catalog-store session and closes it when done."""
    db = request.app.state.products_db.session()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
