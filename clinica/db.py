from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from . import config


def _engine_kwargs(url: str) -> dict[str, Any]:
    if not url.startswith("sqlite"):
        return {}
    kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    # banco em memória: todas as sessões precisam ver a mesma conexão
    if url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url:
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(
    config.DATABASE_URL,
    echo=config.SQL_ECHO,
    future=True,
    **_engine_kwargs(config.DATABASE_URL),
)


@event.listens_for(Engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite só aplica FOREIGN KEY com o pragma ligado em cada conexão
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
    expire_on_commit=False
)


class Base(DeclarativeBase):
    """Base ORM para todos os modelos."""
    pass


@contextmanager
def db_session() -> Iterator[Session]:
    """
    Context manager da transação:
    - commit se tudo ok
    - rollback em qualquer exceção
    - close sempre
    """
    session: Session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
