# talenthub/db/session.py

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from talenthub.core.exceptions import StoreError

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def create_db_engine(database_url: str) -> Engine:
    """
    SQLite is the local store. An in-memory database has to share a single
    connection or every session would see its own empty database.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in IN_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(database_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Commit on success, roll back on any error."""
    db = session_factory()
    try:
        yield db
        db.commit()
    except OperationalError as e:
        db.rollback()
        raise StoreError(f"Store operation failed: {e}") from e
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
