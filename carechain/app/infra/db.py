"""Database session utilities."""
from contextlib import contextmanager
import logging
import time
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, Session

from ..config import get_settings
from ..domain import models  # noqa: F401  registers the tables on SQLModel.metadata

logger = logging.getLogger(__name__)

DATABASE_URL = get_settings().database_url

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, echo=False, future=True, connect_args=connect_args)
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    class_=Session,
)


def init_db(bind_engine: Optional[Engine] = None, attempts: int = 30) -> None:
    """Create tables if they do not exist.

    Retries on startup to wait for the database service in Docker.
    """
    target_engine = bind_engine or engine
    last_err: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            SQLModel.metadata.create_all(target_engine)
            return
        except Exception as exc:  # pragma: no cover
            last_err = exc
            logger.warning("waiting for database... (%d/%d) %s", attempt, attempts, exc)
            time.sleep(1)
    if last_err:
        raise last_err


@contextmanager
def get_session(bind_engine: Optional[Engine] = None) -> Iterator[Session]:
    session = SessionLocal(bind=bind_engine) if bind_engine is not None else SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
