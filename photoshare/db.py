from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from .config import settings


class Base(DeclarativeBase):
    pass


def make_engine(url: str) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # request handlers run on a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    # make sure every model is registered on Base.metadata
    from . import models  # noqa: F401

    bind = bind or engine
    if bind.url.get_backend_name() == "sqlite" and bind.url.database not in (None, "", ":memory:"):
        os.makedirs(os.path.dirname(bind.url.database) or ".", exist_ok=True)
    Base.metadata.create_all(bind=bind)


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Scoped unit of work: commit on normal exit, roll back on any exception.

    Whatever was pending in the session when the block is entered becomes
    part of the same transaction.
    """
    try:
        yield db
        db.commit()
    except BaseException:
        db.rollback()
        raise
