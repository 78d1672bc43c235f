from __future__ import annotations

import logging
import secrets
import string
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .config import settings
from .db import Base
from .errors import AllocationExhausted, Conflict

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_letters + string.digits

M = TypeVar("M", bound=Base)


def generate_id(length: int | None = None) -> str:
    """Random alphanumeric string, uniform per character (``secrets``)."""
    n = length or settings.ID_LENGTH
    return "".join(secrets.choice(ALPHABET) for _ in range(n))


def _exists(db: Session, model: type[Base], candidate: str) -> bool:
    return db.get(model, candidate) is not None


def allocate_id(db: Session, model: type[Base], max_attempts: int | None = None) -> str:
    """
    Draw identifiers until one is not present in ``model``'s table.

    The check is only an optimisation: two callers can still pick the same
    free id, so inserts go through ``create_with_id`` which treats a primary
    key violation as a signal to draw again.
    """
    attempts = max_attempts or settings.ID_MAX_ATTEMPTS
    for _ in range(attempts):
        candidate = generate_id()
        if not _exists(db, model, candidate):
            return candidate
        logger.debug("identifier collision on %s: %s", model.__tablename__, candidate)
    raise AllocationExhausted(f"no free {model.__tablename__} identifier after {attempts} attempts")


def create_with_id(
    db: Session,
    model: type[M],
    build: Callable[[str], M],
    *,
    conflict: str = "already exists",
) -> M:
    """
    Insert ``build(new_id)`` and commit, redrawing the id if the insert hits
    its primary key. Any other integrity violation is a ``Conflict``.
    """
    for _ in range(settings.ID_MAX_ATTEMPTS):
        new_id = allocate_id(db, model)
        obj = build(new_id)
        db.add(obj)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if _exists(db, model, new_id):
                logger.debug("identifier %s claimed concurrently on %s, redrawing", new_id, model.__tablename__)
                continue
            raise Conflict(conflict) from exc
        return obj
    raise AllocationExhausted(f"could not insert into {model.__tablename__}")
