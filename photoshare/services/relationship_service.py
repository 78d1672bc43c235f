from __future__ import annotations

from sqlalchemy import DateTime, insert, literal, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..db import transaction
from ..errors import Conflict, Forbidden, InvalidOperation, NotFound, AllocationExhausted
from ..ids import allocate_id
from ..models.ban import Ban
from ..models.follow import Follow
from ..models.user import User
from ..models._time import utcnow


def _require_user(db: Session, user_id: str) -> None:
    if db.get(User, user_id) is None:
        raise NotFound(f"user {user_id} not found")

# -------- follows --------

def follow(db: Session, follower_id: str, followed_id: str) -> Follow:
    if follower_id == followed_id:
        raise InvalidOperation("cannot follow yourself")
    _require_user(db, followed_id)
    if is_followed(db, followed_id, follower_id):
        raise Conflict("already following this user")

    edge = Follow(user_id=followed_id, follower_id=follower_id)
    db.add(edge)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict("already following this user") from exc
    return edge

def unfollow(db: Session, follower_id: str, followed_id: str) -> None:
    if follower_id == followed_id:
        raise InvalidOperation("cannot unfollow yourself")
    db.query(Follow).filter(
        Follow.user_id == followed_id,
        Follow.follower_id == follower_id,
    ).delete(synchronize_session=False)
    db.commit()

def is_followed(db: Session, followed_id: str, follower_id: str) -> bool:
    q = db.query(Follow).filter(Follow.user_id == followed_id, Follow.follower_id == follower_id)
    return db.query(q.exists()).scalar()

def followers_of(db: Session, user_id: str) -> list[str]:
    return [fid for (fid,) in db.query(Follow.follower_id).filter(Follow.user_id == user_id).all()]

def following_of(db: Session, user_id: str) -> list[str]:
    return [uid for (uid,) in db.query(Follow.user_id).filter(Follow.follower_id == user_id).all()]

# -------- bans --------

def ban_exists(db: Session, banner_id: str, banned_id: str) -> bool:
    q = db.query(Ban).filter(Ban.banned_by == banner_id, Ban.banned_user == banned_id)
    return db.query(q.exists()).scalar()

def ban(db: Session, banner_id: str, banned_id: str) -> str:
    """
    Create the edge banner -> banned and return its ban id.

    The pre-checks pick the error kind. The insert is conditional on the
    opposite edge being absent, and the unordered-pair key on ``bans`` makes
    two concurrent opposite bans collide on commit whatever the isolation
    level; the loser gets Forbidden.
    """
    if banner_id == banned_id:
        raise InvalidOperation("cannot ban yourself")
    _require_user(db, banned_id)
    if ban_exists(db, banned_id, banner_id):
        raise Forbidden("cannot ban a user who has banned you")
    if ban_exists(db, banner_id, banned_id):
        raise Conflict("user is already banned")

    opposite = select(Ban.id).where(Ban.banned_by == banned_id, Ban.banned_user == banner_id).exists()
    for _ in range(settings.ID_MAX_ATTEMPTS):
        ban_id = allocate_id(db, Ban)
        row = select(
            literal(ban_id),
            literal(banner_id),
            literal(banned_id),
            literal(Ban.pair_key_for(banner_id, banned_id)),
            literal(utcnow(), DateTime(timezone=True)),
        ).where(~opposite)
        t = Ban.__table__
        stmt = insert(t).from_select([t.c.ban_id, t.c.banned_by, t.c.banned_user, t.c.pair_key, t.c.timestamp], row)
        try:
            with transaction(db):
                inserted = db.execute(stmt).rowcount
        except IntegrityError as exc:
            if ban_exists(db, banner_id, banned_id):
                raise Conflict("user is already banned") from exc
            if ban_exists(db, banned_id, banner_id):
                raise Forbidden("cannot ban a user who has banned you") from exc
            # ban_id was claimed concurrently
            continue
        if not inserted:
            raise Forbidden("cannot ban a user who has banned you")
        return ban_id
    raise AllocationExhausted("could not insert into bans")

def unban(db: Session, banner_id: str, banned_id: str) -> None:
    if banner_id == banned_id:
        raise InvalidOperation("cannot unban yourself")
    db.query(Ban).filter(Ban.banned_by == banner_id, Ban.banned_user == banned_id).delete(
        synchronize_session=False
    )
    db.commit()
