from __future__ import annotations

import re
from dataclasses import dataclass, field

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import Conflict, InvalidOperation, NotFound
from ..ids import create_with_id
from ..models.photo import Photo
from ..models.user import User
from . import relationship_service

USERNAME_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


@dataclass
class UserProfile:
    user_id: str
    username: str
    followers: list[str] = field(default_factory=list)
    following: list[str] = field(default_factory=list)
    photos: list[str] = field(default_factory=list)


def validate_username(name: str) -> str:
    name = (name or "").strip()
    if not settings.USERNAME_MIN_LENGTH <= len(name) <= settings.USERNAME_MAX_LENGTH:
        raise InvalidOperation(
            f"username must be {settings.USERNAME_MIN_LENGTH}-{settings.USERNAME_MAX_LENGTH} characters"
        )
    if not USERNAME_RE.match(name):
        raise InvalidOperation("username may only contain letters, digits, '_', '.' and '-'")
    return name

def _by_name(db: Session, username: str):
    return db.query(User).filter(func.lower(User.username) == username.lower())

def get_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id) if user_id else None
    if user is None:
        raise NotFound(f"user {user_id} not found")
    return user

def get_user_by_username(db: Session, username: str) -> User | None:
    return _by_name(db, username).first()

def create_user(db: Session, username: str) -> User:
    name = validate_username(username)
    if get_user_by_username(db, name) is not None:
        raise Conflict("username already exists")
    return create_with_id(db, User, lambda new_id: User(id=new_id, username=name), conflict="username already exists")

def get_or_create_by_username(db: Session, username: str) -> tuple[User, bool]:
    """Login-or-register: returns (user, created)."""
    name = validate_username(username)
    user = get_user_by_username(db, name)
    if user is not None:
        return user, False
    try:
        return create_user(db, name), True
    except Conflict:
        # registered concurrently under the same name
        user = get_user_by_username(db, name)
        if user is None:
            raise
        return user, False

def set_username(db: Session, user_id: str, new_username: str) -> User:
    name = validate_username(new_username)
    user = get_user(db, user_id)
    taken = _by_name(db, name).filter(User.id != user_id).first()
    if taken is not None:
        raise Conflict("username already taken")
    user.username = name
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict("username already taken") from exc
    return user

def _profile(db: Session, user: User) -> UserProfile:
    photo_rows = db.query(Photo.id).filter(Photo.user_id == user.id).order_by(Photo.uploaded_at.desc()).all()
    return UserProfile(
        user_id=user.id,
        username=user.username,
        followers=relationship_service.followers_of(db, user.id),
        following=relationship_service.following_of(db, user.id),
        photos=[pid for (pid,) in photo_rows],
    )

def get_profile(db: Session, user_id: str) -> UserProfile:
    return _profile(db, get_user(db, user_id))

def get_profile_by_username(db: Session, username: str) -> UserProfile:
    user = get_user_by_username(db, username)
    if user is None:
        raise NotFound(f"user {username} not found")
    return _profile(db, user)
