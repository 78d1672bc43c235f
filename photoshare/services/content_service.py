from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import settings
from ..db import transaction
from ..errors import Forbidden, InvalidOperation, NotFound, TransactionFailure
from ..ids import create_with_id
from ..models.comment import Comment
from ..models.like import Like
from ..models.photo import Photo
from ..models.user import User


@dataclass
class CommentView:
    comment_id: str
    photo_id: str
    user_id: str
    username: str
    content: str
    timestamp: datetime


@dataclass
class PhotoDetail:
    photo_id: str
    user_id: str
    username: str
    image_data: bytes
    content_type: str | None
    timestamp: datetime
    likes_count: int
    comments: list[CommentView] = field(default_factory=list)


def get_photo(db: Session, photo_id: str) -> Photo:
    photo = db.get(Photo, photo_id)
    if photo is None:
        raise NotFound(f"photo {photo_id} not found")
    return photo

# -------- photos --------

def add_photo(db: Session, user_id: str, image_data: bytes, content_type: str | None = None) -> Photo:
    if not image_data:
        raise InvalidOperation("empty image")
    if len(image_data) > settings.MAX_UPLOAD_BYTES:
        raise InvalidOperation("image too large")
    if content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise InvalidOperation(f"unsupported content type {content_type or '(none)'}")
    if db.get(User, user_id) is None:
        raise NotFound(f"user {user_id} not found")

    return create_with_id(
        db,
        Photo,
        lambda new_id: Photo(id=new_id, user_id=user_id, image_data=image_data, content_type=content_type),
    )

def list_photos(db: Session) -> list[Photo]:
    return db.query(Photo).order_by(Photo.uploaded_at.desc()).all()

def require_photo_owner(db: Session, photo_id: str, user_id: str) -> Photo:
    photo = get_photo(db, photo_id)
    if photo.user_id != user_id:
        raise Forbidden("only the uploader can do this")
    return photo

def delete_photo(db: Session, photo_id: str) -> None:
    """
    Remove a photo together with its comments and likes, all or nothing.

    Children go first so a failure part-way never leaves comments or likes
    pointing at a missing photo.
    """
    # "evaluate" marks matching in-session objects deleted, so references
    # callers still hold stay readable
    try:
        with transaction(db):
            db.query(Comment).filter(Comment.photo_id == photo_id).delete(synchronize_session="evaluate")
            db.query(Like).filter(Like.photo_id == photo_id).delete(synchronize_session="evaluate")
            deleted = db.query(Photo).filter(Photo.id == photo_id).delete(synchronize_session="evaluate")
            if not deleted:
                raise NotFound(f"photo {photo_id} not found")
    except SQLAlchemyError as exc:
        raise TransactionFailure(f"deleting photo {photo_id} failed") from exc

def get_photo_detail(db: Session, photo_id: str) -> PhotoDetail:
    row = (
        db.query(Photo, User.username)
        .join(User, User.id == Photo.user_id)
        .filter(Photo.id == photo_id)
        .first()
    )
    if row is None:
        raise NotFound(f"photo {photo_id} not found")
    photo, username = row

    return PhotoDetail(
        photo_id=photo.id,
        user_id=photo.user_id,
        username=username,
        image_data=photo.image_data,
        content_type=photo.content_type,
        timestamp=photo.uploaded_at,
        likes_count=count_likes(db, photo_id),
        comments=list_comments(db, photo_id),
    )

# -------- likes --------

def like_photo(db: Session, user_id: str, photo_id: str) -> bool:
    """Returns True when a like was created, False if it already existed."""
    get_photo(db, photo_id)
    if is_liked(db, user_id, photo_id):
        return False
    db.add(Like(user_id=user_id, photo_id=photo_id))
    try:
        db.commit()
    except IntegrityError:
        # a concurrent like of the same pair won; the outcome is the same
        db.rollback()
        return False
    return True

def unlike_photo(db: Session, user_id: str, photo_id: str) -> None:
    db.query(Like).filter(Like.user_id == user_id, Like.photo_id == photo_id).delete(synchronize_session=False)
    db.commit()

def is_liked(db: Session, user_id: str, photo_id: str) -> bool:
    q = db.query(Like).filter(Like.user_id == user_id, Like.photo_id == photo_id)
    return db.query(q.exists()).scalar()

def count_likes(db: Session, photo_id: str) -> int:
    return db.query(func.count()).select_from(Like).filter(Like.photo_id == photo_id).scalar() or 0

# -------- comments --------

def add_comment(db: Session, user_id: str, photo_id: str, content: str) -> Comment:
    text = (content or "").strip()
    if not text:
        raise InvalidOperation("comment is empty")
    if len(text) > settings.COMMENT_MAX_LENGTH:
        raise InvalidOperation("comment too long")
    get_photo(db, photo_id)

    return create_with_id(
        db,
        Comment,
        lambda new_id: Comment(id=new_id, photo_id=photo_id, user_id=user_id, content=text),
    )

def list_comments(db: Session, photo_id: str) -> list[CommentView]:
    rows = (
        db.query(Comment, User.username)
        .join(User, User.id == Comment.user_id)
        .filter(Comment.photo_id == photo_id)
        .order_by(Comment.created_at.desc())
        .all()
    )
    return [
        CommentView(
            comment_id=c.id,
            photo_id=c.photo_id,
            user_id=c.user_id,
            username=username,
            content=c.content,
            timestamp=c.created_at,
        )
        for c, username in rows
    ]

def delete_comment(db: Session, comment_id: str, acting_user_id: str | None = None) -> None:
    """
    Delete one comment. When ``acting_user_id`` is given it must be the
    comment's author or the owner of the photo it sits on.
    """
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFound(f"comment {comment_id} not found")
    if acting_user_id is not None and comment.user_id != acting_user_id:
        photo = db.get(Photo, comment.photo_id)
        if photo is None or photo.user_id != acting_user_id:
            raise Forbidden("cannot delete someone else's comment")
    db.delete(comment)
    db.commit()
