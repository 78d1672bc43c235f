"""
Ban-aware read queries.

The two queries here deliberately disagree about direction. The stream only
honours the viewer's own outgoing bans: photos from someone who banned the
viewer still show up if the viewer follows them. The user list hides both
sides of any ban involving the current user.
"""
from __future__ import annotations

from sqlalchemy import and_
from sqlalchemy.orm import Session

from ..models.ban import Ban
from ..models.follow import Follow
from ..models.photo import Photo
from ..models.user import User


def get_stream(db: Session, viewer_id: str) -> list[str]:
    rows = (
        db.query(Photo.id)
        .join(Follow, and_(Follow.user_id == Photo.user_id, Follow.follower_id == viewer_id))
        .outerjoin(Ban, and_(Ban.banned_by == viewer_id, Ban.banned_user == Photo.user_id))
        .filter(Ban.id.is_(None))
        .order_by(Photo.uploaded_at.desc())
        .all()
    )
    return [photo_id for (photo_id,) in rows]

def get_all_users(db: Session, current_user_id: str) -> list[User]:
    banned_by_me = db.query(Ban.banned_user).filter(Ban.banned_by == current_user_id)
    banned_me = db.query(Ban.banned_by).filter(Ban.banned_user == current_user_id)
    return (
        db.query(User)
        .filter(User.id.not_in(banned_by_me), User.id.not_in(banned_me))
        .order_by(User.username)
        .all()
    )
