from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..auth import require_user
from ..config import settings
from ..db import get_db
from ..errors import InvalidOperation
from ..schemas import CommentIn, CommentOut, PhotoDetailOut, PhotoOut
from ..services import content_service, visibility_service

logger = logging.getLogger(__name__)

router = APIRouter()

def _photo_out(photo) -> dict:
    return {
        "photo_id": photo.id,
        "user_id": photo.user_id,
        "content_type": photo.content_type,
        "timestamp": photo.uploaded_at,
    }

# -------- photos --------

@router.get("/photos", response_model=list[PhotoOut], name="list_photos")
def list_photos(request: Request, db: Session = Depends(get_db)):
    require_user(request, db)
    return [_photo_out(p) for p in content_service.list_photos(db)]

@router.post("/photos", response_model=PhotoOut, status_code=201, name="upload_photo")
def upload_photo(request: Request, file: UploadFile = File(...), db: Session = Depends(get_db)):
    user = require_user(request, db)
    # read one byte past the limit so oversize uploads are detectable
    data = file.file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(data) > settings.MAX_UPLOAD_BYTES:
        raise InvalidOperation("image too large")
    photo = content_service.add_photo(db, user.id, data, content_type=file.content_type)
    logger.info("User %s uploaded photo %s (%d bytes)", user.username, photo.id, len(data))
    return _photo_out(photo)

@router.get("/photos/{photo_id}", response_model=PhotoDetailOut, name="get_photo")
def get_photo(photo_id: str, request: Request, db: Session = Depends(get_db)):
    require_user(request, db)
    return content_service.get_photo_detail(db, photo_id)

@router.get("/photos/{photo_id}/image", name="get_photo_image")
def get_photo_image(photo_id: str, request: Request, db: Session = Depends(get_db)):
    require_user(request, db)
    photo = content_service.get_photo(db, photo_id)
    return Response(content=photo.image_data, media_type=photo.content_type or "application/octet-stream")

@router.delete("/photos/{photo_id}", name="delete_photo")
def delete_photo(photo_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    content_service.require_photo_owner(db, photo_id, user.id)
    content_service.delete_photo(db, photo_id)
    logger.info("User %s deleted photo %s", user.username, photo_id)
    return {"message": "Photo deleted successfully"}

@router.get("/stream", response_model=list[str], name="my_stream")
def my_stream(request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    return visibility_service.get_stream(db, user.id)

# -------- likes --------

@router.get("/photos/{photo_id}/likes", name="is_liked")
def is_liked(photo_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    return {
        "liked": content_service.is_liked(db, user.id, photo_id),
        "likes_count": content_service.count_likes(db, photo_id),
    }

@router.post("/photos/{photo_id}/likes", name="like_photo")
def like_photo(photo_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    created = content_service.like_photo(db, user.id, photo_id)
    if created:
        logger.info("User %s liked photo %s", user.username, photo_id)
    return {"liked": True, "created": created}

@router.delete("/photos/{photo_id}/likes", name="unlike_photo")
def unlike_photo(photo_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    content_service.unlike_photo(db, user.id, photo_id)
    return {"liked": False}

# -------- comments --------

@router.post("/photos/{photo_id}/comments", response_model=CommentOut, status_code=201, name="comment_photo")
def comment_photo(photo_id: str, payload: CommentIn, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    comment = content_service.add_comment(db, user.id, photo_id, payload.content)
    logger.info("User %s commented on photo %s", user.username, photo_id)
    return {
        "comment_id": comment.id,
        "photo_id": comment.photo_id,
        "user_id": comment.user_id,
        "username": user.username,
        "content": comment.content,
        "timestamp": comment.created_at,
    }

@router.get("/photos/{photo_id}/comments", response_model=list[CommentOut], name="list_comments")
def list_comments(photo_id: str, request: Request, db: Session = Depends(get_db)):
    require_user(request, db)
    content_service.get_photo(db, photo_id)
    return content_service.list_comments(db, photo_id)

@router.delete("/comments/{comment_id}", name="uncomment_photo")
def uncomment_photo(comment_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    content_service.delete_comment(db, comment_id, acting_user_id=user.id)
    logger.info("User %s deleted comment %s", user.username, comment_id)
    return {"message": "Comment deleted successfully"}
