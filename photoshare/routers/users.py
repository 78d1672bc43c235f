from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..auth import require_user
from ..db import get_db
from ..schemas import ProfileOut, UserOut, UsernameUpdate
from ..services import user_service, visibility_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")

@router.get("", response_model=list[UserOut], name="list_users")
def list_users(request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    users = visibility_service.get_all_users(db, user.id)
    return [{"user_id": u.id, "username": u.username} for u in users]

@router.patch("/username", name="set_username")
def set_username(payload: UsernameUpdate, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    old = user.username
    updated = user_service.set_username(db, user.id, payload.new_username)
    logger.info("User %s renamed %s -> %s", user.id, old, updated.username)
    return {"message": "Username updated successfully", "username": updated.username}

@router.get("/by-name/{username}", response_model=ProfileOut, name="profile_by_username")
def profile_by_username(username: str, request: Request, db: Session = Depends(get_db)):
    require_user(request, db)
    return user_service.get_profile_by_username(db, username)

@router.get("/{user_id}", response_model=ProfileOut, name="profile")
def profile(user_id: str, request: Request, db: Session = Depends(get_db)):
    require_user(request, db)
    return user_service.get_profile(db, user_id)

@router.get("/{user_id}/username", name="username")
def username(user_id: str, request: Request, db: Session = Depends(get_db)):
    require_user(request, db)
    return {"username": user_service.get_user(db, user_id).username}
