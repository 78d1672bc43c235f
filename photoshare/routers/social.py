from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..auth import require_user
from ..db import get_db
from ..services import relationship_service

logger = logging.getLogger(__name__)

router = APIRouter()

# -------- follows --------

@router.post("/users/{user_id}/follows", name="follow_user")
def follow_user(user_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    relationship_service.follow(db, user.id, user_id)
    logger.info("User %s followed %s", user.username, user_id)
    return {"message": "User followed successfully"}

@router.delete("/users/{user_id}/follows", name="unfollow_user")
def unfollow_user(user_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    relationship_service.unfollow(db, user.id, user_id)
    logger.info("User %s unfollowed %s", user.username, user_id)
    return {"message": "User unfollowed successfully"}

@router.get("/follows/{user_id}", name="is_followed")
def is_followed(user_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    return {"isFollowed": relationship_service.is_followed(db, user_id, user.id)}

# -------- bans --------

@router.post("/users/{user_id}/bans", name="ban_user")
def ban_user(user_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    ban_id = relationship_service.ban(db, user.id, user_id)
    logger.info("User %s banned by %s", user_id, user.username)
    return {"message": "User successfully banned", "ban_id": ban_id}

@router.delete("/users/{user_id}/bans", name="unban_user")
def unban_user(user_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    relationship_service.unban(db, user.id, user_id)
    logger.info("User %s unbanned by %s", user_id, user.username)
    return {"message": "User successfully unbanned"}

@router.get("/bans/{user_id}", name="is_banned")
def is_banned(user_id: str, request: Request, db: Session = Depends(get_db)):
    user = require_user(request, db)
    return {"banned": relationship_service.ban_exists(db, user.id, user_id)}
