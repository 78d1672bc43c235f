from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..auth import make_session_token
from ..db import get_db
from ..schemas import LoginRequest, LoginResponse, UserOut
from ..services import user_service

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/liveness", name="liveness")
def liveness():
    return {"status": "ok"}

@router.post("/session", response_model=LoginResponse, name="do_login")
def do_login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user, created = user_service.get_or_create_by_username(db, payload.name)
    if created:
        logger.info("Registered %s on first login", user.username)
        response.status_code = 201
    return {"identifier": user.id, "token": make_session_token(user.id)}

@router.post("/users", response_model=UserOut, status_code=201, name="add_user")
def add_user(payload: LoginRequest, db: Session = Depends(get_db)):
    user = user_service.create_user(db, payload.name)
    logger.info("Registered user %s", user.username)
    return {"user_id": user.id, "username": user.username}
