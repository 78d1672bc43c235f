from __future__ import annotations

import logging
from typing import Optional

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from fastapi import Request
from sqlalchemy.orm import Session

from .config import settings
from .errors import Unauthorized
from .models.user import User

logger = logging.getLogger(__name__)

serializer = URLSafeTimedSerializer(settings.APP_SECRET_KEY, salt="photoshare-session")

def make_session_token(user_id: str) -> str:
    return serializer.dumps({"u": user_id})

def read_session_token(token: str, max_age_seconds: int) -> Optional[str]:
    try:
        data = serializer.loads(token, max_age=max_age_seconds)
        return data.get("u")
    except SignatureExpired:
        logger.info("Expired session token presented.")
        return None
    except BadSignature:
        return None

def _bearer_token(request: Request) -> Optional[str]:
    # Expect: Authorization: Bearer <token>
    auth = request.headers.get("Authorization", "")
    token = auth.removeprefix("Bearer ").strip() if auth.startswith("Bearer ") else ""
    return token or None

def get_current_user(request: Request, db: Session) -> Optional[User]:
    token = _bearer_token(request)
    if not token:
        return None
    user_id = read_session_token(token, settings.AUTH_SESSION_TTL_SECONDS)
    if not user_id:
        return None
    return db.get(User, user_id)

def require_user(request: Request, db: Session) -> User:
    user = get_current_user(request, db)
    if not user:
        raise Unauthorized("missing or invalid session token")
    return user
