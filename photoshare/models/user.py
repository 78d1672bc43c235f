from __future__ import annotations
from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base
from ._time import utcnow

class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column("user_id", String(16), primary_key=True)
    # NOCASE makes the unique index case-insensitive
    username: Mapped[str] = mapped_column(String(64, collation="nocase"), unique=True, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
