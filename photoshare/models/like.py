from __future__ import annotations
from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base
from ._time import utcnow

class Like(Base):
    __tablename__ = "likes"

    user_id: Mapped[str] = mapped_column(String(16), ForeignKey("users.user_id"), primary_key=True)
    photo_id: Mapped[str] = mapped_column(String(16), ForeignKey("photos.photo_id"), primary_key=True, index=True)

    created_at: Mapped[datetime] = mapped_column("timestamp", DateTime(timezone=True), default=utcnow)
