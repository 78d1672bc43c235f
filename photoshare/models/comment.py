from __future__ import annotations
from datetime import datetime

from sqlalchemy import String, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base
from ._time import utcnow

class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column("comment_id", String(16), primary_key=True)
    photo_id: Mapped[str] = mapped_column(String(16), ForeignKey("photos.photo_id"), index=True)
    user_id: Mapped[str] = mapped_column(String(16), ForeignKey("users.user_id"))

    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column("timestamp", DateTime(timezone=True), default=utcnow)
