from __future__ import annotations
from datetime import datetime

from sqlalchemy import String, DateTime, LargeBinary, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base
from ._time import utcnow

class Photo(Base):
    __tablename__ = "photos"

    id: Mapped[str] = mapped_column("photo_id", String(16), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(16), ForeignKey("users.user_id"), index=True)

    image_data: Mapped[bytes] = mapped_column(LargeBinary)
    content_type: Mapped[str | None] = mapped_column(String(128), nullable=True)

    uploaded_at: Mapped[datetime] = mapped_column("timestamp", DateTime(timezone=True), default=utcnow, index=True)
