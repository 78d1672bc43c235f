from __future__ import annotations

from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base

class Follow(Base):
    __tablename__ = "follows"

    # user_id is the followed side of the edge
    user_id: Mapped[str] = mapped_column(String(16), ForeignKey("users.user_id"), primary_key=True)
    follower_id: Mapped[str] = mapped_column(String(16), ForeignKey("users.user_id"), primary_key=True, index=True)
