from __future__ import annotations
from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ..db import Base
from ._time import utcnow

class Ban(Base):
    __tablename__ = "bans"
    __table_args__ = (
        UniqueConstraint("banned_by", "banned_user", name="uq_bans_pair"),
        # at most one edge per unordered pair: A->B and B->A never coexist
        UniqueConstraint("pair_key", name="uq_bans_unordered_pair"),
    )

    id: Mapped[str] = mapped_column("ban_id", String(16), primary_key=True)
    banned_by: Mapped[str] = mapped_column(String(16), ForeignKey("users.user_id"), index=True)
    banned_user: Mapped[str] = mapped_column(String(16), ForeignKey("users.user_id"), index=True)
    pair_key: Mapped[str] = mapped_column(String(40))

    created_at: Mapped[datetime] = mapped_column("timestamp", DateTime(timezone=True), default=utcnow)

    @staticmethod
    def pair_key_for(a: str, b: str) -> str:
        lo, hi = sorted((a, b))
        return f"{lo}:{hi}"
