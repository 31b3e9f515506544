from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from battle_stats.db.base import Base, TimestampMixin


class SavedPlayer(Base, TimestampMixin):
    __tablename__ = "saved_players"

    id: Mapped[int] = mapped_column(primary_key=True)

    player_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    nickname: Mapped[str] = mapped_column(String(120), nullable=False, default="")

    last_used_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("ix_saved_players_last_used_at", "last_used_at"),)
