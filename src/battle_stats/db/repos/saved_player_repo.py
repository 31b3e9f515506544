from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from battle_stats.db.models.saved_player import SavedPlayer
from battle_stats.db.repos.base import BaseRepository


class SavedPlayerRepository(BaseRepository[SavedPlayer]):
    def __init__(self, session: Session) -> None:
        super().__init__(session=session, model=SavedPlayer)

    def get_by_player_id(self, player_id: str) -> SavedPlayer | None:
        return self.first_where(SavedPlayer.player_id == player_id)

    def list_recent(self) -> list[SavedPlayer]:
        stmt = select(SavedPlayer).order_by(
            SavedPlayer.last_used_at.desc(), SavedPlayer.id.desc()
        )
        return list(self.session.execute(stmt).scalars().all())
