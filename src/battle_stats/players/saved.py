from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from battle_stats.db.models.saved_player import SavedPlayer
from battle_stats.db.repos.saved_player_repo import SavedPlayerRepository

logger = logging.getLogger(__name__)


def save_player(
    session: Session,
    player_id: str,
    nickname: str = "",
    *,
    now: datetime | None = None,
) -> SavedPlayer:
    """Insert a saved player, or update nickname + last-used time if already saved."""

    player_id = player_id.strip()
    if not player_id:
        raise ValueError("player_id must not be empty")

    now = now or datetime.now(UTC)
    repo = SavedPlayerRepository(session)

    existing = repo.get_by_player_id(player_id)
    if existing is not None:
        existing.nickname = nickname
        existing.last_used_at = now
        session.flush()
        logger.info("updated saved player %s", player_id)
        return existing

    player = repo.add(SavedPlayer(player_id=player_id, nickname=nickname, last_used_at=now))
    logger.info("saved player %s", player_id)
    return player


def list_saved_players(session: Session) -> list[SavedPlayer]:
    return SavedPlayerRepository(session).list_recent()


def remove_saved_player(session: Session, player_id: str) -> bool:
    repo = SavedPlayerRepository(session)
    player = repo.get_by_player_id(player_id.strip())
    if player is None:
        return False
    repo.delete(player)
    logger.info("removed saved player %s", player_id)
    return True
