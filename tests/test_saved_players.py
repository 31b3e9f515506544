from __future__ import annotations

from datetime import UTC, datetime

import pytest
import sqlalchemy as sa
from sqlalchemy.orm import Session

import battle_stats.db.models  # noqa: F401
from battle_stats.db.base import Base
from battle_stats.players.saved import list_saved_players, remove_saved_player, save_player


def _make_session() -> Session:
    engine = sa.create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(engine)
    return Session(engine)


def test_save_list_remove_players() -> None:
    session = _make_session()

    save_player(session, "111", "main", now=datetime(2026, 10, 1, tzinfo=UTC))
    save_player(session, "222", "alt", now=datetime(2026, 10, 2, tzinfo=UTC))
    session.commit()

    assert [p.player_id for p in list_saved_players(session)] == ["222", "111"]

    assert remove_saved_player(session, "222") is True
    assert remove_saved_player(session, "222") is False
    session.commit()

    assert [p.player_id for p in list_saved_players(session)] == ["111"]


def test_saving_existing_player_updates_nickname_and_last_used() -> None:
    session = _make_session()

    save_player(session, "111", "old", now=datetime(2026, 10, 1, tzinfo=UTC))
    save_player(session, "222", "other", now=datetime(2026, 10, 2, tzinfo=UTC))
    save_player(session, "111", "new", now=datetime(2026, 10, 3, tzinfo=UTC))
    session.commit()

    players = list_saved_players(session)
    assert [p.player_id for p in players] == ["111", "222"]
    assert players[0].nickname == "new"


def test_save_player_rejects_blank_id() -> None:
    session = _make_session()

    with pytest.raises(ValueError):
        save_player(session, "   ", "x")
