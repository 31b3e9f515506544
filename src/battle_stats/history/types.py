from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class GameResult(IntEnum):
    LOSS = 0
    WIN = 1


@dataclass(frozen=True)
class MatchRecord:
    """
    One played game as returned by the battle-record API.

    `event_timestamp` is finer-grained than `game_time` and sorts lexically;
    `game_seq` is empty when the upstream did not assign a sequence id.
    """

    event_timestamp: str
    game_time: str
    kills: int
    deaths: int
    assists: int
    result: GameResult
    hero_id: int
    map_name: str = ""
    grade_game: str = ""
    hero_icon: str = ""
    battle_type: int = 0
    game_seq: str = ""
    role_job_name: str = ""
    stars: int = 0

    @property
    def is_win(self) -> bool:
        return self.result is GameResult.WIN
