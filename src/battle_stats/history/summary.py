from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from battle_stats.heroes.lookup import HeroLookup
from battle_stats.history.types import MatchRecord

WIN_LABEL = "胜利"
LOSS_LABEL = "失败"


@dataclass(frozen=True)
class Summary:
    total_games: int
    win_rate: str
    avg_kda: str
    total_wins: int
    total_loss: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalGames": self.total_games,
            "winRate": self.win_rate,
            "avgKDA": self.avg_kda,
            "totalWins": self.total_wins,
            "totalLoss": self.total_loss,
        }


EMPTY_SUMMARY = Summary(total_games=0, win_rate="0%", avg_kda="0/0/0", total_wins=0, total_loss=0)


@dataclass(frozen=True)
class DisplayRecord:
    index: int
    time: str
    hero_id: int
    hero_name: str
    hero_icon: str
    kda: str
    kills: int
    deaths: int
    assists: int
    score: str
    result: str
    result_class: str
    mode: str
    role_job_name: str = ""
    stars: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "time": self.time,
            "heroId": self.hero_id,
            "heroName": self.hero_name,
            "heroIcon": self.hero_icon,
            "kda": self.kda,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
            "score": self.score,
            "result": self.result,
            "resultClass": self.result_class,
            "mode": self.mode,
            "roleJobName": self.role_job_name,
            "stars": self.stars,
        }


def sort_records(records: Sequence[MatchRecord]) -> list[MatchRecord]:
    """Most recent first. sorted() is stable, so equal timestamps keep merge order."""

    return sorted(records, key=lambda r: r.event_timestamp, reverse=True)


def summarize(records: Sequence[MatchRecord]) -> Summary:
    total = len(records)
    if total == 0:
        return EMPTY_SUMMARY

    wins = sum(1 for r in records if r.is_win)
    kills = sum(r.kills for r in records)
    deaths = sum(r.deaths for r in records)
    assists = sum(r.assists for r in records)

    return Summary(
        total_games=total,
        win_rate=f"{wins / total * 100:.1f}%",
        avg_kda=f"{kills / total:.1f}/{deaths / total:.1f}/{assists / total:.1f}",
        total_wins=wins,
        total_loss=total - wins,
    )


def build_display_records(
    records: Sequence[MatchRecord], hero_lookup: HeroLookup
) -> list[DisplayRecord]:
    out: list[DisplayRecord] = []
    for idx, r in enumerate(records, start=1):
        out.append(
            DisplayRecord(
                index=idx,
                time=r.game_time,
                hero_id=r.hero_id,
                hero_name=hero_lookup.hero_name(r.hero_id),
                hero_icon=r.hero_icon,
                kda=f"{r.kills}/{r.deaths}/{r.assists}",
                kills=r.kills,
                deaths=r.deaths,
                assists=r.assists,
                score=r.grade_game,
                result=WIN_LABEL if r.is_win else LOSS_LABEL,
                result_class="win" if r.is_win else "lose",
                mode=r.map_name,
                role_job_name=r.role_job_name,
                stars=r.stars,
            )
        )
    return out


def summarize_records(
    records: Sequence[MatchRecord], hero_lookup: HeroLookup
) -> tuple[Summary, list[DisplayRecord]]:
    ordered = sort_records(records)
    return summarize(ordered), build_display_records(ordered, hero_lookup)
