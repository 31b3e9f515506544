from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Protocol

from battle_stats.core.config import settings
from battle_stats.heroes.lookup import HeroLookup, HeroTable
from battle_stats.history.categories import category_name, resolve_sub_modes
from battle_stats.history.merge import MatchAccumulator
from battle_stats.history.summary import DisplayRecord, Summary, summarize_records
from battle_stats.history.types import MatchRecord
from battle_stats.ingestion.providers.base.errors import ProviderError
from battle_stats.ingestion.providers.battle_api.client import create_battle_api_client

logger = logging.getLogger(__name__)


class MatchFetcher(Protocol):
    def fetch(self, player_id: str, sub_mode: str) -> list[MatchRecord]: ...


@dataclass(frozen=True)
class SubModeOutcome:
    sub_mode: str
    fetched: int = 0
    admitted: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class MergeResult:
    category: str
    sub_modes: tuple[str, ...]
    records: list[MatchRecord]
    outcomes: list[SubModeOutcome] = field(default_factory=list)

    @property
    def failed_sub_modes(self) -> list[str]:
        return [o.sub_mode for o in self.outcomes if not o.ok]


@dataclass(frozen=True)
class BattleQueryResult:
    category: str
    modes_count: int
    summary: Summary
    recent_games: list[DisplayRecord]
    message: str | None = None
    success: bool = True

    @property
    def total(self) -> int:
        return len(self.recent_games)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "success": self.success,
            "category": self.category,
            "total": self.total,
            "summary": self.summary.to_dict(),
            "recentGames": [g.to_dict() for g in self.recent_games],
            "modesCount": self.modes_count,
        }
        if self.message is not None:
            out["message"] = self.message
        return out


def _fetch_sub_mode(
    client: MatchFetcher,
    accumulator: MatchAccumulator,
    player_id: str,
    sub_mode: str,
) -> SubModeOutcome:
    try:
        records = client.fetch(player_id, sub_mode)
    except ProviderError as exc:
        logger.warning("sub-mode %s failed (%s): %s", sub_mode, type(exc).__name__, exc)
        return SubModeOutcome(sub_mode=sub_mode, error=f"{type(exc).__name__}: {exc}")

    admitted = accumulator.admit_many(records)
    logger.info("sub-mode %s returned %d records, %d new", sub_mode, len(records), admitted)
    return SubModeOutcome(sub_mode=sub_mode, fetched=len(records), admitted=admitted)


def fetch_merged_records(client: MatchFetcher, player_id: str, category: str) -> MergeResult:
    """Query every sub-mode of `category` concurrently and merge into one de-duplicated list.

    A failing sub-mode is logged and contributes nothing. Returns once every sub-mode
    has finished; records are in merge order (unsorted).
    """

    sub_modes = resolve_sub_modes(category)
    logger.info("category %s -> sub-modes %s", category, ",".join(sub_modes))

    accumulator = MatchAccumulator(category)
    with ThreadPoolExecutor(max_workers=len(sub_modes)) as executor:
        futures = [
            executor.submit(_fetch_sub_mode, client, accumulator, player_id, sub_mode)
            for sub_mode in sub_modes
        ]
        outcomes = [f.result() for f in futures]

    records = accumulator.records
    logger.info("merged %d unique records for category %s", len(records), category)

    return MergeResult(
        category=category,
        sub_modes=sub_modes,
        records=records,
        outcomes=outcomes,
    )


def build_query_result(merge: MergeResult, hero_lookup: HeroLookup) -> BattleQueryResult:
    summary, recent_games = summarize_records(merge.records, hero_lookup)

    message = None
    if not recent_games:
        message = f"该玩家在{category_name(merge.category)}下暂无战绩记录"

    return BattleQueryResult(
        category=merge.category,
        modes_count=len(merge.sub_modes),
        summary=summary,
        recent_games=recent_games,
        message=message,
    )


def query_battle_data(
    player_id: str,
    category: str,
    *,
    client: MatchFetcher | None = None,
    hero_lookup: HeroLookup | None = None,
) -> BattleQueryResult:
    """Resolve, fan out, merge, sort and summarize one player's history for a category."""

    if hero_lookup is None:
        hero_lookup = HeroTable.from_json_file(settings.hero_list_path)

    if client is not None:
        merge = fetch_merged_records(client, player_id, category)
    else:
        with create_battle_api_client() as api_client:
            merge = fetch_merged_records(api_client, player_id, category)

    return build_query_result(merge, hero_lookup)
