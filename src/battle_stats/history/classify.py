from __future__ import annotations

from battle_stats.core.text import normalize_mode_label
from battle_stats.history.categories import Category, parse_category
from battle_stats.history.types import MatchRecord

RANKED_LABEL = "排位"
TOP_TIER_LABEL = "巅峰"

# battleType codes: 12 duo, 13 trio, 15 five-stack, 16 solo.
RANKED_BATTLE_TYPES: frozenset[int] = frozenset({12, 13, 15, 16})


def identity_key(record: MatchRecord) -> str:
    """`game_seq` when present, else "<event_timestamp>-<hero_id>".

    The fallback can collide for two games on the same hero with the same event
    timestamp; that is accepted.
    """

    if record.game_seq:
        return record.game_seq
    return f"{record.event_timestamp}-{record.hero_id}"


def is_ranked_game(record: MatchRecord) -> bool:
    # Map name and battle type disagree on some records; either signal counts.
    return (
        RANKED_LABEL in normalize_mode_label(record.map_name)
        or record.battle_type in RANKED_BATTLE_TYPES
    )


def is_top_tier_game(record: MatchRecord) -> bool:
    return TOP_TIER_LABEL in normalize_mode_label(record.map_name)


def is_excluded(record: MatchRecord, category: str | Category) -> bool:
    """True when a MATCHES query leaked a ranked or top-tier game.

    Other categories never exclude anything.
    """

    if parse_category(category) is not Category.MATCHES:
        return False
    return is_ranked_game(record) or is_top_tier_game(record)
