from __future__ import annotations

from typing import Any

from battle_stats.history.types import GameResult, MatchRecord
from battle_stats.ingestion.providers.base.errors import DecodeError

ApiItem = dict[str, Any]

SUCCESS_CODE = 200


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _count(value: Any) -> int:
    return max(0, _as_int(value))


def parse_match_record(item: ApiItem) -> MatchRecord:
    """Decode one `data.list` entry; absent fields fall back to zero / empty."""

    result = GameResult.WIN if _as_int(item.get("gameresult")) == 1 else GameResult.LOSS

    return MatchRecord(
        event_timestamp=_as_str(item.get("dtEventTime")),
        game_time=_as_str(item.get("gametime")),
        kills=_count(item.get("killcnt")),
        deaths=_count(item.get("deadcnt")),
        assists=_count(item.get("assistcnt")),
        result=result,
        hero_id=_as_int(item.get("heroId")),
        map_name=_as_str(item.get("mapName")),
        grade_game=_as_str(item.get("gradeGame")),
        hero_icon=_as_str(item.get("heroIcon")),
        battle_type=_as_int(item.get("battleType")),
        game_seq=_as_str(item.get("gameSeq")).strip(),
        role_job_name=_as_str(item.get("roleJobName")),
        stars=_as_int(item.get("stars")),
    )


def extract_record_items(payload: ApiItem) -> list[ApiItem]:
    """Return the raw `data.list` entries of a successful envelope.

    A missing or null `data` / `list` is an empty result; any other shape is a DecodeError.
    """

    data = payload.get("data")
    if data is None:
        return []
    if not isinstance(data, dict):
        raise DecodeError(f"Expected 'data' object, got {type(data).__name__}")

    items = data.get("list")
    if items is None:
        return []
    if not isinstance(items, list):
        raise DecodeError(f"Expected 'data.list' array, got {type(items).__name__}")

    return [i for i in items if isinstance(i, dict)]


def parse_envelope_code(payload: ApiItem) -> tuple[int | None, str]:
    code = payload.get("code")
    msg = _as_str(payload.get("msg"))
    if isinstance(code, bool) or not isinstance(code, (int, str)):
        return None, msg
    try:
        return int(code), msg
    except ValueError:
        return None, msg
