from __future__ import annotations

import random
import threading
import time

import httpx

from battle_stats.history.query import fetch_merged_records, query_battle_data
from battle_stats.history.types import GameResult, MatchRecord
from battle_stats.ingestion.providers.base.client import BaseHttpClient
from battle_stats.ingestion.providers.base.errors import DecodeError, TransportError, UpstreamError
from battle_stats.ingestion.providers.battle_api.client import BattleApiClient


class FakeHeroes:
    def hero_name(self, hero_id: int) -> str:
        return f"hero-{hero_id}"


def _record(
    game_seq: str,
    *,
    event_timestamp: str = "2026-10-01 20:00:00",
    map_name: str = "王者峡谷",
    battle_type: int = 0,
    result: GameResult = GameResult.WIN,
) -> MatchRecord:
    return MatchRecord(
        event_timestamp=event_timestamp,
        game_time="10-01",
        kills=1,
        deaths=1,
        assists=1,
        result=result,
        hero_id=155,
        map_name=map_name,
        battle_type=battle_type,
        game_seq=game_seq,
    )


class ScriptedClient:
    """Returns canned records (or raises) per sub-mode and records which were called."""

    def __init__(self, responses: dict[str, list[MatchRecord] | Exception]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def fetch(self, player_id: str, sub_mode: str) -> list[MatchRecord]:
        with self._lock:
            self.calls.append((player_id, sub_mode))
        value = self.responses.get(sub_mode, [])
        if isinstance(value, Exception):
            raise value
        return list(value)


def test_partial_failure_keeps_other_sub_modes() -> None:
    client = ScriptedClient(
        {
            "1": TransportError("connect timeout"),
            "16": [_record("a"), _record("b"), _record("c")],
        }
    )

    merge = fetch_merged_records(client, "p1", "2")

    assert sorted(r.game_seq for r in merge.records) == ["a", "b", "c"]
    assert merge.failed_sub_modes == ["1"]
    assert sorted(sub_mode for _, sub_mode in client.calls) == ["1", "16"]

    result = query_battle_data("p1", "2", client=client, hero_lookup=FakeHeroes())
    assert result.success is True
    assert result.total == 3
    assert result.to_dict()["success"] is True


def test_every_failure_kind_is_contained() -> None:
    client = ScriptedClient(
        {
            "8": TransportError("down"),
            "9": DecodeError("garbage"),
            "10": UpstreamError("busy", code=500),
        }
    )

    result = query_battle_data("p1", "5", client=client, hero_lookup=FakeHeroes())
    payload = result.to_dict()

    assert payload["success"] is True
    assert payload["total"] == 0
    assert payload["recentGames"] == []
    assert payload["summary"]["winRate"] == "0%"
    assert payload["message"] == "该玩家在房间模式下暂无战绩记录"
    assert payload["modesCount"] == 3


def test_overlapping_sub_modes_are_deduplicated() -> None:
    shared = _record("dup")
    client = ScriptedClient(
        {"2": [shared, _record("x")], "3": [shared], "7": [shared, _record("y")]}
    )

    merge = fetch_merged_records(client, "p1", "4")

    assert sorted(r.game_seq for r in merge.records) == ["dup", "x", "y"]
    assert sum(o.admitted for o in merge.outcomes) == 3
    assert sum(o.fetched for o in merge.outcomes) == 5


def test_matches_category_drops_leaked_ranked_and_top_tier_games() -> None:
    responses: dict[str, list[MatchRecord] | Exception] = {
        "2": [_record("keep-1"), _record("ranked", map_name="排位赛")],
        "7": [
            _record("keep-2"),
            _record("solo", battle_type=16),
            _record("top", map_name="巅峰赛"),
        ],
    }

    merged_matches = fetch_merged_records(ScriptedClient(responses), "p1", "4")
    assert sorted(r.game_seq for r in merged_matches.records) == ["keep-1", "keep-2"]

    # The same records reached through the "all" category are kept.
    everything = responses["2"] + responses["7"]
    merged_all = fetch_merged_records(ScriptedClient({"0": everything}), "p1", "1")
    assert len(merged_all.records) == 5


def test_result_is_sorted_most_recent_first() -> None:
    client = ScriptedClient(
        {
            "1": [_record("old", event_timestamp="2026-09-01 10:00:00", result=GameResult.LOSS)],
            "16": [_record("new", event_timestamp="2026-10-05 10:00:00")],
        }
    )

    payload = query_battle_data("p1", "2", client=client, hero_lookup=FakeHeroes()).to_dict()

    assert [g["index"] for g in payload["recentGames"]] == [1, 2]
    assert [g["resultClass"] for g in payload["recentGames"]] == ["win", "lose"]
    assert payload["summary"]["winRate"] == "50.0%"
    assert payload["category"] == "2"
    assert payload["modesCount"] == 2
    assert "message" not in payload


def test_six_way_fan_out_has_no_lost_or_duplicated_records() -> None:
    sub_modes = ["2", "3", "5", "6", "7", "17"]
    per_mode = 150

    class ConcurrentClient:
        def __init__(self) -> None:
            self.barrier = threading.Barrier(len(sub_modes))

        def fetch(self, player_id: str, sub_mode: str) -> list[MatchRecord]:
            # All six workers must be in flight at once.
            self.barrier.wait(timeout=5)
            time.sleep(random.uniform(0, 0.005))
            return [_record(f"{sub_mode}-{i}") for i in range(per_mode)]

    for _ in range(10):
        merge = fetch_merged_records(ConcurrentClient(), "p1", "4")
        keys = [r.game_seq for r in merge.records]
        assert len(keys) == per_mode * len(sub_modes)
        assert len(set(keys)) == len(keys)


def test_unknown_category_queries_all_sub_mode() -> None:
    client = ScriptedClient({"0": [_record("a")]})

    result = query_battle_data("p1", "42", client=client, hero_lookup=FakeHeroes())

    assert client.calls == [("p1", "0")]
    assert result.total == 1
    assert result.modes_count == 1


def test_query_over_http_with_one_failing_sub_mode() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        option = request.url.params["option"]
        if option == "1":
            raise httpx.ConnectTimeout("timed out", request=request)
        items = [
            {
                "dtEventTime": f"2026-10-0{i} 12:00:00",
                "heroId": 155,
                "gameresult": i % 2,
                "killcnt": i,
            }
            for i in range(1, 4)
        ]
        return httpx.Response(200, json={"code": 200, "msg": "", "data": {"list": items}})

    http = BaseHttpClient(
        base_url="https://api.example.test/morebattle",
        transport=httpx.MockTransport(handler),
    )
    with BattleApiClient(http=http, api_key="k") as client:
        payload = query_battle_data("p1", "2", client=client, hero_lookup=FakeHeroes()).to_dict()

    assert payload["success"] is True
    assert payload["total"] == 3
    assert [g["kills"] for g in payload["recentGames"]] == [3, 2, 1]
    assert payload["summary"]["totalWins"] == 2


def test_padded_category_code_is_not_matches() -> None:
    client = ScriptedClient({"0": [_record("r", map_name="排位赛")]})

    result = query_battle_data("p1", " 4 ", client=client, hero_lookup=FakeHeroes())

    assert client.calls == [("p1", "0")]
    assert result.total == 1
    assert result.modes_count == 1
