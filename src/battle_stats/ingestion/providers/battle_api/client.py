from __future__ import annotations

import logging

from battle_stats.core.config import settings
from battle_stats.history.types import MatchRecord
from battle_stats.ingestion.providers.base.client import BaseHttpClient
from battle_stats.ingestion.providers.base.errors import UpstreamError

from .parser import SUCCESS_CODE, extract_record_items, parse_envelope_code, parse_match_record

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_S = 30.0


class BattleApiClient:
    """Per-sub-mode fetch against the battle-record endpoint. No dedup, no filtering."""

    def __init__(self, *, http: BaseHttpClient, api_key: str | None = None) -> None:
        self.http = http
        self.api_key = api_key or settings.require_battle_api_key()

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> BattleApiClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch(self, player_id: str, sub_mode: str) -> list[MatchRecord]:
        """GET ?key=..&id=..&option=<sub_mode> and decode the record list.

        Raises TransportError, DecodeError or UpstreamError (code != 200). Never retries.
        """

        params: dict[str, str] = {
            "key": self.api_key,
            "id": player_id,
            "option": sub_mode,
        }
        payload = self.http.get_json(params=params)

        code, msg = parse_envelope_code(payload)
        if code != SUCCESS_CODE:
            raise UpstreamError(msg or "battle API returned an error", code=code)

        items = extract_record_items(payload)
        logger.debug("sub-mode %s returned %d raw items", sub_mode, len(items))
        return [parse_match_record(item) for item in items]


def create_battle_api_client(
    *,
    api_key: str | None = None,
    base_url: str | None = None,
) -> BattleApiClient:
    http = BaseHttpClient(
        base_url=base_url or settings.battle_api_base_url,
        timeout_s=REQUEST_TIMEOUT_S,
    )
    try:
        return BattleApiClient(http=http, api_key=api_key)
    except Exception:
        http.close()
        raise
