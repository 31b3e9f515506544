from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)

HERO_TYPE_NAMES: Mapping[int, str] = {
    1: "坦克",
    2: "战士",
    3: "刺客",
    4: "法师",
    5: "射手",
    6: "辅助",
}
UNKNOWN_HERO_TYPE = "未知类型"

# Used when no hero list file can be loaded.
FALLBACK_HERO_NAMES: Mapping[int, str] = {
    505: "瑶",
    155: "马可波罗",
    196: "诸葛亮",
    119: "干将莫邪",
    184: "蔡文姬",
    503: "海月",
    117: "钟无艳",
    585: "元流之子(辅助)",
    188: "大禹",
}


def unknown_hero_name(hero_id: int) -> str:
    return f"未知英雄({hero_id})"


class HeroLookup(Protocol):
    def hero_name(self, hero_id: int) -> str: ...


@dataclass(frozen=True)
class HeroInfo:
    id: int
    name: str
    title: str = ""
    hero_type: int = 0

    @property
    def type_name(self) -> str:
        return HERO_TYPE_NAMES.get(self.hero_type, UNKNOWN_HERO_TYPE)

    @property
    def full_name(self) -> str:
        if not self.title:
            return self.name
        return f"{self.name} - {self.title}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "type": self.type_name,
            "fullName": self.full_name,
        }


def _parse_hero(item: Any) -> HeroInfo | None:
    if not isinstance(item, dict):
        return None
    ename = item.get("ename")
    cname = item.get("cname")
    if not isinstance(ename, int) or isinstance(ename, bool) or not isinstance(cname, str):
        return None
    title = item.get("title")
    hero_type = item.get("hero_type")
    return HeroInfo(
        id=ename,
        name=cname,
        title=title if isinstance(title, str) else "",
        hero_type=hero_type if isinstance(hero_type, int) else 0,
    )


class HeroTable:
    """In-memory hero id -> HeroInfo table with a built-in fallback for names."""

    def __init__(self, heroes: Mapping[int, HeroInfo] | None = None) -> None:
        self._heroes: dict[int, HeroInfo] = dict(heroes or {})

    @classmethod
    def from_items(cls, items: list[Any]) -> HeroTable:
        heroes: dict[int, HeroInfo] = {}
        for item in items:
            hero = _parse_hero(item)
            if hero is not None:
                heroes[hero.id] = hero
        return cls(heroes)

    @classmethod
    def from_json_file(cls, path: str | Path) -> HeroTable:
        """Load a heroList.json array; an unreadable file yields an empty (fallback-only) table."""

        p = Path(path)
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("hero list %s could not be loaded, using fallback names: %s", p, e)
            return cls()

        if not isinstance(raw, list):
            logger.warning("hero list %s is not a JSON array, using fallback names", p)
            return cls()

        table = cls.from_items(raw)
        logger.info("loaded %d heroes from %s", len(table), p)
        return table

    def __len__(self) -> int:
        return len(self._heroes)

    def hero_name(self, hero_id: int) -> str:
        hero = self._heroes.get(hero_id)
        if hero is not None:
            return hero.name
        return FALLBACK_HERO_NAMES.get(hero_id) or unknown_hero_name(hero_id)

    def hero_info(self, hero_id: int) -> HeroInfo:
        hero = self._heroes.get(hero_id)
        if hero is not None:
            return hero
        return HeroInfo(id=hero_id, name=self.hero_name(hero_id))
