from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class Category(StrEnum):
    ALL = "1"
    RANKED = "2"
    TOP_TIER = "3"
    MATCHES = "4"
    ROOMS = "5"


# Upstream `option` values per category. The MATCHES sub-modes are known to also
# return ranked and top-tier games; see history.classify.
CATEGORY_SUB_MODES: Mapping[Category, tuple[str, ...]] = MappingProxyType(
    {
        Category.ALL: ("0",),
        Category.RANKED: ("1", "16"),
        Category.TOP_TIER: ("4",),
        Category.MATCHES: ("2", "3", "5", "6", "7", "17"),
        Category.ROOMS: ("8", "9", "10"),
    }
)

CATEGORY_NAMES: Mapping[Category, str] = MappingProxyType(
    {
        Category.ALL: "全部比赛",
        Category.RANKED: "排位赛",
        Category.TOP_TIER: "巅峰赛",
        Category.MATCHES: "匹配模式",
        Category.ROOMS: "房间模式",
    }
)


def parse_category(value: str | None) -> Category:
    """Map an exact category code onto a Category; anything else (padded codes included) is ALL."""

    if value is None:
        return Category.ALL
    try:
        return Category(value)
    except ValueError:
        return Category.ALL


def resolve_sub_modes(category: str | None) -> tuple[str, ...]:
    return CATEGORY_SUB_MODES[parse_category(category)]


def category_name(category: str | None) -> str:
    return CATEGORY_NAMES[parse_category(category)]


def category_options() -> list[dict[str, str]]:
    return [{"value": c.value, "label": CATEGORY_NAMES[c]} for c in Category]
