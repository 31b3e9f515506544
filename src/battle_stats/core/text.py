from __future__ import annotations

import re

_whitespace_re = re.compile(r"\s+")


def normalize_mode_label(value: str) -> str:
    """Collapse whitespace in an upstream mode label so substring checks are stable."""

    return _whitespace_re.sub("", value or "")
