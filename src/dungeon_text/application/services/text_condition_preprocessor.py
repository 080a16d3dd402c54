from __future__ import annotations

from typing import Iterable

from dungeon_text.domain.models.text_line import TextLine


def build_condition_caches(lines: Iterable[TextLine | None]) -> None:
    if lines is None:
        raise ValueError("lines is required")
    for line in lines:
        if line is None:
            continue
        line.build_condition_cache()
