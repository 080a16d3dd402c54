from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TextTriggerType(str, Enum):
    ENEMY_ENCOUNTERED = "enemy_encountered"
    ELITE_ENCOUNTERED = "elite_encountered"
    BOSS_ENCOUNTERED = "boss_encountered"
    LOOT_FOUND = "loot_found"
    HIGH_LOOT_FOUND = "high_loot_found"
    INFORMATION_FOUND = "information_found"
    REST_SITE_FOUND = "rest_site_found"
    EVENT_FOUND = "event_found"
    ESCAPE_ANCHOR_FOUND = "escape_anchor_found"

    @classmethod
    def parse(cls, value: "TextTriggerType | str") -> "TextTriggerType":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown text trigger type: {value!r}")


@dataclass(frozen=True)
class TextTriggerBinding:
    id: str
    trigger_type: TextTriggerType
    text_line_id: str
