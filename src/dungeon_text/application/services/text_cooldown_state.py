from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from dungeon_text.domain.models.text_line import TextLine


class TextCooldownState:
    """Turns remaining before each recently shown line may be shown again."""

    def __init__(self) -> None:
        self._remaining: dict[str, int] = {}

    @property
    def cooldown_remaining(self) -> Mapping[str, int]:
        return MappingProxyType(self._remaining)

    def advance_turn(self) -> None:
        for line_id in list(self._remaining.keys()):
            next_value = self._remaining[line_id] - 1
            if next_value <= 0:
                del self._remaining[line_id]
                continue
            self._remaining[line_id] = next_value

    def is_on_cooldown(self, line_id: str) -> bool:
        return self._remaining.get(line_id, 0) > 0

    def apply(self, line: TextLine) -> None:
        turns = int(line.cooldown_turns)
        if turns <= 0:
            # Zero-length cooldowns would be dropped by the next advance anyway.
            self._remaining.pop(line.id, None)
            return
        self._remaining[line.id] = turns
