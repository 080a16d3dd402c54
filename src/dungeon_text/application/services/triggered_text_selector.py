from __future__ import annotations

import random
from typing import Optional, Sequence

from dungeon_text.application.services.text_cooldown_state import TextCooldownState
from dungeon_text.application.services.text_selection_rules import select_weighted_match
from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_observation import TextObservation
from dungeon_text.domain.models.text_trigger import TextTriggerBinding, TextTriggerType


class TriggeredTextLineSelector:
    def __init__(
        self,
        lines: Sequence[TextLine],
        bindings: Sequence[TextTriggerBinding],
        rng: random.Random | None = None,
    ) -> None:
        if lines is None:
            raise ValueError("lines is required")
        if bindings is None:
            raise ValueError("bindings is required")
        self.line_by_id = self._index_lines(lines)
        self.lines_by_trigger = self._index_by_trigger(self.line_by_id, bindings)
        self.rng = rng or random.Random()

    @staticmethod
    def _index_lines(lines: Sequence[TextLine]) -> dict[str, TextLine]:
        line_by_id: dict[str, TextLine] = {}
        for line in lines:
            if line is None or not str(line.id or "").strip():
                continue
            line_by_id[line.id] = line
        return line_by_id

    @staticmethod
    def _index_by_trigger(
        line_by_id: dict[str, TextLine],
        bindings: Sequence[TextTriggerBinding],
    ) -> dict[TextTriggerType, list[TextLine]]:
        buckets: dict[TextTriggerType, list[TextLine]] = {}
        for binding in bindings:
            if binding is None or not str(binding.text_line_id or "").strip():
                continue
            line = line_by_id.get(binding.text_line_id)
            if line is None:
                continue
            buckets.setdefault(binding.trigger_type, []).append(line)
        return buckets

    def lines_for(self, trigger_type: TextTriggerType) -> tuple[TextLine, ...]:
        return tuple(self.lines_by_trigger.get(trigger_type, ()))

    def select_text_line(
        self,
        trigger_type: TextTriggerType,
        observation: TextObservation,
        cooldown_state: TextCooldownState,
    ) -> Optional[TextLine]:
        bucket = self.lines_by_trigger.get(trigger_type)
        if bucket is None:
            return None
        return select_weighted_match(bucket, observation, cooldown_state, self.rng)
