from __future__ import annotations

import random
from typing import Optional, Sequence

from dungeon_text.application.services.text_cooldown_state import TextCooldownState
from dungeon_text.application.services.text_selection_rules import select_weighted_match
from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_observation import TextObservation


class AmbientTextLineSelector:
    def __init__(self, lines: Sequence[TextLine], rng: random.Random | None = None) -> None:
        if lines is None:
            raise ValueError("lines is required")
        self.lines = lines
        self.rng = rng or random.Random()

    def select_text_line(
        self,
        observation: TextObservation,
        cooldown_state: TextCooldownState,
    ) -> Optional[TextLine]:
        return select_weighted_match(self.lines, observation, cooldown_state, self.rng)
