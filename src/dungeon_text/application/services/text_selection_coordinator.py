from __future__ import annotations

import logging
import random
from typing import Mapping, Optional, Sequence

from dungeon_text.application.services.ambient_text_selector import AmbientTextLineSelector
from dungeon_text.application.services.text_cooldown_state import TextCooldownState
from dungeon_text.application.services.triggered_text_selector import TriggeredTextLineSelector
from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_observation import TextObservation
from dungeon_text.domain.models.text_trigger import TextTriggerBinding, TextTriggerType


class TextLineSelectionCoordinator:
    """Picks at most one line per turn: triggered lines first, ambient lines otherwise."""

    def __init__(
        self,
        lines: Sequence[TextLine],
        trigger_bindings: Sequence[TextTriggerBinding],
        ambient_rng: random.Random | None = None,
        trigger_rng: random.Random | None = None,
    ) -> None:
        if lines is None:
            raise ValueError("lines is required")
        if trigger_bindings is None:
            raise ValueError("trigger_bindings is required")

        self._triggered_selector = TriggeredTextLineSelector(lines, trigger_bindings, trigger_rng)
        self._ambient_selector = AmbientTextLineSelector(lines, ambient_rng)
        self._cooldown_state = TextCooldownState()
        self._last_selection_source: Optional[str] = None
        self._logger = logging.getLogger(__name__)

    @property
    def cooldown_remaining(self) -> Mapping[str, int]:
        return self._cooldown_state.cooldown_remaining

    @property
    def last_selection_source(self) -> Optional[str]:
        """Tier that chose the last line: ``"triggered"``, ``"ambient"``, or None."""
        return self._last_selection_source

    def select_text_line(
        self,
        observation: TextObservation,
        trigger_type: TextTriggerType | str | None = None,
    ) -> Optional[TextLine]:
        trigger = TextTriggerType.parse(trigger_type) if trigger_type is not None else None
        self._cooldown_state.advance_turn()
        self._last_selection_source = None

        if trigger is not None:
            triggered_line = self._triggered_selector.select_text_line(trigger, observation, self._cooldown_state)
            if triggered_line is not None:
                return self._commit(triggered_line, source="triggered", trigger=trigger)

        ambient_line = self._ambient_selector.select_text_line(observation, self._cooldown_state)
        if ambient_line is not None:
            return self._commit(ambient_line, source="ambient")

        return None

    def _commit(self, line: TextLine, *, source: str, trigger: TextTriggerType | None = None) -> TextLine:
        self._cooldown_state.apply(line)
        self._last_selection_source = source
        self._logger.debug(
            "Text line selected",
            extra={
                "text_line_id": line.id,
                "source": source,
                "trigger_type": trigger.value if trigger is not None else None,
                "cooldown_turns": line.cooldown_turns,
            },
        )
        return line
