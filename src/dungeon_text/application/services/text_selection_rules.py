from __future__ import annotations

import random
from typing import Optional, Sequence

from dungeon_text.application.services.text_cooldown_state import TextCooldownState
from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_observation import TextObservation


def can_use_line(line: TextLine | None) -> bool:
    if line is None:
        return False
    return (
        int(line.weight) > 0
        and int(line.cooldown_turns) >= 0
        and bool(str(line.id or "").strip())
        and bool(str(line.text or "").strip())
    )


def _pick_weighted(candidates: Sequence[TextLine], total_weight: int, rng: random.Random) -> TextLine:
    roll = rng.randrange(total_weight)
    cumulative = 0
    for candidate in candidates:
        cumulative += int(candidate.weight)
        if roll < cumulative:
            return candidate
    return candidates[-1]


def select_weighted_match(
    lines: Sequence[TextLine | None],
    observation: TextObservation,
    cooldown_state: TextCooldownState,
    rng: random.Random,
) -> Optional[TextLine]:
    """Draw one eligible line with probability proportional to its weight.

    Returns ``None`` when nothing in ``lines`` is usable, off cooldown and
    matching ``observation``.
    """

    if lines is None:
        raise ValueError("lines is required")
    if cooldown_state is None:
        raise ValueError("cooldown_state is required")
    if rng is None:
        raise ValueError("rng is required")

    candidates: list[TextLine] = []
    total_weight = 0
    for line in lines:
        if not can_use_line(line):
            continue
        if cooldown_state.is_on_cooldown(line.id):
            continue
        if not line.is_match(observation):
            continue
        candidates.append(line)
        total_weight += int(line.weight)

    if not candidates:
        return None
    return _pick_weighted(candidates, total_weight, rng)
