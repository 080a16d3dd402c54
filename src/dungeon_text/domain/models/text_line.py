from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from dungeon_text.domain.errors import ConditionCacheNotReadyError, ConditionFormatError
from dungeon_text.domain.models.text_observation import TextObservation


# (condition field on TextLine, observation attribute it is checked against)
TEXT_CONDITION_FIELDS: tuple[tuple[str, str], ...] = (
    ("mental", "mental_state"),
    ("steps_since_text", "steps_since_text"),
    ("open_ratio_recent", "open_ratio_recent"),
    ("wall_contact_recent", "wall_contact_recent"),
    ("new_tiles_recent", "new_tiles_recent"),
    ("backtrack_recent", "backtrack_recent"),
    ("depth_norm", "depth_norm"),
)


@dataclass(frozen=True)
class NumericRange:
    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"NumericRange min cannot exceed max: {self.min} > {self.max}")

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


def _parse_bound(field_name: str, raw_text: str, token: str, label: str, line_id: str | None) -> float:
    try:
        value = float(token.strip())
    except ValueError:
        raise ConditionFormatError(field_name, raw_text, f"condition {label} is invalid", line_id=line_id) from None
    if not math.isfinite(value):
        raise ConditionFormatError(field_name, raw_text, f"condition {label} is invalid", line_id=line_id)
    return value


def parse_numeric_range(
    field_name: str,
    raw_text: str | None,
    *,
    line_id: str | None = None,
) -> Optional[NumericRange]:
    """Parse an authored ``"min-max"`` condition; blank text means no condition."""

    if raw_text is None or not str(raw_text).strip():
        return None

    text = str(raw_text)
    tokens = text.split("-")
    if len(tokens) != 2:
        raise ConditionFormatError(field_name, text, "condition range must be 'min-max'", line_id=line_id)

    low = _parse_bound(field_name, text, tokens[0], "min", line_id)
    high = _parse_bound(field_name, text, tokens[1], "max", line_id)
    if low > high:
        raise ConditionFormatError(field_name, text, "condition range min cannot exceed max", line_id=line_id)
    return NumericRange(low, high)


@dataclass
class TextLine:
    id: str
    weight: int
    cooldown_turns: int
    text: str
    mental: str | None = None
    steps_since_text: str | None = None
    open_ratio_recent: str | None = None
    wall_contact_recent: str | None = None
    new_tiles_recent: str | None = None
    backtrack_recent: str | None = None
    depth_norm: str | None = None
    _ranges: dict[str, Optional[NumericRange]] = field(default_factory=dict, init=False, repr=False, compare=False)
    _cache_ready: bool = field(default=False, init=False, repr=False, compare=False)

    @property
    def is_condition_cache_ready(self) -> bool:
        return self._cache_ready

    def build_condition_cache(self) -> None:
        ranges = {
            field_name: parse_numeric_range(field_name, getattr(self, field_name), line_id=self.id)
            for field_name, _ in TEXT_CONDITION_FIELDS
        }
        self._ranges = ranges
        self._cache_ready = True

    def condition_ranges(self) -> dict[str, Optional[NumericRange]]:
        self._require_cache()
        return dict(self._ranges)

    def is_match(self, observation: TextObservation) -> bool:
        self._require_cache()
        for field_name, observation_attr in TEXT_CONDITION_FIELDS:
            condition = self._ranges.get(field_name)
            if condition is None:
                continue
            if not condition.contains(float(getattr(observation, observation_attr))):
                return False
        return True

    def _require_cache(self) -> None:
        if not self._cache_ready:
            raise ConditionCacheNotReadyError(
                f"TextLine '{self.id or '(none)'}' condition cache is not ready; "
                "build_condition_cache() must be called first"
            )
