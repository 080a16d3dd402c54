from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class TextObservation:
    mental_state: int = 0
    steps_since_text: int = 0
    open_ratio_recent: float = 0.0
    wall_contact_recent: float = 0.0
    new_tiles_recent: int = 0
    backtrack_recent: float = 0.0
    depth_norm: float = 0.0

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object] | None) -> "TextObservation":
        """Build an observation from a snake_case or camelCase mapping; missing keys read as 0."""

        row = payload or {}
        if not isinstance(row, Mapping):
            raise ValueError(f"Observation must be a mapping, got {type(row).__name__}")

        def _read(snake_key: str, camel_key: str) -> object:
            if snake_key in row:
                return row[snake_key]
            return row.get(camel_key, 0)

        try:
            return cls(
                mental_state=int(_read("mental_state", "mentalState") or 0),
                steps_since_text=int(_read("steps_since_text", "stepsSinceText") or 0),
                open_ratio_recent=float(_read("open_ratio_recent", "openRatioRecent") or 0.0),
                wall_contact_recent=float(_read("wall_contact_recent", "wallContactRecent") or 0.0),
                new_tiles_recent=int(_read("new_tiles_recent", "newTilesRecent") or 0),
                backtrack_recent=float(_read("backtrack_recent", "backtrackRecent") or 0.0),
                depth_norm=float(_read("depth_norm", "depthNorm") or 0.0),
            )
        except TypeError as exc:
            raise ValueError(f"Observation values must be numeric: {exc}") from None
