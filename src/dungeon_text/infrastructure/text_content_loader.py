from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dungeon_text.application.services.text_condition_preprocessor import build_condition_caches
from dungeon_text.domain.errors import TextContentError
from dungeon_text.domain.models.text_line import TextLine
from dungeon_text.domain.models.text_trigger import TextTriggerBinding, TextTriggerType
from dungeon_text.infrastructure.text_content_lists import TextLineList, TextTriggerBindingList


TEXT_LINES_FILENAME = "text-lines.json"
TEXT_TRIGGER_BINDINGS_FILENAME = "text-trigger-bindings.json"

# authored camelCase key -> TextLine condition field
_CONDITION_KEYS = {
    "mental": "mental",
    "stepsSinceText": "steps_since_text",
    "openRatioRecent": "open_ratio_recent",
    "wallContactRecent": "wall_contact_recent",
    "newTilesRecent": "new_tiles_recent",
    "backtrackRecent": "backtrack_recent",
    "depthNorm": "depth_norm",
}

_logger = logging.getLogger(__name__)


def default_text_content_dir() -> Path:
    project_root = Path(__file__).resolve().parents[3]
    return project_root / "data" / "text"


@dataclass(frozen=True)
class TextContent:
    lines: TextLineList
    bindings: TextTriggerBindingList

    def dangling_binding_ids(self) -> list[str]:
        return [
            binding.id
            for binding in self.bindings
            if not binding.text_line_id.strip() or not self.lines.contains_id(binding.text_line_id)
        ]


def _read_json_list(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        raise TextContentError(f"Text content file not found: {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TextContentError(f"Invalid JSON in {path.name}: {exc}") from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise TextContentError(f"Could not read {path.name}: {exc}") from exc
    if not isinstance(payload, list):
        raise TextContentError(f"{path.name} must contain a JSON array")
    for index, row in enumerate(payload):
        if not isinstance(row, dict):
            raise TextContentError(f"{path.name}[{index}] must be an object")
    return payload


def _read_int(row: dict[str, Any], key: str, *, owner: str) -> int:
    value = row.get(key, 0)
    if isinstance(value, bool):
        raise TextContentError(f"{owner}.{key} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise TextContentError(f"{owner}.{key} must be an integer")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise TextContentError(f"{owner}.{key} must be an integer") from None


def _read_optional_text(row: dict[str, Any], key: str, *, owner: str) -> str | None:
    value = row.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TextContentError(f"{owner}.{key} must be a 'min-max' string")
    return value


def parse_text_line(row: dict[str, Any], *, owner: str) -> TextLine:
    conditions = {
        field_name: _read_optional_text(row, key, owner=owner)
        for key, field_name in _CONDITION_KEYS.items()
    }
    return TextLine(
        id=str(row.get("id") or ""),
        weight=_read_int(row, "weight", owner=owner),
        cooldown_turns=_read_int(row, "cooldownTurns", owner=owner),
        text=str(row.get("text") or ""),
        **conditions,
    )


def parse_text_trigger_binding(row: dict[str, Any], *, owner: str) -> TextTriggerBinding:
    try:
        trigger_type = TextTriggerType.parse(row.get("triggerType"))
    except ValueError as exc:
        raise TextContentError(f"{owner}.triggerType: {exc}") from exc
    return TextTriggerBinding(
        id=str(row.get("id") or ""),
        trigger_type=trigger_type,
        text_line_id=str(row.get("textLineId") or ""),
    )


def load_text_content(content_dir: str | Path) -> TextContent:
    """Load, preprocess and index the authored text lines and trigger bindings.

    Raises ``TextContentError`` (or its ``ConditionFormatError`` subclass) for
    any malformed file, row, id or condition range.
    """

    root = Path(content_dir)
    lines_path = root / TEXT_LINES_FILENAME
    bindings_path = root / TEXT_TRIGGER_BINDINGS_FILENAME

    lines = [
        parse_text_line(row, owner=f"{lines_path.name}[{index}]")
        for index, row in enumerate(_read_json_list(lines_path))
    ]
    bindings = [
        parse_text_trigger_binding(row, owner=f"{bindings_path.name}[{index}]")
        for index, row in enumerate(_read_json_list(bindings_path))
    ]

    build_condition_caches(lines)
    content = TextContent(lines=TextLineList(lines), bindings=TextTriggerBindingList(bindings))

    dangling = content.dangling_binding_ids()
    if dangling:
        _logger.warning(
            "Text trigger bindings reference unknown lines and will be ignored",
            extra={"binding_ids": dangling, "content_dir": str(root)},
        )
    _logger.info(
        "Text content loaded",
        extra={"line_count": len(content.lines), "binding_count": len(content.bindings), "content_dir": str(root)},
    )
    return content
