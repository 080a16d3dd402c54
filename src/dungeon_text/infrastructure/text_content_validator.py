"""Validate data/text flavour-line content.

Usage examples:
    python -m dungeon_text.infrastructure.text_content_validator
    python -m dungeon_text.infrastructure.text_content_validator --path data/text
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from dungeon_text.application.services.text_selection_rules import can_use_line
from dungeon_text.domain.errors import TextContentError
from dungeon_text.infrastructure.text_content_loader import default_text_content_dir, load_text_content


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Validate text line and trigger binding JSON content")
    parser.add_argument(
        "--path",
        default=str(default_text_content_dir()),
        help="Directory holding text-lines.json and text-trigger-bindings.json",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Also report trigger bindings whose textLineId matches no line",
    )
    return parser


def validate_text_content(content_dir: str | Path, *, strict: bool = False) -> list[str]:
    source = Path(content_dir)
    if not source.is_dir():
        return [f"Directory not found: {source}"]

    try:
        content = load_text_content(source)
    except TextContentError as exc:
        return [str(exc)]

    errors: list[str] = []
    for line in content.lines:
        if can_use_line(line):
            continue
        if int(line.weight) <= 0:
            errors.append(f"TextLine '{line.id}' weight must be greater than 0")
        if int(line.cooldown_turns) < 0:
            errors.append(f"TextLine '{line.id}' cooldownTurns cannot be negative")
        if not line.text.strip():
            errors.append(f"TextLine '{line.id}' text is required")
    if strict:
        for binding_id in content.dangling_binding_ids():
            errors.append(f"TextTriggerBinding '{binding_id}' references an unknown text line")
    return errors


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    errors = validate_text_content(args.path, strict=args.strict)
    if errors:
        print(f"Text content invalid ({len(errors)} errors):")
        for message in errors:
            print(f"- {message}")
        return 1

    print("Text content valid.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
