"""Replay a recorded sequence of turns through the text line selector.

Usage examples:
    python -m dungeon_text --turns data/text/sample-turns.json
    python -m dungeon_text --turns turns.json --content data/text --seed 7 --show-cooldowns
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv
from rich.console import Console

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from dungeon_text.bootstrap import create_text_line_coordinator
from dungeon_text.domain.models.text_observation import TextObservation
from dungeon_text.domain.models.text_trigger import TextTriggerType
from dungeon_text.presentation.text_feed import render_cooldowns, render_turn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay recorded turns through the flavour text selector")
    parser.add_argument("--turns", required=True, help="JSON array of {observation, trigger} turn records")
    parser.add_argument("--content", default=None, help="Text content directory (default: RPG_TEXT_CONTENT_DIR or data/text)")
    parser.add_argument("--seed", type=int, default=None, help="Session seed (default: RPG_TEXT_SEED, else unseeded)")
    parser.add_argument("--show-cooldowns", action="store_true", help="Print the cooldown ledger after every turn")
    return parser


def load_turn_records(path: str | Path) -> list[tuple[TextObservation, TextTriggerType | None]]:
    source = Path(path)
    if not source.exists():
        raise ValueError(f"Turn file not found: {source}")
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {source.name}: {exc}") from exc
    except (UnicodeDecodeError, OSError) as exc:
        raise ValueError(f"Could not read {source.name}: {exc}") from exc
    if not isinstance(payload, list):
        raise ValueError(f"{source.name} must contain a JSON array")

    records: list[tuple[TextObservation, TextTriggerType | None]] = []
    for index, row in enumerate(payload):
        if not isinstance(row, dict):
            raise ValueError(f"{source.name}[{index}] must be an object")
        observation = row.get("observation")
        if observation is not None and not isinstance(observation, dict):
            raise ValueError(f"{source.name}[{index}].observation must be an object")
        trigger = row.get("trigger")
        trigger_type = TextTriggerType.parse(trigger) if trigger else None
        records.append((TextObservation.from_mapping(observation), trigger_type))
    return records


def _configure_logging() -> None:
    level_name = os.getenv("RPG_LOG_LEVEL", "WARNING").strip().upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    load_dotenv()
    _configure_logging()
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    out = console or Console()

    try:
        records = load_turn_records(args.turns)
        coordinator = create_text_line_coordinator(content_dir=args.content, seed=args.seed)
    except ValueError as exc:
        out.print("[bold red]Replay could not start.[/bold red]")
        out.print(f"Reason: {exc}", markup=False)
        return 1

    for turn_no, (observation, trigger_type) in enumerate(records, start=1):
        line = coordinator.select_text_line(observation, trigger_type)
        render_turn(out, turn_no, observation, line, trigger_type, source=coordinator.last_selection_source)
        if args.show_cooldowns:
            render_cooldowns(out, coordinator.cooldown_remaining)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
