import os
from pathlib import Path

from dungeon_text.application.services.seed_policy import session_text_rngs
from dungeon_text.application.services.text_selection_coordinator import TextLineSelectionCoordinator
from dungeon_text.infrastructure.text_content_loader import default_text_content_dir, load_text_content


def _configured_content_dir() -> Path:
    configured = os.getenv("RPG_TEXT_CONTENT_DIR", "").strip()
    if configured:
        return Path(configured)
    return default_text_content_dir()


def _configured_seed() -> int | None:
    raw = os.getenv("RPG_TEXT_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"RPG_TEXT_SEED must be an integer, got {raw!r}") from None


def create_text_line_coordinator(
    content_dir: str | Path | None = None,
    seed: int | None = None,
) -> TextLineSelectionCoordinator:
    source = Path(content_dir) if content_dir is not None else _configured_content_dir()
    session_seed = seed if seed is not None else _configured_seed()
    content = load_text_content(source)

    ambient_rng = trigger_rng = None
    if session_seed is not None:
        ambient_rng, trigger_rng = session_text_rngs(session_seed)

    return TextLineSelectionCoordinator(
        list(content.lines),
        list(content.bindings),
        ambient_rng=ambient_rng,
        trigger_rng=trigger_rng,
    )
