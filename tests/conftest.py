import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolated_text_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("RPG_TEXT_CONTENT_DIR", raising=False)
    monkeypatch.delenv("RPG_TEXT_SEED", raising=False)
    monkeypatch.setenv("RPG_LOG_LEVEL", "WARNING")


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("dungeon_text.__main__.load_dotenv", lambda *_args, **_kwargs: False)
