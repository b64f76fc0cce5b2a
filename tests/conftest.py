from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import docstore...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeClock:
    """Stands in for time.time() so backup decisions are deterministic."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "db.json"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db(db_path: Path):
    from docstore import Database

    database = Database(db_path)
    yield database
    database.close()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Drop DOCSTORE_* variables so settings tests see the defaults.
    """
    for name in (
        "DOCSTORE_PATH",
        "DOCSTORE_FORMATTING",
        "DOCSTORE_BACKUPS",
        "DOCSTORE_BACKUP_DIR",
        "DOCSTORE_STRICT_VALUES",
    ):
        monkeypatch.delenv(name, raising=False)
