from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def people_path(tmp_path: Path) -> Path:
    """Backing file inside a per-test temp dir so tests never touch real ./data."""
    return tmp_path / "data" / "people.json"


@pytest.fixture
def store(people_path: Path):
    from persistence.person_state import PersonStore

    return PersonStore.open(people_path)


@pytest.fixture
def settings(people_path: Path):
    from settings import Settings

    return Settings(
        person_db_path=people_path,
        host="127.0.0.1",
        port=8080,
        log_level="DEBUG",
        debug_log_requests=True,
    )


@pytest.fixture
def client(settings):
    """TestClient with lifespan running, so the store is opened from settings."""
    from fastapi.testclient import TestClient

    import app as app_module

    with TestClient(app_module.create_app(settings)) as c:
        yield c
