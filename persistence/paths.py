from __future__ import annotations

from pathlib import Path

PEOPLE_FILE_NAME = "people.json"


def project_root() -> Path:
    # persistence/paths.py -> persistence -> project root
    return Path(__file__).resolve().parents[1]


def data_dir() -> Path:
    # Not created here; the first write creates it.
    return project_root() / "data"


def default_people_path() -> Path:
    return data_dir() / PEOPLE_FILE_NAME
