"""Pytest configuration shared by the store, backup and API tests.

Makes the project root importable (``import app``, ``import core``) and keeps
log files out of the working tree.
"""

import os
import sys
import tempfile

import pytest

# Project root = parent directory of this tests/ folder
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Must be set before config.logging_config is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="deckstore-logs-"))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config loader at an empty ini so only env vars/defaults apply."""
    from config import config_loader

    monkeypatch.setenv("CONFIG_FILE", str(tmp_path / "missing.ini"))
    for var in ("DATA_DIR", "STORE_BACKEND", "BACKUP_DIR", "BACKUP_KEEP"):
        monkeypatch.delenv(var, raising=False)
    config_loader.reset_config_cache()
    yield
    config_loader.reset_config_cache()


@pytest.fixture
def json_stores(tmp_path):
    from app.services.job_manager import build_stores

    return build_stores({
        "backend": "json",
        "jobs_path": tmp_path / "data" / "jobs.json",
        "decks_path": tmp_path / "data" / "decks.json",
    })


@pytest.fixture
def sample_deck():
    return {
        "id": "d1",
        "title": "Cardiology",
        "cards": [{"question": "Q", "answer": "A"}],
        "mcqs": [
            {
                "stem": "Which valve?",
                "choices": [{"label": "A", "text": "Mitral"}, {"label": "B", "text": "Aortic"}],
                "correctLabel": "A",
                "explanation": "Left AV valve.",
            }
        ],
    }
