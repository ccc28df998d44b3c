import os
import sys
import tempfile
from pathlib import Path

import pytest

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storage.migrate import migrate
from config.settings import settings
from config.registry import bind_model, COMPLETION_KEY


class FakeCompletion:
    """Records every upstream call and replays canned replies."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    async def __call__(self, messages, *, max_tokens):
        self.calls.append({"messages": messages, "max_tokens": max_tokens})
        if self.replies:
            reply = self.replies.pop(0)
            if isinstance(reply, Exception):
                raise reply
            return reply
        return f"Question {len(self.calls)}?"


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    try:
        yield
    finally:
        td.cleanup()


@pytest.fixture
def fake_completion():
    fake = FakeCompletion()
    bind_model(COMPLETION_KEY, fake)
    return fake


@pytest.fixture
def no_backoff(monkeypatch):
    monkeypatch.setattr(settings, "BASE_DELAY_MS", 0, raising=False)
    return settings
