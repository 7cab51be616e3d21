from __future__ import annotations

import sys
from pathlib import Path

import pytest

TESTS_ROOT = Path(__file__).resolve().parent
ROOT = TESTS_ROOT.parent

for path in (ROOT, TESTS_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from ingestion.settings import reset_settings_cache  # noqa: E402
from publish.settings import reset_relay_settings_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings_caches(monkeypatch: pytest.MonkeyPatch):
    for name in ("CAR_SOURCES", "TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID", "FEED_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    reset_relay_settings_cache()
    yield
    reset_settings_cache()
    reset_relay_settings_cache()
