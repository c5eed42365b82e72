"""Integration-test fixtures.

Every test starts with an empty snapshot store, no playback session, a
private upload directory and a small sample budget so strides are visible
with short files.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from config.settings import settings
from src.dr_playback.application import service as playback_service
from src.dr_store.domain import store as store_module


@pytest.fixture(autouse=True)
async def fresh_state(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> AsyncGenerator[None, None]:
    monkeypatch.setattr(store_module, "_store", None)
    monkeypatch.setattr(playback_service, "_manager", None)
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "SAMPLE_BUDGET", 10)
    yield
    await playback_service.get_playback_manager().shutdown()
