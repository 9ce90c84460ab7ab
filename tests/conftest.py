from __future__ import annotations

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    sleep = AsyncMock()
    monkeypatch.setattr("casprop_toolkit.pubchem.retry.asyncio.sleep", sleep)
    return sleep


@pytest.fixture
def write_csv(tmp_path):
    def _write(name: str, text: str):
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return p

    return _write
