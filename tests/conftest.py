from __future__ import annotations

import pytest

import logging_config
from settings import get_settings


@pytest.fixture(autouse=True)
def _isolate_configuration(monkeypatch):
    # CliRunner swaps sys.stderr per invocation; keep the root handler out of it.
    monkeypatch.setattr(logging_config, "_configured", True)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
