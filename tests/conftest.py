from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from timer_relay.errors import DeviceConnectionError

pytest_plugins = ["nicegui.testing.user_plugin"]

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def offline_error() -> DeviceConnectionError:
    return DeviceConnectionError("GET /api/status failed: ConnectError('unreachable')")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove TIMER_RELAY_* variables so config tests start from defaults."""
    for name in list(os.environ):
        if name.startswith("TIMER_RELAY_"):
            monkeypatch.delenv(name, raising=False)
    yield
