"""Shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _clear_policy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's environment from changing the parser policy."""
    monkeypatch.delenv("ABPRULES_UNKNOWN_OPTIONS", raising=False)
