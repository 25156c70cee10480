"""Shared pytest fixtures for the full mdtidy test suite."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_mdtidy_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove `MDTIDY_*` variables so the host environment cannot leak into runs."""

    for key in list(os.environ):
        if key.startswith("MDTIDY_"):
            monkeypatch.delenv(key, raising=False)
