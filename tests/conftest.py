"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer credentials and overrides out of the tests."""

    for name in (
        "OPENROUTER_API_KEY",
        "REFERENT_BASE_URL",
        "REFERENT_MODEL",
        "REFERENT_OUTPUT_LANGUAGE",
        "REFERENT_FETCH_TIMEOUT",
        "REFERENT_COMPLETION_TIMEOUT",
        "REFERENT_MAX_CONTENT_LENGTH",
    ):
        monkeypatch.delenv(name, raising=False)
