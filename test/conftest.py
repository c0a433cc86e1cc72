from __future__ import annotations

import pytest

TICKETDIR_ENV = (
    "TICKETDIR_POLICY",
    "TICKETDIR_BASE_DIR",
    "TICKETDIR_PUNCTUATION",
    "TICKETDIR_JOIN_TOKEN",
    "TICKETDIR_WORD_SEPARATOR",
    "TICKETDIR_LOWERCASE",
    "TICKETDIR_TEMPLATE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TICKETDIR_* settings of the developer's shell out of the tests."""
    for name in TICKETDIR_ENV:
        monkeypatch.delenv(name, raising=False)
