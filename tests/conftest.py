"""Shared fixtures: isolate every test from the developer's DEADREF_* settings."""

import pytest

from deadref import config


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Strip DEADREF_* variables and drop the cached Config.

    setenv before delenv makes monkeypatch remove anything a test's .env file
    loads into os.environ.
    """
    for name in ("DEADREF_VERBOSE", "DEADREF_MEMBER_DELIMITER", "DEADREF_FORCE_TERMINAL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    config.reset_config()
    yield
    config.reset_config()
