"""Root conftest — runs before any test module imports."""

import os

import pytest

# Rich honours FORCE_COLOR even when writing to a pipe, which breaks tests
# that parse CLI stdout as JSON. Clear it before any Console is created.
os.environ.pop("FORCE_COLOR", None)
os.environ["NO_COLOR"] = "1"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the user's config and progress cache."""
    for var in (
        "WORDPACE_TIMEZONE",
        "WORDPACE_DEFAULT_WORD_GOAL",
        "WORDPACE_CACHE_TTL",
        "WORDPACE_CACHE_ENABLED",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("WORDPACE_CACHE_PATH", str(tmp_path / "cache" / "progress.json"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
