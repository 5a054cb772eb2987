"""Shared test fixtures and configuration."""

import os
from pathlib import Path
import sys

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Deterministic engine configuration for every test
TEST_ENV = {
    "PREFIX_SEARCH_STOP_WORDS": "at,to,we,my,as,is,in,am,i,he,she,that,the,them,a",
    "PREFIX_SEARCH_MIN_WORD_LENGTH": "2",
    "PREFIX_SEARCH_DEFAULT_MATCH_MODE": "all",
    "PREFIX_SEARCH_CLEAR_RESETS_KEY_STORE": "false",
    "PREFIX_SEARCH_INDEX_NAME": "test",
    "PREFIX_SEARCH_LOG_LEVEL": "info",
    "PREFIX_SEARCH_LOG_JSON": "true",
}


for key, value in TEST_ENV.items():
    os.environ[key] = value


from prefix_search.engine import PrefixSearchEngine


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset PREFIX_SEARCH_* variables to the test defaults before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def engine() -> PrefixSearchEngine:
    return PrefixSearchEngine(name="test")


@pytest.fixture
def quotes_engine(engine: PrefixSearchEngine) -> PrefixSearchEngine:
    """Engine loaded with the three sample documents."""
    engine.add("Instant search in Google is awesome!", "quote")
    engine.add("It will work fine after you install that patch.", "instruction")
    engine.add("I bought a red car.", "mid-life crisis")
    return engine
