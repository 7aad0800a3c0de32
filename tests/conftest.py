"""Pytest configuration and fixtures for lexisent tests."""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Keep CLI output free of log lines before importing modules
os.environ.setdefault("LOG_LEVEL", "WARNING")

from lexisent import config
from lexisent.core.events import SentimentResult
from lexisent.sentiment.lexicon import Lexicon
from lexisent.sentiment.scorer import LexiconSentimentScorer
from lexisent.session.history import AnalysisHistory


@pytest.fixture
def scorer() -> LexiconSentimentScorer:
    """Create a scorer over the built-in lexicon."""
    return LexiconSentimentScorer()


@pytest.fixture
def small_lexicon() -> Lexicon:
    """Create a tiny lexicon for injection tests."""
    return Lexicon.from_words(
        positive=["sunny", "warm"],
        negative=["rainy", "cold"],
        neutral=["cloudy"],
    )


@pytest.fixture
def lexicon_file(tmp_path: Path) -> Path:
    """Write a custom lexicon JSON file."""
    path = tmp_path / "lexicon.json"
    path.write_text(
        json.dumps({"positive": ["Yay", " woo "], "negative": ["boo"], "neutral": ["meh"]}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_result() -> SentimentResult:
    """Create a fixed SentimentResult."""
    return SentimentResult(
        sentiment="positive",
        confidence=0.9,
        positive_score=1.0,
        negative_score=0.0,
        neutral_score=0.0,
        word_count=3,
        timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


@pytest.fixture
def history() -> AnalysisHistory:
    """Create an empty history with the default capacity."""
    return AnalysisHistory()


@pytest.fixture(autouse=True)
def reset_global_config():
    """Drop cached settings and lexicon around every test."""
    config._settings = None
    config._lexicons.clear()
    yield
    config._settings = None
    config._lexicons.clear()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers and level that setup_logging() installs on the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
