import os
import random

import pytest

# widgets are built without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from app.session import TypingSession
from services.corpus import Passage, TextCorpus


class FakeClock:
    """Deterministic stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_session(clock):
    """Build a session over plain passages (no categories)."""
    def _make(*texts, seed: int = 0):
        corpus = TextCorpus([Passage(content=t, attribution="test") for t in texts])
        return TypingSession(corpus, rng=random.Random(seed), clock=clock)
    return _make


@pytest.fixture
def typing_session(make_session):
    """Session already in the typing state on a single passage."""
    def _make(text: str):
        session = make_session(text)
        session.start()
        return session
    return _make


@pytest.fixture
def categorized_corpus():
    return TextCorpus([
        Passage("alpha one", "x", "a"),
        Passage("bravo one", "x", "b"),
        Passage("alpha two", "x", "a"),
        Passage("plain text", "x", ""),
    ])
