from datetime import datetime, timezone

import pytest

from models import SentimentResult
from sentiment_model import KeywordScorer, classify_score


@pytest.fixture
def scorer():
    return KeywordScorer().initialize()


@pytest.fixture
def make_result():
    """Build a SentimentResult with a label consistent with its score."""

    def _make(score, confidence=0.5, sectors=(), sentiment=None, text="headline"):
        label, impact = classify_score(score)
        return SentimentResult(
            text=text,
            sentiment=sentiment or label,
            confidence=confidence,
            score=score,
            timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
            market_impact=impact,
            sectors=tuple(sectors),
        )

    return _make
