# sentiment_model.py
# Explainable headline scoring:
# - Score: weighted bullish/bearish keyword hits (or VADER compound, if configured)
# - Label + market impact: fixed thresholds on the score
# - Batch: score every headline, attach results only if all succeed

import logging
import math
from collections import Counter
from dataclasses import replace
from typing import List, Sequence, Tuple

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from config import (
    BASE_CONFIDENCE,
    BEARISH_WORDS,
    BULLISH_WORDS,
    HIGH_IMPACT_THRESHOLD,
    KEYWORD_WEIGHT,
    LABEL_THRESHOLD,
    SCORER_BACKEND,
    SECTORS,
)
from errors import AggregationFailure, ScoringInputError
from models import NewsItem, SentimentResult
from utils import utc_now

logger = logging.getLogger(__name__)


def _as_text(text) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        raise ScoringInputError(
            "Text to score must be a string",
            details={"type": type(text).__name__},
        )
    return text


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def confidence_for(score: float) -> float:
    return min(1.0, abs(score) + BASE_CONFIDENCE)


def classify_score(score: float) -> Tuple[str, str]:
    """
    Map a score to (sentiment, market_impact). Bounds are exclusive, so
    exactly +/-0.3 stays neutral and exactly +/-0.7 stays medium.
    """
    if score > LABEL_THRESHOLD:
        return "positive", "high" if score > HIGH_IMPACT_THRESHOLD else "medium"
    if score < -LABEL_THRESHOLD:
        return "negative", "high" if score < -HIGH_IMPACT_THRESHOLD else "medium"
    return "neutral", "low"


def extract_sectors(text: str) -> Tuple[str, ...]:
    t = _as_text(text).lower()
    return tuple(s for s in SECTORS if s in t)


class KeywordScorer:
    """Counts bullish/bearish keyword hits, damped by sqrt of the hit count."""

    name = "keyword"

    def __init__(self, bullish_words: Sequence[str] = BULLISH_WORDS, bearish_words: Sequence[str] = BEARISH_WORDS):
        self._raw_bullish = bullish_words
        self._raw_bearish = bearish_words
        self.bullish_words: Tuple[str, ...] = ()
        self.bearish_words: Tuple[str, ...] = ()
        self.ready = False

    def initialize(self) -> "KeywordScorer":
        if not self.ready:
            self.bullish_words = tuple(w.lower() for w in self._raw_bullish)
            self.bearish_words = tuple(w.lower() for w in self._raw_bearish)
            self.ready = True
        return self

    def raw_score(self, text: str) -> float:
        if not self.ready:
            raise RuntimeError("KeywordScorer used before initialize()")
        t = _as_text(text).lower()
        total = 0.0
        matches = 0

        for word in self.bullish_words:
            hits = t.count(word)
            total += hits * KEYWORD_WEIGHT
            matches += hits
        for word in self.bearish_words:
            hits = t.count(word)
            total -= hits * KEYWORD_WEIGHT
            matches += hits

        if matches == 0:
            return 0.0
        return clamp(total / math.sqrt(matches))

    def score(self, text: str) -> Tuple[str, float, float]:
        s = self.raw_score(text)
        label, _ = classify_score(s)
        return label, s, confidence_for(s)


class VaderScorer:
    """VADER compound score run through the same thresholds as the keyword scorer."""

    name = "vader"

    def __init__(self):
        self._analyzer = None

    @property
    def ready(self) -> bool:
        return self._analyzer is not None

    def initialize(self) -> "VaderScorer":
        if self._analyzer is None:
            self._analyzer = SentimentIntensityAnalyzer()
        return self

    def score(self, text: str) -> Tuple[str, float, float]:
        if self._analyzer is None:
            raise RuntimeError("VaderScorer used before initialize()")
        t = _as_text(text)
        s = clamp(float(self._analyzer.polarity_scores(t)["compound"]))
        label, _ = classify_score(s)
        return label, s, confidence_for(s)


SCORERS = {
    KeywordScorer.name: KeywordScorer,
    VaderScorer.name: VaderScorer,
}


def build_scorer(name: str = SCORER_BACKEND):
    try:
        cls = SCORERS[name]
    except KeyError:
        raise ValueError(f"Unknown scorer backend {name!r}; expected one of {sorted(SCORERS)}") from None
    logger.info("Initializing %s scorer", name)
    return cls().initialize()


def analyze_text(text: str, scorer) -> SentimentResult:
    text = _as_text(text)
    label, score, confidence = scorer.score(text)
    _, impact = classify_score(score)

    return SentimentResult(
        text=text,
        sentiment=label,
        confidence=float(confidence),
        score=float(score),
        timestamp=utc_now(),
        market_impact=impact,
        sectors=extract_sectors(text),
    )


def analyze_batch(items: Sequence[NewsItem], scorer) -> List[NewsItem]:
    """
    Score every headline and return copies of the items with the result
    attached, in input order. Any failure aborts the whole batch with
    AggregationFailure; the input items are never touched.
    """
    results = []
    for i, item in enumerate(items):
        try:
            results.append(analyze_text(item.headline, scorer))
        except Exception as exc:
            item_id = getattr(item, "id", None)
            logger.exception("Batch scoring failed at item %d (%s)", i, item_id)
            raise AggregationFailure(
                f"Scoring failed for item {i}: {exc}",
                index=i,
                item_id=item_id,
                details={"batch_size": len(items)},
            ) from exc

    scored = [replace(item, sentiment=r) for item, r in zip(items, results)]

    counts = Counter(r.sentiment for r in results)
    logger.info(
        "Scored %d headlines (positive=%d negative=%d neutral=%d)",
        len(scored), counts["positive"], counts["negative"], counts["neutral"],
    )
    return scored
