# risk_engine.py
# Portfolio view over the most recent results:
# - overall sentiment + confidence over a fixed window
# - risk score from score dispersion inside the window
# - buy/sell/hold recommendation and per-sector impact ranking

import logging
from typing import Dict, List, Optional, Sequence

from config import (
    ACTION_CONFIDENCE_THRESHOLD,
    ACTION_SENTIMENT_THRESHOLD,
    RISK_WINDOW,
    SECTOR_SENTIMENT_THRESHOLD,
)
from models import PortfolioImpact, SectorImpact, SentimentResult
from trend_engine import mean, population_stdev

logger = logging.getLogger(__name__)


def recent_window(history: Sequence[SentimentResult], size: int = RISK_WINDOW) -> List[SentimentResult]:
    if size <= 0:
        return []
    return list(history[-size:])


def recommend_action(avg_sentiment: float, avg_confidence: float) -> str:
    if avg_confidence > ACTION_CONFIDENCE_THRESHOLD:
        if avg_sentiment > ACTION_SENTIMENT_THRESHOLD:
            return "buy"
        if avg_sentiment < -ACTION_SENTIMENT_THRESHOLD:
            return "sell"
    return "hold"


def sector_label(impact: float) -> str:
    if impact > SECTOR_SENTIMENT_THRESHOLD:
        return "positive"
    if impact < -SECTOR_SENTIMENT_THRESHOLD:
        return "negative"
    return "neutral"


def _display_name(sector: str) -> str:
    return sector[:1].upper() + sector[1:]


def sector_impacts(window: Sequence[SentimentResult]) -> List[SectorImpact]:
    # each tagged sector gets the full score of the result
    totals: Dict[str, List[float]] = {}
    for r in window:
        for sector in r.sectors or ():
            bucket = totals.setdefault(sector, [0, 0.0])
            bucket[0] += 1
            bucket[1] += r.score

    impacts = [
        SectorImpact(sector=_display_name(sector), impact=total / count, sentiment=sector_label(total / count))
        for sector, (count, total) in totals.items()
    ]
    impacts.sort(key=lambda s: abs(s.impact), reverse=True)
    return impacts


def assess_portfolio(history: Sequence[SentimentResult], window_size: int = RISK_WINDOW) -> Optional[PortfolioImpact]:
    """
    Returns None until at least one result exists.
    """
    window = recent_window(history, window_size)
    if not window:
        return None

    avg_sentiment = mean([r.score for r in window])
    avg_confidence = mean([r.confidence for r in window])
    risk_score = population_stdev([r.score for r in window], avg_sentiment) * 100

    impact = PortfolioImpact(
        overall_sentiment=avg_sentiment,
        risk_score=risk_score,
        recommended_action=recommend_action(avg_sentiment, avg_confidence),
        confidence=avg_confidence,
        impacted_sectors=sector_impacts(window),
    )
    logger.debug(
        "Portfolio assessment over %d results: action=%s risk=%.2f",
        len(window), impact.recommended_action, impact.risk_score,
    )
    return impact
