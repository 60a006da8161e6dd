# trend_engine.py
# Market-level view of the sentiment history:
# - mean score, population-stdev volatility, label counts
# - Bullish/Bearish/Neutral status and a Low/Medium/High risk bucket
# - per-result trend points for the charts (volume is simulated)

import math
import random
from typing import List, Optional, Sequence

import pandas as pd

from config import HIGH_RISK_VOLATILITY, MARKET_STATUS_THRESHOLD, MEDIUM_RISK_VOLATILITY
from models import MarketMetrics, MarketTrend, SentimentResult

_COUNT_KEYS = {"positive": "bullish", "negative": "bearish", "neutral": "neutral"}


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def population_stdev(values: Sequence[float], center: Optional[float] = None) -> float:
    if center is None:
        center = mean(values)
    return math.sqrt(sum((v - center) ** 2 for v in values) / len(values))


def compute_market_metrics(history: Sequence[SentimentResult]) -> Optional[MarketMetrics]:
    """
    history: SentimentResults in chronological order
    returns: MarketMetrics, or None when there is nothing to aggregate yet
    """
    if not history:
        return None

    scores = [r.score for r in history]
    avg = mean(scores)

    counts = {"bullish": 0, "bearish": 0, "neutral": 0}
    for r in history:
        counts[_COUNT_KEYS.get(r.sentiment, "neutral")] += 1

    return MarketMetrics(
        avg_sentiment=avg,
        volatility=population_stdev(scores, avg),
        bullish_count=counts["bullish"],
        bearish_count=counts["bearish"],
        neutral_count=counts["neutral"],
        avg_confidence=mean([r.confidence for r in history]),
        total=len(history),
    )


def market_status(avg_sentiment: float) -> str:
    if avg_sentiment > MARKET_STATUS_THRESHOLD:
        return "Bullish"
    if avg_sentiment < -MARKET_STATUS_THRESHOLD:
        return "Bearish"
    return "Neutral"


def risk_level(volatility: float) -> str:
    if volatility > HIGH_RISK_VOLATILITY:
        return "High"
    if volatility > MEDIUM_RISK_VOLATILITY:
        return "Medium"
    return "Low"


def build_market_trends(history: Sequence[SentimentResult], rng: Optional[random.Random] = None) -> List[MarketTrend]:
    rng = rng or random.Random()
    return [
        MarketTrend(
            timestamp=r.timestamp,
            sentiment_score=r.score,
            volume=rng.random() * 1_000_000 + 500_000,
            volatility=abs(r.score) * rng.random() * 0.5,
        )
        for r in history
    ]


def trends_frame(trends: Sequence[MarketTrend]) -> pd.DataFrame:
    # T1..Tn labels keep repeated timestamps apart on the chart axis
    df = pd.DataFrame(
        {
            "Sentiment Score": [t.sentiment_score for t in trends],
            "Volume": [t.volume for t in trends],
            "Volatility": [t.volatility for t in trends],
        },
        index=[f"T{i + 1}" for i in range(len(trends))],
    )
    df.index.name = "Point"
    return df


def label_counts_frame(metrics: MarketMetrics) -> pd.DataFrame:
    return pd.DataFrame(
        {"Count": [metrics.bullish_count, metrics.bearish_count, metrics.neutral_count]},
        index=pd.Index(["Bullish", "Bearish", "Neutral"], name="Sentiment"),
    )
