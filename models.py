# models.py
# Records passed between the scorer, the aggregators and the dashboard.

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class SentimentResult:
    text: str
    sentiment: str                # positive / negative / neutral
    confidence: float             # 0..1
    score: float                  # -1..+1, negative is bearish
    timestamp: datetime
    market_impact: str            # low / medium / high
    sectors: Tuple[str, ...] = ()


@dataclass
class NewsItem:
    id: str
    headline: str
    source: str
    timestamp: datetime
    category: str
    sentiment: Optional[SentimentResult] = None
    url: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class MarketTrend:
    timestamp: datetime
    sentiment_score: float
    volume: float                 # simulated
    volatility: float             # simulated


@dataclass(frozen=True)
class MarketMetrics:
    avg_sentiment: float
    volatility: float             # population stdev of scores
    bullish_count: int
    bearish_count: int
    neutral_count: int
    avg_confidence: float
    total: int


@dataclass(frozen=True)
class SectorImpact:
    sector: str
    impact: float                 # mean score of tagged results
    sentiment: str


@dataclass(frozen=True)
class PortfolioImpact:
    overall_sentiment: float
    risk_score: float
    recommended_action: str       # buy / sell / hold
    confidence: float
    impacted_sectors: List[SectorImpact] = field(default_factory=list)
