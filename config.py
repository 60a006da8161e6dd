# config.py
# All user-editable configuration lives here.

import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# "keyword" (transparent heuristic) or "vader" (VADER compound score)
SCORER_BACKEND = os.getenv("SCORER_BACKEND", "keyword").lower()

# Keyword heuristic
KEYWORD_WEIGHT = 0.5      # contribution of a single keyword hit
BASE_CONFIDENCE = 0.2     # confidence of a text with no signal

BULLISH_WORDS = [
    "growth", "profit", "gain", "bull", "rise", "increase", "positive",
    "strong", "good", "buy", "upgrade", "surge", "rally",
]
BEARISH_WORDS = [
    "loss", "decline", "fall", "bear", "drop", "decrease", "negative",
    "weak", "bad", "sell", "downgrade", "crash", "plunge",
]

SECTORS = [
    "technology", "healthcare", "finance", "energy", "consumer",
    "industrial", "materials", "utilities", "real estate", "telecom",
]

# Per-item classification (exclusive bounds)
LABEL_THRESHOLD = 0.3         # |score| above this is positive/negative
HIGH_IMPACT_THRESHOLD = 0.7   # |score| above this is high impact

# History-level market status. Kept separate from LABEL_THRESHOLD on purpose.
MARKET_STATUS_THRESHOLD = 0.2

# Volatility buckets
HIGH_RISK_VOLATILITY = 0.5
MEDIUM_RISK_VOLATILITY = 0.2

# Portfolio risk
RISK_WINDOW = 10                    # most recent results considered
ACTION_SENTIMENT_THRESHOLD = 0.3
ACTION_CONFIDENCE_THRESHOLD = 0.7
SECTOR_SENTIMENT_THRESHOLD = 0.1

# News feeds (free RSS). If any fail, the others still count.
RSS_FEEDS = {
    "Yahoo Finance": "https://feeds.finance.yahoo.com/rss/2.0/headline",
    "Yahoo Finance Markets": "https://feeds.finance.yahoo.com/rss/2.0/category-markets",
    "MarketWatch": "https://feeds.marketwatch.com/marketwatch/realtimeheadlines/",
    "MarketWatch Markets": "https://feeds.marketwatch.com/marketwatch/marketpulse/",
    "CNN Business": "https://rss.cnn.com/rss/money_latest.rss",
    "CNN Markets": "https://rss.cnn.com/rss/money_markets.rss",
    "Reuters Business": "https://www.reuters.com/business/finance/rss",
}

NEWS_LIMIT = 20
MAX_ITEMS_PER_FEED = 20
DESCRIPTION_MAX_CHARS = 200
