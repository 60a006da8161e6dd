# news_scraper.py
# Headline collection from free RSS feeds:
# - every feed is fetched concurrently; one failing feed never sinks the rest
# - headlines are cleaned, categorised and deduplicated across feeds
# - built-in fallback headlines if nothing at all comes back

import asyncio
import logging
import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import feedparser

from config import DESCRIPTION_MAX_CHARS, MAX_ITEMS_PER_FEED, NEWS_LIMIT, RSS_FEEDS
from errors import FeedFetchError
from models import NewsItem
from utils import normalize_headline, strip_html, utc_now

logger = logging.getLogger(__name__)

# First matching group wins
CATEGORY_KEYWORDS = [
    ("Technology", ["tech", "ai", "software", "apple", "microsoft", "google", "meta"]),
    ("Finance", ["bank", "finance", "credit", "loan", "jpmorgan", "goldman"]),
    ("Healthcare", ["health", "pharma", "medical", "drug", "pfizer", "moderna"]),
    ("Energy", ["oil", "energy", "gas", "renewable", "exxon", "chevron"]),
    ("Consumer", ["consumer", "retail", "walmart", "amazon", "target"]),
    ("Real Estate", ["real estate", "property", "housing", "mortgage"]),
    ("Cryptocurrency", ["crypto", "bitcoin", "ethereum", "blockchain"]),
    ("Economics", ["fed", "federal reserve", "interest rate", "inflation"]),
]
DEFAULT_CATEGORY = "Markets"


@dataclass
class FeedResult:
    source: str
    items: List[NewsItem] = field(default_factory=list)
    error: Optional[Exception] = None


def categorize_news(text: str) -> str:
    t = (text or "").lower()
    for category, keys in CATEGORY_KEYWORDS:
        if any(k in t for k in keys):
            return category
    return DEFAULT_CATEGORY


def parse_entry_date(entry) -> datetime:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if parsed:
        try:
            return datetime(*parsed[:6], tzinfo=timezone.utc)
        except (TypeError, ValueError):
            pass
    return utc_now()


def _slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def entries_to_items(source: str, entries, limit: int = MAX_ITEMS_PER_FEED) -> List[NewsItem]:
    stamp = int(time.time() * 1000)
    items = []
    for index, entry in enumerate(entries[:limit]):
        title = strip_html(entry.get("title") or "")
        link = (entry.get("link") or "").strip()
        if not title or not link:
            continue

        raw_description = entry.get("summary") or entry.get("description") or ""
        description = strip_html(raw_description)[:DESCRIPTION_MAX_CHARS]

        items.append(NewsItem(
            id=f"{_slug(source)}-{index}-{stamp}",
            headline=title,
            source=source,
            timestamp=parse_entry_date(entry),
            category=categorize_news(f"{title} {description}"),
            url=link,
            description=description,
        ))
    return items


async def fetch_feed(source: str, url: str, per_feed: int = MAX_ITEMS_PER_FEED) -> FeedResult:
    # feedparser blocks on I/O, so each feed gets a worker thread
    try:
        parsed = await asyncio.to_thread(feedparser.parse, url)
        entries = parsed.get("entries") or []
        if not entries and parsed.get("bozo"):
            raise FeedFetchError(
                f"Could not read feed {url}: {parsed.get('bozo_exception')}",
                source_name=source,
            )
        items = entries_to_items(source, entries, per_feed)
        logger.info("Fetched %d articles from %s", len(items), source)
        return FeedResult(source=source, items=items)
    except Exception as exc:
        logger.warning("Feed %s failed: %s", source, exc)
        return FeedResult(source=source, error=exc)


async def gather_feeds(feeds: Dict[str, str], per_feed: int = MAX_ITEMS_PER_FEED) -> List[FeedResult]:
    tasks = [fetch_feed(source, url, per_feed) for source, url in feeds.items()]
    return list(await asyncio.gather(*tasks))


def remove_duplicates(items: List[NewsItem]) -> List[NewsItem]:
    seen = set()
    unique = []
    for item in items:
        key = normalize_headline(item.headline)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def fetch_latest_news(feeds: Optional[Dict[str, str]] = None, limit: int = NEWS_LIMIT) -> List[NewsItem]:
    feeds = RSS_FEEDS if feeds is None else feeds
    results = asyncio.run(gather_feeds(feeds))

    all_items = []
    for r in results:
        all_items.extend(r.items)

    failed = [r.source for r in results if r.error is not None]
    if failed:
        logger.warning("%d of %d feeds failed: %s", len(failed), len(results), ", ".join(failed))

    if not all_items:
        logger.warning("No news fetched from any source, using fallback headlines")
        return fallback_news()

    unique = remove_duplicates(all_items)
    unique.sort(key=lambda n: n.timestamp, reverse=True)
    logger.info("Aggregated %d unique articles", min(limit, len(unique)))
    return unique[:limit]


def fallback_news() -> List[NewsItem]:
    now = utc_now()
    rows = [
        ("Tech stocks rally as AI companies report strong quarterly earnings", "Financial News", 30, "Technology",
         "Major technology companies continue to show strong performance driven by AI investments"),
        ("Federal Reserve maintains interest rates amid economic uncertainty", "Economic Times", 60, "Economics",
         "Central bank keeps rates steady while monitoring inflation trends"),
        ("Energy sector sees mixed results as oil prices fluctuate", "Market Watch", 90, "Energy",
         "Oil and gas companies report varied performance amid volatile commodity prices"),
        ("Banking sector shows resilience with strong loan growth", "Financial Tribune", 120, "Finance",
         "Major banks report increased lending activity and stable credit conditions"),
        ("Healthcare stocks advance on breakthrough drug approvals", "Health Finance", 150, "Healthcare",
         "Pharmaceutical companies gain on positive regulatory developments"),
    ]
    return [
        NewsItem(
            id=f"fallback-{i}",
            headline=headline,
            source=source,
            timestamp=now - timedelta(minutes=minutes_ago),
            category=category,
            description=description,
        )
        for i, (headline, source, minutes_ago, category, description) in enumerate(rows, start=1)
    ]


def sample_news() -> List[NewsItem]:
    now = utc_now()
    rows = [
        ("Tech stocks surge as AI companies report strong earnings growth", "Financial Times", "Technology"),
        ("Federal Reserve signals potential interest rate cuts amid economic concerns", "Bloomberg", "Economics"),
        ("Oil prices plunge on weak demand forecasts and oversupply fears", "Reuters", "Energy"),
        ("Banking sector shows resilience with record quarterly profits", "Wall Street Journal", "Finance"),
        ("Healthcare stocks decline following drug approval setbacks", "MarketWatch", "Healthcare"),
    ]
    return [
        NewsItem(id=str(i), headline=headline, source=source, timestamp=now, category=category)
        for i, (headline, source, category) in enumerate(rows, start=1)
    ]
