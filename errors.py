"""
Error hierarchy for scoring, aggregation and news fetching.

Empty history is not an error: the aggregators return None for that.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class SentimentError(Exception):
    """Base exception for all dashboard errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ScoringInputError(SentimentError):
    """Text handed to a scorer is not a string."""


class AggregationFailure(SentimentError):
    """A batch could not be scored. No partial results are produced."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        item_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.index = index
        self.item_id = item_id

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"index": self.index, "item_id": self.item_id})
        return data


class FeedFetchError(SentimentError):
    """A single news feed could not be fetched or parsed."""

    def __init__(self, message: str, source_name: str = "", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details)
        self.source_name = source_name
