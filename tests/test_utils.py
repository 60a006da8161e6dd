import logging

from errors import AggregationFailure, FeedFetchError, SentimentError
from utils import setup_logging, utc_now_iso


def test_setup_logging_is_idempotent():
    root = logging.getLogger()
    before = len(root.handlers)

    setup_logging("DEBUG")
    after_first = len(root.handlers)
    setup_logging("WARNING")

    assert len(root.handlers) == after_first <= before + 1
    assert root.level == logging.WARNING


def test_utc_now_iso_has_offset():
    assert utc_now_iso().endswith("+00:00")


def test_error_to_dict():
    err = AggregationFailure("boom", index=3, item_id="abc", details={"batch_size": 5})
    data = err.to_dict()

    assert isinstance(err, SentimentError)
    assert data["error_type"] == "AggregationFailure"
    assert data["index"] == 3
    assert data["item_id"] == "abc"
    assert data["details"] == {"batch_size": 5}


def test_feed_fetch_error_keeps_source():
    err = FeedFetchError("down", source_name="Reuters")
    assert err.source_name == "Reuters"
    assert str(err) == "down"
