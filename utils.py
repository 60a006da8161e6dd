# utils.py
from datetime import datetime, timezone
import logging
import re

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITY_RE = re.compile(r"&[^;\s]+;")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat(timespec="seconds")


def clean_text(s: str) -> str:
    s = s or ""
    return re.sub(r"\s+", " ", s).strip()


def strip_html(s: str) -> str:
    """Drop tags and entities, then collapse whitespace."""
    s = _TAG_RE.sub("", s or "")
    s = _ENTITY_RE.sub(" ", s)
    return clean_text(s)


def normalize_headline(s: str) -> str:
    # dedup key: lowercase, no punctuation, single spaces
    s = re.sub(r"[^\w\s]", "", (s or "").lower())
    return clean_text(s)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger once. Streamlit reruns the script on every
    interaction, so repeated calls only adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if not any(getattr(h, "_sentiment_dashboard", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        handler._sentiment_dashboard = True
        root.addHandler(handler)

    return root
