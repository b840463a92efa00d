# nhl_stats/utils/misc_utils.py
import re
from datetime import datetime, timezone

_WHITESPACE = re.compile(r"\s+")


def normalize_alias(text: str) -> str:
    """Lowercases a free-text name and strips every whitespace character."""
    return _WHITESPACE.sub("", str(text).lower())


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
