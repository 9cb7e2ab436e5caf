"""Derived view helpers: relative time labels and vote ratios."""
import time
from typing import Any, Optional

MS_PER_HOUR = 3_600_000
MS_PER_DAY = 86_400_000


def current_time_ms() -> int:
    """Wall-clock time in whole epoch milliseconds."""
    return int(time.time() * 1000)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''} ago"


def format_time_ago(timestamp_ms: int, now_ms: Optional[int] = None) -> str:
    """
    Relative age label for a record timestamp.

    Whole days once a day has passed, whole hours once an hour has passed,
    otherwise "Just now". Timestamps in the future also read "Just now".
    Evaluated on every call so labels drift with the clock.

    Args:
        timestamp_ms: Record creation instant (epoch ms)
        now_ms: Reference instant (epoch ms), defaults to the current time

    Returns:
        Label such as "1 day ago" or "2 hours ago"
    """
    if now_ms is None:
        now_ms = current_time_ms()
    diff = now_ms - timestamp_ms

    if diff >= MS_PER_DAY:
        return _plural(diff // MS_PER_DAY, "day")
    if diff >= MS_PER_HOUR:
        return _plural(diff // MS_PER_HOUR, "hour")
    return "Just now"


def vote_ratio(votes_for: int, votes_against: int) -> float:
    """Share of "yes" votes in [0, 1]; 0.0 when nobody has voted."""
    total = votes_for + votes_against
    if total <= 0:
        return 0.0
    return votes_for / total


def support_percentage(proposal: Any) -> float:
    """Support for a proposal as a percentage rounded to one decimal."""
    return round(vote_ratio(proposal.votes_for, proposal.votes_against) * 100, 1)
