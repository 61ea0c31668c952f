"""Leaderboard rules that are independent from HTTP and Redis.

Rule of thumb:
- OK: key derivation, name cleaning, member encoding, pure decisions.
- Not OK: touching Redis, FastAPI, datetime.now(), etc.
"""

import re
from datetime import datetime
from typing import Optional

LEADERBOARD_SIZE = 20
NAME_MAX_LENGTH = 5
MEMBER_SEPARATOR = ":"

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")
_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def leaderboard_key(now: datetime, device_type: str) -> str:
    """Return the sorted set key of the monthly partition for device_type.

    Month is not zero padded, e.g. "leaderboard:2025-5:mobile".
    """
    return f"leaderboard:{now.year:04d}-{now.month}:{device_type}"


def sanitize_name(name: str) -> str:
    """Truncate to NAME_MAX_LENGTH characters, then drop non-alphanumerics."""
    return _NON_ALPHANUMERIC.sub("", name[:NAME_MAX_LENGTH])


def timestamp_millis(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def encode_member(name: str, now: datetime) -> str:
    """Encode a sanitized name and the submission time as a set member."""
    return f"{name}{MEMBER_SEPARATOR}{timestamp_millis(now)}"


def member_display_name(member: str) -> str:
    return member.split(MEMBER_SEPARATOR, 1)[0]


def parse_score_param(raw: Optional[str]) -> int:
    """Parse a query string score leniently.

    Leading sign and digits are used and the rest is ignored ("42abc" -> 42,
    "3.9" -> 3). Anything without a leading integer becomes 0.
    """
    if not raw:
        return 0
    match = _LEADING_INTEGER.match(raw)
    if match is None:
        return 0
    return int(match.group(1))


def qualifies(
    score: float, cutoff_score: Optional[float], entry_count: Optional[int]
) -> bool:
    """Decide whether score would enter the top LEADERBOARD_SIZE.

    Args:
        score (float): Candidate score
        cutoff_score (Optional[float]): Score of the entry at the last ranked
            position, None when that position is empty
        entry_count (Optional[int]): Total members of the partition, only
            consulted when cutoff_score is None

    Returns:
        bool: True if the candidate would be ranked
    """
    if cutoff_score is not None:
        return score > cutoff_score
    # A full partition without a last ranked entry is an inconsistent read.
    # It is reported as not qualifying rather than compared.
    return entry_count is not None and entry_count < LEADERBOARD_SIZE
