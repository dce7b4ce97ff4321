"""
Small helpers shared by sources, the unifier and the trend analyzer.
"""

import math
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Iterable, Optional, TypeVar
from urllib.parse import urlparse

T = TypeVar("T")
R = TypeVar("R")


def extract_domain(url: Optional[str]) -> Optional[str]:
    """
    Return the hostname of url without a leading "www.".

    Returns None when url is empty or has no parsable hostname.
    """
    if not url:
        return None
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    if not hostname:
        return None
    return hostname[4:] if hostname.startswith("www.") else hostname


def format_time_ago(timestamp: float, now: Optional[float] = None) -> str:
    """
    Format a unix timestamp as a relative age ("5 minutes ago").

    Minutes below one hour, hours below one day, days otherwise. Counts are
    floored and the unit is singular only for exactly 1.
    """
    if now is None:
        now = time.time()
    diff = now - timestamp

    if diff < 3600:
        count, unit = math.floor(diff / 60), "minute"
    elif diff < 86400:
        count, unit = math.floor(diff / 3600), "hour"
    else:
        count, unit = math.floor(diff / 86400), "day"

    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_datetime_ago(value: datetime, now: Optional[float] = None) -> str:
    """format_time_ago for an aware datetime."""
    return format_time_ago(value.timestamp(), now=now)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding toward +infinity."""
    return math.floor(value + 0.5)


def map_concurrently(func: Callable[[T], R], items: Iterable[T], max_workers: int) -> list[R]:
    """
    Call func on every item on a thread pool and return results in input order.

    Exceptions raised by func propagate; callers that need per-item isolation
    catch inside func.
    """
    items = list(items)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items)))) as executor:
        return list(executor.map(func, items))
