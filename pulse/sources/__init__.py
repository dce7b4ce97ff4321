"""
Data sources module.

Fetchers for external platforms: Hacker News and HackTheBox blog RSS feeds.
"""

from pulse.sources.base import Source
from pulse.sources.hackernews import HackerNewsSource
from pulse.sources.rss import (
    RSSSource,
    RSSFeedConfig,
    RSS_FEEDS,
    DEFAULT_FEED_CATEGORIES,
    available_feeds,
)

__all__ = [
    "Source",
    "HackerNewsSource",
    "RSSSource",
    "RSSFeedConfig",
    "RSS_FEEDS",
    "DEFAULT_FEED_CATEGORIES",
    "available_feeds",
]
