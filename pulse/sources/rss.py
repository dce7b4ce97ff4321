"""
HackTheBox blog RSS source implementation.

Fetches articles from a fixed catalog of HackTheBox blog feeds. Each feed is
downloaded with requests and parsed with feedparser; feeds are fetched
concurrently and fail independently.

RSS Feeds: https://www.hackthebox.com/rss/blog/<topic>
"""

import hashlib
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import feedparser
import requests
from bs4 import BeautifulSoup

from pulse.cache import TTLCache
from pulse.categorize import categorize_rss_content
from pulse.config import (
    FETCH_MAX_WORKERS,
    REQUEST_TIMEOUT,
    RSS_CACHE_TTL,
    RSS_MAX_ARTICLES,
    RSS_MAX_FEEDS,
)
from pulse.logging_util import setup_logger
from pulse.models.items import RSS_SOURCE, Article
from pulse.sources.base import Source
from pulse.utils import format_datetime_ago, map_concurrently

logger = setup_logger(__name__)


@dataclass(frozen=True)
class RSSFeedConfig:
    """Configuration for a single RSS feed."""
    name: str
    url: str
    category: str

    @property
    def slug(self) -> str:
        return re.sub(r"[^a-z0-9]+", "-", self.category.lower()).strip("-")

    def to_dict(self) -> dict:
        return {"name": self.name, "category": self.category}


HTB_RSS_BASE = "https://www.hackthebox.com/rss/blog"

RSS_FEEDS: List[RSSFeedConfig] = [
    RSSFeedConfig("All Content", f"{HTB_RSS_BASE}/all", "All"),
    RSSFeedConfig("Red Teaming", f"{HTB_RSS_BASE}/red-teaming", "Red Team"),
    RSSFeedConfig("Blue Teaming", f"{HTB_RSS_BASE}/blue-teaming", "Blue Team"),
    RSSFeedConfig("Cyber Teams", f"{HTB_RSS_BASE}/cyber-teams", "Cyber Teams"),
    RSSFeedConfig("Education", f"{HTB_RSS_BASE}/education", "Education"),
    RSSFeedConfig("CISO Diaries", f"{HTB_RSS_BASE}/ciso-diaries", "CISO"),
    RSSFeedConfig("Customer Stories", f"{HTB_RSS_BASE}/customer-stories", "Case Studies"),
    RSSFeedConfig("Write-Ups", f"{HTB_RSS_BASE}/write-ups", "Write-ups"),
    RSSFeedConfig("News", f"{HTB_RSS_BASE}/news", "Cyber News"),
    RSSFeedConfig("Career Stories", f"{HTB_RSS_BASE}/career-stories", "Career"),
    RSSFeedConfig("Humans of HTB", f"{HTB_RSS_BASE}/humans-of-htb", "Community"),
    RSSFeedConfig("Artificial Intelligence", f"{HTB_RSS_BASE}/artificial-intelligence", "AI/Security"),
    RSSFeedConfig("Threat Intelligence", f"{HTB_RSS_BASE}/threat-intelligence", "Threat Intel"),
    RSSFeedConfig("Security 101", f"{HTB_RSS_BASE}/security-101", "Security Basics"),
]

# Categories fetched when the caller selects none
DEFAULT_FEED_CATEGORIES: List[str] = [
    "Red Team",
    "Blue Team",
    "AI/Security",
    "Threat Intel",
    "Cyber News",
    "Write-ups",
]

USER_AGENT = "ContentPulse/1.0 (RSS Reader)"


def available_feeds() -> List[dict]:
    """Describe the whole feed catalog as [{name, category}]."""
    return [feed.to_dict() for feed in RSS_FEEDS]


def select_feeds(
    selected_categories: Optional[Sequence[str]] = None,
    max_feeds: int = RSS_MAX_FEEDS,
) -> List[RSSFeedConfig]:
    """
    Choose which feeds to fetch.

    Args:
        selected_categories: Feed category labels; empty/None means the defaults.
        max_feeds: Fan-out cap; only the first max_feeds matches (catalog order) are kept.

    Returns:
        Feeds to fetch, in catalog order.
    """
    wanted = list(selected_categories) if selected_categories else DEFAULT_FEED_CATEGORIES
    matching = [feed for feed in RSS_FEEDS if feed.category in wanted]
    if len(matching) > max_feeds:
        skipped = ", ".join(feed.name for feed in matching[max_feeds:])
        logger.info(f"[rss] Feed limit {max_feeds} reached, skipping: {skipped}")
    return matching[:max_feeds]


def article_id(feed: RSSFeedConfig, entry_key: str) -> str:
    """
    Build an article identifier that stays stable across re-fetches.

    The id is the feed's category slug plus a short hash of the feed url and
    the entry's guid (or link), so it does not depend on feed ordering.
    """
    digest = hashlib.sha1(f"{feed.url}|{entry_key}".encode("utf-8")).hexdigest()[:12]
    return f"{feed.slug}-{digest}"


def html_to_text(html: str) -> str:
    """Strip markup and collapse whitespace."""
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return re.sub(r"\s+", " ", text).strip()


class RSSSource(Source):
    """
    Fetches HackTheBox blog articles from the RSS feed catalog.

    The merged article list (newest first, at most RSS_MAX_ARTICLES) is cached
    for RSS_CACHE_TTL seconds. While fresh it is returned as-is, whichever
    feeds the caller selects.
    """

    def __init__(
        self,
        cache_ttl: Optional[float] = RSS_CACHE_TTL,
        cache: Optional[TTLCache] = None,
        max_feeds: int = RSS_MAX_FEEDS,
        max_articles: int = RSS_MAX_ARTICLES,
        max_workers: int = FETCH_MAX_WORKERS,
        **kwargs,
    ):
        super().__init__(cache_ttl=cache_ttl, cache=cache, **kwargs)
        self.max_feeds = max_feeds
        self.max_articles = max_articles
        self.max_workers = max_workers

    @property
    def name(self) -> str:
        return "rss"

    def fetch_items(self, limit: int | None = None) -> List[Article]:
        articles = self.fetch_all_feeds()
        return articles if limit is None else articles[:limit]

    def fetch_all_feeds(self, selected_categories: Optional[Sequence[str]] = None) -> List[Article]:
        """
        Fetch, merge and rank articles from the selected feeds.

        Args:
            selected_categories: Feed category labels to fetch; defaults to
                DEFAULT_FEED_CATEGORIES. Ignored while the cache is fresh.

        Returns:
            Articles sorted by publication date, newest first.
        """
        cached = self.cached_items()
        if cached is not None:
            logger.debug(f"[{self.name}] Serving {len(cached)} cached articles")
            return cached

        try:
            feeds = select_feeds(selected_categories, self.max_feeds)
            logger.info(f"[{self.name}] Fetching {len(feeds)} RSS feeds...")

            per_feed = map_concurrently(self.fetch_feed, feeds, self.max_workers)
            articles = [article for feed_articles in per_feed for article in feed_articles]
            articles.sort(key=lambda article: article.pub_date, reverse=True)
            articles = articles[: self.max_articles]

        except Exception as e:
            logger.error(f"[{self.name}] Error fetching RSS feeds: {e}")
            return []

        self._store(articles)
        logger.info(f"[{self.name}] Fetched {len(articles)} total RSS articles")
        return articles

    def fetch_feed(self, feed: RSSFeedConfig) -> List[Article]:
        """
        Fetch and normalize one feed.

        Returns:
            Articles from the feed, or [] if it cannot be fetched or parsed.
        """
        try:
            parsed = self._fetch_feed(feed)
        except requests.RequestException as e:
            logger.warning(f"[{self.name}] Error fetching RSS feed {feed.name}: {e}")
            return []
        except Exception as e:
            logger.warning(f"[{self.name}] Error parsing RSS feed {feed.name}: {e}")
            return []

        now = self._now()
        articles: List[Article] = []
        for entry in parsed.entries:
            article = self._normalize_entry(entry, feed, now)
            if article is not None:
                articles.append(article)
        return articles

    def _fetch_feed(self, feed: RSSFeedConfig) -> feedparser.FeedParserDict:
        """
        Download and parse a feed.

        Raises:
            requests.RequestException: On network or HTTP errors.
            ValueError: If the body is not a parsable feed.
        """
        response = requests.get(
            feed.url,
            headers={"User-Agent": USER_AGENT},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()

        parsed = feedparser.parse(response.content)
        if parsed.bozo and not parsed.entries:
            raise ValueError(f"Feed parse error: {parsed.bozo_exception}")
        return parsed

    def _normalize_entry(self, entry: dict, feed: RSSFeedConfig, now: float) -> Optional[Article]:
        """
        Convert a feedparser entry to an Article.

        Entries without a link or guid are dropped since every article needs a url.
        """
        url = (entry.get("link") or entry.get("id") or "").strip()
        if not url:
            return None

        title = (entry.get("title") or "").strip() or "Untitled"
        description = entry.get("summary") or entry.get("description") or ""
        pub_date = self._parse_date(entry) or datetime.fromtimestamp(now, tz=timezone.utc)

        return Article(
            id=article_id(feed, entry.get("id") or url),
            title=title,
            url=url,
            pub_date=pub_date,
            content=self._extract_content(entry, description),
            description=description,
            author=entry.get("author") or RSS_SOURCE,
            source=RSS_SOURCE,
            source_category=feed.category,
            category=categorize_rss_content(title, description, feed.category),
            time_ago=format_datetime_ago(pub_date, now=now),
        )

    def _extract_content(self, entry: dict, description: str) -> str:
        """Prefer the full encoded content; fall back to a plain-text snippet."""
        for block in entry.get("content") or []:
            value = block.get("value") if isinstance(block, dict) else None
            if value:
                return value
        return html_to_text(description)

    def _parse_date(self, entry: dict) -> Optional[datetime]:
        """
        Parse publication date from an RSS entry.

        feedparser normalizes *_parsed fields to UTC time tuples.
        """
        for key in ("published_parsed", "updated_parsed"):
            parsed = entry.get(key)
            if parsed:
                try:
                    return datetime(*parsed[:6], tzinfo=timezone.utc)
                except (ValueError, TypeError):
                    continue
        return None
