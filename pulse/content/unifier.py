"""
Content unification - merges Hacker News stories and RSS articles.

    HN stories ─┐
                ├─> UnifiedContent ─> sort by date ─> cache ─> limit
    RSS articles┘

Design principles:
- Error isolation: one source failure doesn't stop the other
- Both sources are fetched concurrently
- One global cache entry: while it is fresh every call is served from it,
  whatever options the call passes. Options only shape a cold fetch.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from pulse.cache import TTLCache
from pulse.categorize import HN_DEFAULT_CATEGORY
from pulse.config import UNIFIED_CACHE_TTL
from pulse.logging_util import setup_logger
from pulse.models.items import (
    ARTICLE_TYPE,
    HN_ID_PREFIX,
    HN_SOURCE,
    RSS_ID_PREFIX,
    RSS_SOURCE,
    STORY_TYPE,
    Article,
    Story,
    UnifiedContent,
)
from pulse.sources.hackernews import HackerNewsSource
from pulse.sources.rss import RSSSource
from pulse.utils import extract_domain, map_concurrently

logger = setup_logger(__name__)

# How much of each source a cold unified fetch pulls in
UNIFIED_STORY_LIMIT = 20
UNIFIED_ARTICLE_LIMIT = 25

DEFAULT_CONTENT_LIMIT = 30

# Upper bound on how many items the HTTP layer pulls before filtering
MAX_CONTENT_FETCH = 100

RSS_FALLBACK_DOMAIN = "hackthebox.com"


# =============================================================================
# Conversion
# =============================================================================

def story_to_unified(story: Story) -> UnifiedContent:
    return UnifiedContent(
        id=f"{HN_ID_PREFIX}{story.id}",
        title=story.title,
        url=story.url,
        author=story.by,
        score=story.score,
        comments=story.descendants,
        time_ago=story.time_ago or "",
        category=story.category or HN_DEFAULT_CATEGORY,
        source=HN_SOURCE,
        type=STORY_TYPE,
        pub_date=story.posted_at,
        domain=story.domain,
    )


def article_to_unified(article: Article) -> UnifiedContent:
    return UnifiedContent(
        id=f"{RSS_ID_PREFIX}{article.id}",
        title=article.title,
        url=article.url,
        description=article.description,
        author=article.author or RSS_SOURCE,
        time_ago=article.time_ago or "",
        category=article.category or article.source_category,
        source=RSS_SOURCE,
        source_category=article.source_category,
        type=ARTICLE_TYPE,
        pub_date=article.pub_date,
        domain=extract_domain(article.url) or RSS_FALLBACK_DOMAIN,
    )


# =============================================================================
# Fetch Result Data Structures
# =============================================================================

@dataclass
class SourceResult:
    """Result of fetching from a single source during a unified fetch."""
    source_name: str
    items: List[UnifiedContent]
    success: bool
    error: Optional[str] = None
    duration_ms: float = 0.0


class ContentUnifier:
    """
    Produces one date-ordered feed out of both sources.

    Attributes:
        hn_source: Story fetcher.
        rss_source: Article fetcher.
    """

    CACHE_KEY = "unified"

    def __init__(
        self,
        hn_source: Optional[HackerNewsSource] = None,
        rss_source: Optional[RSSSource] = None,
        cache: Optional[TTLCache] = None,
        cache_ttl: Optional[float] = UNIFIED_CACHE_TTL,
        clock: Callable[[], float] = time.time,
    ):
        self.hn_source = hn_source or HackerNewsSource()
        self.rss_source = rss_source or RSSSource()
        self._cache = cache if cache is not None else TTLCache(ttl=cache_ttl, clock=clock)
        self.last_results: List[SourceResult] = []

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def is_cached(self) -> bool:
        return self._cache.is_fresh(self.CACHE_KEY)

    def clear_cache(self) -> None:
        self._cache.clear()

    def fetch_unified_content(
        self,
        include_hn: bool = True,
        include_rss: bool = True,
        rss_feeds: Optional[Sequence[str]] = None,
        limit: int = DEFAULT_CONTENT_LIMIT,
    ) -> List[UnifiedContent]:
        """
        Return the merged feed, newest first.

        Args:
            include_hn: Fetch Hacker News stories on a cold fetch.
            include_rss: Fetch RSS articles on a cold fetch.
            rss_feeds: Feed category labels for the RSS fetch.
            limit: Maximum number of items returned.

        Returns:
            Up to limit UnifiedContent items.
        """
        cached = self._cache.get(self.CACHE_KEY)
        if cached is not None:
            return cached[:limit]

        tasks: List[Callable[[], SourceResult]] = []
        if include_hn:
            tasks.append(lambda: self._run_source(HN_SOURCE, self._fetch_stories))
        if include_rss:
            tasks.append(lambda: self._run_source(RSS_SOURCE, lambda: self._fetch_articles(rss_feeds)))

        self.last_results = map_concurrently(lambda task: task(), tasks, max_workers=len(tasks) or 1)

        content = [item for result in self.last_results for item in result.items]
        content.sort(key=lambda item: item.pub_date.timestamp(), reverse=True)

        self._cache.set(self.CACHE_KEY, content)
        logger.info(
            f"[unified] Cached {len(content)} items "
            f"({', '.join(f'{r.source_name}={len(r.items)}' for r in self.last_results) or 'no sources'})"
        )
        return content[:limit]

    def _fetch_stories(self) -> List[UnifiedContent]:
        stories = self.hn_source.fetch_top_stories(UNIFIED_STORY_LIMIT)
        return [story_to_unified(story) for story in stories]

    def _fetch_articles(self, rss_feeds: Optional[Sequence[str]]) -> List[UnifiedContent]:
        articles = self.rss_source.fetch_all_feeds(rss_feeds or None)
        return [article_to_unified(article) for article in articles[:UNIFIED_ARTICLE_LIMIT]]

    def _run_source(self, name: str, fetch: Callable[[], List[UnifiedContent]]) -> SourceResult:
        """Run one source fetch with error isolation and timing."""
        started = time.perf_counter()
        try:
            items = fetch()
            success, error = True, None
        except Exception as e:
            logger.error(f"[unified] Error fetching {name} content: {e}")
            items, success, error = [], False, str(e)
        return SourceResult(
            source_name=name,
            items=items,
            success=success,
            error=error,
            duration_ms=(time.perf_counter() - started) * 1000,
        )


# =============================================================================
# Post-fetch helpers for the HTTP layer
# =============================================================================

def filter_content(
    content: List[UnifiedContent],
    source: Optional[str] = None,
    category: Optional[str] = None,
) -> List[UnifiedContent]:
    """
    Filter unified content.

    Args:
        content: Items to filter.
        source: Exact source name ("HackerNews" / "HackTheBox"); falsy skips.
        category: Case-insensitive substring of category or source category;
            falsy or "all" skips.
    """
    if source:
        content = [item for item in content if item.source == source]

    if category and category != "all":
        needle = category.lower()
        content = [
            item for item in content
            if needle in (item.category or "").lower()
            or needle in (item.source_category or "").lower()
        ]

    return content


def summarize_content(content: List[UnifiedContent]) -> Dict[str, object]:
    """
    Derive the dashboard filter data for a list of items.

    Returns:
        {"categories": sorted labels, "sources": sources in first-seen order,
         "stats": counts by source and type}
    """
    categories = {item.category for item in content if item.category}
    categories |= {item.source_category for item in content if item.source_category}

    sources: List[str] = []
    for item in content:
        if item.source not in sources:
            sources.append(item.source)

    return {
        "categories": sorted(categories),
        "sources": sources,
        "stats": {
            "hackerNews": sum(1 for item in content if item.source == HN_SOURCE),
            "hackTheBox": sum(1 for item in content if item.source == RSS_SOURCE),
            "totalStories": sum(1 for item in content if item.type == STORY_TYPE),
            "totalArticles": sum(1 for item in content if item.type == ARTICLE_TYPE),
        },
    }
