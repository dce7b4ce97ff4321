"""
Hacker News source implementation.

Fetches top stories from Hacker News using the official Firebase API.
API Documentation: https://github.com/HackerNews/API
"""

from typing import List, Optional
import requests

from pulse.cache import TTLCache
from pulse.categorize import categorize_story
from pulse.config import FETCH_MAX_WORKERS, HN_CACHE_TTL, REQUEST_TIMEOUT
from pulse.logging_util import setup_logger
from pulse.models.items import STORY_TYPE, Story
from pulse.sources.base import Source
from pulse.utils import extract_domain, format_time_ago, map_concurrently

logger = setup_logger(__name__)


# Hacker News Firebase API endpoints
HN_API_BASE = "https://hacker-news.firebaseio.com/v0"
HN_TOP_STORIES_URL = f"{HN_API_BASE}/topstories.json"
HN_ITEM_URL = f"{HN_API_BASE}/item/{{item_id}}.json"

# Stories fetched when the caller gives no limit
DEFAULT_STORY_LIMIT = 30

# Upper bound the HTTP layer applies to ?limit=
MAX_STORY_LIMIT = 100


class HackerNewsSource(Source):
    """
    Fetches and enriches top stories from Hacker News.

    - First fetches the ranked list of top story IDs
    - Then fetches every item concurrently
    - Keeps only records of type "story", in ranked order
    - Adds domain, relative age and category to each

    The enriched list is cached for HN_CACHE_TTL seconds and served whole to
    every caller while fresh, whatever limit they ask for.
    """

    def __init__(
        self,
        cache_ttl: Optional[float] = HN_CACHE_TTL,
        cache: Optional[TTLCache] = None,
        max_workers: int = FETCH_MAX_WORKERS,
        **kwargs,
    ):
        super().__init__(cache_ttl=cache_ttl, cache=cache, **kwargs)
        self.max_workers = max_workers

    @property
    def name(self) -> str:
        return "hackernews"

    def fetch_items(self, limit: int | None = None) -> List[Story]:
        if limit is None:
            limit = DEFAULT_STORY_LIMIT
        return self.fetch_top_stories(limit)

    def fetch_top_stories(self, limit: int = DEFAULT_STORY_LIMIT) -> List[Story]:
        """
        Fetch enriched top stories.

        Args:
            limit: Number of top story IDs to resolve on a cold fetch.

        Returns:
            List of Story instances; the cached list when fresh, [] on failure.
        """
        cached = self.cached_items()
        if cached is not None:
            logger.debug(f"[{self.name}] Serving {len(cached)} cached stories")
            return cached

        if limit <= 0:
            return []

        try:
            story_ids = self._fetch_top_story_ids(limit)
            raw_items = map_concurrently(self._fetch_item, story_ids, self.max_workers)

            now = self._now()
            stories: List[Story] = []
            for raw in raw_items:
                if not raw or raw.get("type") != STORY_TYPE:
                    continue
                story = self._enrich(raw, now)
                if story is not None:
                    stories.append(story)

        except requests.RequestException as e:
            logger.error(f"[{self.name}] Error fetching top stories: {e}")
            return []
        except Exception as e:
            logger.error(f"[{self.name}] Unexpected error fetching top stories: {e}")
            return []

        self._store(stories)
        logger.info(f"[{self.name}] Fetched {len(stories)} stories (requested {limit})")
        return stories

    def _fetch_top_story_ids(self, limit: int) -> List[int]:
        """
        Fetch the ranked list of top story IDs.

        Raises:
            requests.RequestException: On network or HTTP errors.
            ValueError: If the body is not JSON.
        """
        response = requests.get(HN_TOP_STORIES_URL, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        all_ids = response.json()
        return list(all_ids[:limit]) if all_ids else []

    def _fetch_item(self, item_id: int) -> Optional[dict]:
        """
        Fetch a single item's data from the HN API.

        Returns:
            Raw item dict from API, or None on failure.
        """
        try:
            url = HN_ITEM_URL.format(item_id=item_id)
            response = requests.get(url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            data = response.json()
            return data if isinstance(data, dict) else None

        except requests.RequestException as e:
            logger.warning(f"[{self.name}] Error fetching item {item_id}: {e}")
            return None
        except (ValueError, TypeError) as e:
            logger.warning(f"[{self.name}] Error parsing item {item_id}: {e}")
            return None

    def _enrich(self, raw: dict, now: float) -> Optional[Story]:
        """
        Convert a raw HN record to an enriched Story.

        HN API item structure:
        {
            "id": 12345,
            "type": "story",
            "title": "Example Title",
            "url": "https://example.com",  # Optional for Ask HN, etc.
            "text": "...",                  # Optional, for self-posts
            "by": "username",
            "time": 1234567890,             # Unix timestamp
            "score": 100,
            "descendants": 50               # Comment count
        }
        """
        try:
            story = Story.from_dict(raw)
        except ValueError as e:
            logger.warning(f"[{self.name}] Invalid item {raw.get('id')}: {e}")
            return None

        story.domain = extract_domain(story.url)
        story.time_ago = format_time_ago(story.time, now=now)
        story.category = categorize_story(story.title, story.url)
        return story
