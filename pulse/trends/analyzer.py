"""
Daily trend analysis for Content Pulse.

Computes one snapshot per UTC calendar day from a batch of items:

1. Category histogram (top 5, rounded percentages)
2. Score-bucket "sentiment" split
3. Emerging topics (frequent long words in titles)
4. Templated insights and a one-sentence summary

The first snapshot computed on a given day is cached and returned for every
later call that day, whatever items those calls pass in.
"""

import threading
import time
from collections import Counter
from datetime import datetime, timezone
from typing import Callable, List, Optional

from pulse.cache import TTLCache
from pulse.categorize import HN_DEFAULT_CATEGORY
from pulse.logging_util import setup_logger
from pulse.models.analysis import CategoryCount, TrendAnalysis, TrendItem
from pulse.utils import round_half_up

logger = setup_logger(__name__)


# =============================================================================
# Trend Configuration
# =============================================================================

TOP_CATEGORY_COUNT = 5
TOP_TOPIC_COUNT = 5

# Score thresholds for the sentiment buckets (strictly greater than)
POSITIVE_SCORE_THRESHOLD = 100
NEUTRAL_SCORE_THRESHOLD = 50

# Title words must be longer than this to count as a topic
MIN_TOPIC_WORD_LENGTH = 4
MIN_TOPIC_OCCURRENCES = 2
TOPIC_STOP_WORDS = {"show", "ask", "the", "and", "for", "with"}

# Number of past days whose snapshots stay in memory
RETAINED_DAYS = 7


def score_bucket(score: float) -> str:
    """Map an engagement score to positive/neutral/negative."""
    if score > POSITIVE_SCORE_THRESHOLD:
        return "positive"
    if score > NEUTRAL_SCORE_THRESHOLD:
        return "neutral"
    return "negative"


def percentage(count: int, total: int) -> int:
    return round_half_up(count / total * 100)


def count_categories(items: List[TrendItem]) -> List[CategoryCount]:
    """Category histogram, most common first, top TOP_CATEGORY_COUNT."""
    counts = Counter(item.category or HN_DEFAULT_CATEGORY for item in items)
    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
    return [
        CategoryCount(category=category, count=count, percentage=percentage(count, len(items)))
        for category, count in ranked[:TOP_CATEGORY_COUNT]
    ]


def extract_emerging_topics(items: List[TrendItem]) -> List[str]:
    """Words appearing at least twice across titles, most frequent first."""
    words = [
        word
        for item in items
        for word in item.title.lower().split()
        if len(word) > MIN_TOPIC_WORD_LENGTH and word not in TOPIC_STOP_WORDS
    ]
    counts = Counter(words)
    frequent = [(word, count) for word, count in counts.items() if count >= MIN_TOPIC_OCCURRENCES]
    frequent.sort(key=lambda pair: pair[1], reverse=True)
    return [word for word, _ in frequent[:TOP_TOPIC_COUNT]]


def community_mood(positive: int, neutral: int, negative: int) -> str:
    if positive > neutral + negative:
        return "engaged and positive"
    if positive + neutral > negative:
        return "moderately engaged"
    return "selective"


def build_trend_analysis(items: List[TrendItem]) -> TrendAnalysis:
    """
    Compute a snapshot for items.

    Raises:
        ZeroDivisionError: If items is empty.
    """
    total = len(items)
    top_categories = count_categories(items)

    buckets = Counter(score_bucket(item.score) for item in items)
    positive, neutral, negative = buckets["positive"], buckets["neutral"], buckets["negative"]

    total_score = sum(item.score for item in items)
    total_comments = sum(item.comments for item in items)

    leader = top_categories[0] if top_categories else None
    leader_name = leader.category if leader else HN_DEFAULT_CATEGORY
    leader_share = leader.percentage if leader else 0

    return TrendAnalysis(
        top_categories=top_categories,
        emerging_topics=extract_emerging_topics(items),
        sentiment={
            "positive": percentage(positive, total),
            "neutral": percentage(neutral, total),
            "negative": percentage(negative, total),
        },
        key_insights=[
            f"{total} stories analyzed from today's front page",
            f"Most popular category: {leader_name} ({leader_share}%)",
            f"Average score: {round_half_up(total_score / total)}",
            f"Total comments: {total_comments:,}",
        ],
        todays_summary=(
            f"Today's Hacker News features {total} top stories with "
            f"{leader.category if leader else 'various topics'} dominating the discussion. "
            f"The community seems {community_mood(positive, neutral, negative)} with an average of "
            f"{round_half_up(total_comments / total)} comments per story."
        ),
    )


def fallback_trend_analysis(item_count: int) -> TrendAnalysis:
    """Fixed snapshot used when the computation fails."""
    return TrendAnalysis(
        top_categories=[CategoryCount(category=HN_DEFAULT_CATEGORY, count=item_count, percentage=100)],
        emerging_topics=["technology", "software", "programming"],
        sentiment={"positive": 40, "neutral": 50, "negative": 10},
        key_insights=[
            f"{item_count} stories from Hacker News",
            "Mixed topics and discussions",
            "Active community engagement",
        ],
        todays_summary=(
            f"Today's Hacker News features {item_count} stories covering various "
            f"technology topics with active community discussion."
        ),
    )


class TrendAnalyzer:
    """
    Cached, once-per-day trend analysis.

    Usage:
        analyzer = TrendAnalyzer()
        snapshot = analyzer.analyze_trends([TrendItem.from_story(s) for s in stories])
    """

    def __init__(
        self,
        cache: Optional[TTLCache] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._clock = clock
        self._cache = cache if cache is not None else TTLCache(ttl=None, max_size=RETAINED_DAYS, clock=clock)
        self._lock = threading.Lock()

    @property
    def cache(self) -> TTLCache:
        return self._cache

    def cache_key(self) -> str:
        today = datetime.fromtimestamp(self._clock(), tz=timezone.utc).date().isoformat()
        return f"trends-{today}"

    def analyze_trends(self, items: List[TrendItem]) -> TrendAnalysis:
        """
        Return today's snapshot, computing it from items on the first call of the day.

        Never raises: a failed computation (including an empty item list)
        produces fallback_trend_analysis, which is cached like a computed one.
        """
        # Check, build and store are one step: one snapshot per day
        with self._lock:
            key = self.cache_key()
            cached = self._cache.get(key)
            if cached is not None:
                return cached

            try:
                analysis = build_trend_analysis(items)
            except Exception as e:
                logger.error(f"[trends] Error analyzing trends: {e}")
                analysis = fallback_trend_analysis(len(items))

            self._cache.set(key, analysis)
            return analysis

    def clear_cache(self) -> None:
        self._cache.clear()
