"""
Categorization module.

Labels stories and articles with heuristic, first-match-wins keyword rules.
"""

from pulse.categorize.rules import (
    HN_DEFAULT_CATEGORY,
    RSS_DEFAULT_CATEGORY,
    RSS_CATCH_ALL_FEED_CATEGORY,
)

from pulse.categorize.categorizer import (
    CategoryRule,
    CategoryText,
    HN_RULES,
    RSS_RULES,
    apply_rules,
    categorize_story,
    categorize_rss_content,
)

__all__ = [
    # Configuration
    "HN_DEFAULT_CATEGORY",
    "RSS_DEFAULT_CATEGORY",
    "RSS_CATCH_ALL_FEED_CATEGORY",
    # Rules
    "CategoryRule",
    "CategoryText",
    "HN_RULES",
    "RSS_RULES",
    "apply_rules",
    "categorize_story",
    "categorize_rss_content",
]
