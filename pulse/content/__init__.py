"""
Content unification module.

Merges stories and articles into one ranked, filterable feed.
"""

from pulse.content.unifier import (
    ContentUnifier,
    SourceResult,
    article_to_unified,
    filter_content,
    story_to_unified,
    summarize_content,
    DEFAULT_CONTENT_LIMIT,
    MAX_CONTENT_FETCH,
)

__all__ = [
    "ContentUnifier",
    "SourceResult",
    "article_to_unified",
    "filter_content",
    "story_to_unified",
    "summarize_content",
    "DEFAULT_CONTENT_LIMIT",
    "MAX_CONTENT_FETCH",
]
