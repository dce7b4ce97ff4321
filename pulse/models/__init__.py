"""
Data models module.

Defines stories, articles, unified content, analyses and trend snapshots.
"""

from pulse.models.items import (
    Article,
    Story,
    UnifiedContent,
    HN_SOURCE,
    RSS_SOURCE,
    STORY_TYPE,
    ARTICLE_TYPE,
    HN_ID_PREFIX,
    RSS_ID_PREFIX,
    parse_datetime,
    strip_source_prefix,
)
from pulse.models.analysis import (
    AnalysisResult,
    CategoryCount,
    TrendAnalysis,
    TrendItem,
    SENTIMENTS,
    TECHNICAL_LEVELS,
)

__all__ = [
    "Article",
    "Story",
    "UnifiedContent",
    "HN_SOURCE",
    "RSS_SOURCE",
    "STORY_TYPE",
    "ARTICLE_TYPE",
    "HN_ID_PREFIX",
    "RSS_ID_PREFIX",
    "parse_datetime",
    "strip_source_prefix",
    "AnalysisResult",
    "CategoryCount",
    "TrendAnalysis",
    "TrendItem",
    "SENTIMENTS",
    "TECHNICAL_LEVELS",
]
