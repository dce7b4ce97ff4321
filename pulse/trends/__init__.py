"""
Trend analysis module.

Aggregates a day's items into category, topic and sentiment statistics.
"""

from pulse.trends.analyzer import (
    TrendAnalyzer,
    build_trend_analysis,
    fallback_trend_analysis,
    count_categories,
    extract_emerging_topics,
    score_bucket,
)

__all__ = [
    "TrendAnalyzer",
    "build_trend_analysis",
    "fallback_trend_analysis",
    "count_categories",
    "extract_emerging_topics",
    "score_bucket",
]
