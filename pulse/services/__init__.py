"""
Services module.

Contains external service integrations like LLM content analysis.
"""

from pulse.services.content_analyzer import (
    AnalysisError,
    ContentAnalyzer,
    LLMResponseError,
    get_analyzer,
    reset_analyzer,
    sanitize_analysis,
)

__all__ = [
    "AnalysisError",
    "ContentAnalyzer",
    "LLMResponseError",
    "get_analyzer",
    "reset_analyzer",
    "sanitize_analysis",
]
