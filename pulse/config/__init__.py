"""
Configuration module.

Handles environment variables, API keys, cache lifetimes and fetch limits.
"""

from pulse.config.config import (
    APP_ENV,
    DEBUG,
    OPENROUTER_API_KEY,
    OPENROUTER_MODEL,
    OPENROUTER_API_URL,
    CRON_SECRET,
    REQUEST_TIMEOUT,
    FETCH_MAX_WORKERS,
    RSS_MAX_FEEDS,
    RSS_MAX_ARTICLES,
    HN_CACHE_TTL,
    RSS_CACHE_TTL,
    UNIFIED_CACHE_TTL,
    ANALYSIS_CACHE_MAX_ENTRIES,
    ANALYSIS_FAILURE_TTL,
    is_production,
    validate_config,
    print_config_summary,
)

__all__ = [
    "APP_ENV",
    "DEBUG",
    "OPENROUTER_API_KEY",
    "OPENROUTER_MODEL",
    "OPENROUTER_API_URL",
    "CRON_SECRET",
    "REQUEST_TIMEOUT",
    "FETCH_MAX_WORKERS",
    "RSS_MAX_FEEDS",
    "RSS_MAX_ARTICLES",
    "HN_CACHE_TTL",
    "RSS_CACHE_TTL",
    "UNIFIED_CACHE_TTL",
    "ANALYSIS_CACHE_MAX_ENTRIES",
    "ANALYSIS_FAILURE_TTL",
    "is_production",
    "validate_config",
    "print_config_summary",
]
