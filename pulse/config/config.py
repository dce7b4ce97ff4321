"""
Configuration module for Content Pulse.

Loads environment variables from .env file and exposes them as typed configuration values.
Uses python-dotenv for loading and provides safe defaults where appropriate.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

# Load .env file from project root
# The .env file should be in the root directory (parent of pulse/)
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
load_dotenv(_env_path)


def _optional_float(name: str) -> Optional[float]:
    """Read an optional float; empty or unset means None."""
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


# =============================================================================
# Application Environment
# =============================================================================

# Application environment: "development", "staging", or "production"
APP_ENV: str = os.getenv("APP_ENV", "development")

# Enable debug logging
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# =============================================================================
# LLM Configuration (OpenRouter, OpenAI-compatible API)
# =============================================================================

# Without a key every analysis falls back to the deterministic mock
OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "")

OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-oss-20b:free")

OPENROUTER_API_URL: str = os.getenv(
    "OPENROUTER_API_URL", "https://openrouter.ai/api/v1/chat/completions"
)


# =============================================================================
# Scheduled Refresh
# =============================================================================

# Shared secret for /api/cron; empty disables the bearer check
CRON_SECRET: str = os.getenv("CRON_SECRET", "")


# =============================================================================
# Fetching
# =============================================================================

# HTTP request timeout in seconds
REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

# Thread pool size for concurrent upstream calls
FETCH_MAX_WORKERS: int = int(os.getenv("FETCH_MAX_WORKERS", "16"))

# Maximum number of RSS feeds fetched per refresh (catalog order)
RSS_MAX_FEEDS: int = int(os.getenv("RSS_MAX_FEEDS", "8"))

# Number of most recent RSS articles kept after merging feeds
RSS_MAX_ARTICLES: int = int(os.getenv("RSS_MAX_ARTICLES", "50"))


# =============================================================================
# Cache Lifetimes (seconds)
# =============================================================================

HN_CACHE_TTL: float = float(os.getenv("HN_CACHE_TTL", "300"))

RSS_CACHE_TTL: float = float(os.getenv("RSS_CACHE_TTL", "600"))

UNIFIED_CACHE_TTL: float = float(os.getenv("UNIFIED_CACHE_TTL", "300"))

# 0 keeps every analysis for the life of the process
ANALYSIS_CACHE_MAX_ENTRIES: int = int(os.getenv("ANALYSIS_CACHE_MAX_ENTRIES", "0"))

# Lifetime of a cached failure fallback; unset keeps it forever
ANALYSIS_FAILURE_TTL: Optional[float] = _optional_float("ANALYSIS_FAILURE_TTL")


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Check if running in production environment."""
    return APP_ENV == "production"


def validate_config() -> list[str]:
    """
    Validate configuration values.

    Returns:
        List of missing or invalid configuration keys (empty if all valid).
    """
    errors = []

    if is_production() and not CRON_SECRET:
        errors.append("CRON_SECRET is required in production")

    if REQUEST_TIMEOUT < 1:
        errors.append("REQUEST_TIMEOUT must be at least 1 second")

    if FETCH_MAX_WORKERS < 1:
        errors.append("FETCH_MAX_WORKERS must be at least 1")

    if RSS_MAX_FEEDS < 1:
        errors.append("RSS_MAX_FEEDS must be at least 1")

    if RSS_MAX_ARTICLES < 1:
        errors.append("RSS_MAX_ARTICLES must be at least 1")

    for name, value in (
        ("HN_CACHE_TTL", HN_CACHE_TTL),
        ("RSS_CACHE_TTL", RSS_CACHE_TTL),
        ("UNIFIED_CACHE_TTL", UNIFIED_CACHE_TTL),
    ):
        if value < 0:
            errors.append(f"{name} cannot be negative")

    if ANALYSIS_CACHE_MAX_ENTRIES < 0:
        errors.append("ANALYSIS_CACHE_MAX_ENTRIES cannot be negative")

    if ANALYSIS_FAILURE_TTL is not None and ANALYSIS_FAILURE_TTL < 0:
        errors.append("ANALYSIS_FAILURE_TTL cannot be negative")

    return errors


def print_config_summary() -> None:
    """Print a summary of current configuration (safe for logs, no secrets)."""
    print(f"  APP_ENV: {APP_ENV}")
    print(f"  DEBUG: {DEBUG}")
    print(f"  OPENROUTER_API_KEY: {'***' if OPENROUTER_API_KEY else '(not set, mock analysis)'}")
    print(f"  OPENROUTER_MODEL: {OPENROUTER_MODEL}")
    print(f"  CRON_SECRET: {'***' if CRON_SECRET else '(not set)'}")
    print(f"  REQUEST_TIMEOUT: {REQUEST_TIMEOUT}s")
    print(f"  FETCH_MAX_WORKERS: {FETCH_MAX_WORKERS}")
    print(f"  RSS_MAX_FEEDS: {RSS_MAX_FEEDS}")
    print(f"  RSS_MAX_ARTICLES: {RSS_MAX_ARTICLES}")
    print(f"  HN_CACHE_TTL: {HN_CACHE_TTL:g}s")
    print(f"  RSS_CACHE_TTL: {RSS_CACHE_TTL:g}s")
    print(f"  UNIFIED_CACHE_TTL: {UNIFIED_CACHE_TTL:g}s")
    print(f"  ANALYSIS_CACHE_MAX_ENTRIES: {ANALYSIS_CACHE_MAX_ENTRIES or 'unbounded'}")
    failure_ttl = "permanent" if ANALYSIS_FAILURE_TTL is None else f"{ANALYSIS_FAILURE_TTL:g}s"
    print(f"  ANALYSIS_FAILURE_TTL: {failure_ttl}")
