"""
Test Configuration - Externalized Test Data

This file contains all configurable test data, expected values, and test parameters.
Update values here when requirements change - no need to modify test scripts.

Structure:
- CONFIG: General test configuration
- EXPECTED: Expected values for validation tests
- TEST_DATA: Test input data (HN records, RSS documents, unified items)
- MESSAGES: Expected error messages and outputs
"""

from typing import Any, Dict, List


# Frozen "now" for every clock-dependent test: 2023-11-14 22:13:20 UTC
NOW = 1_700_000_000


# =============================================================================
# GENERAL TEST CONFIGURATION
# =============================================================================

CONFIG = {
    "environments": {
        "production": "production",
        "development": "development",
    },
    "cron_secret": "s3cret-token",
    "test_api_key": "test_api_key",
    "test_model": "test-model",
    "available_views": ["content", "stories", "rss", "trends"],
}


# =============================================================================
# TEST INPUT DATA
# =============================================================================

TEST_DATA = {
    # Ranked ids as returned by topstories.json
    "hn_top_story_ids": [1001, 1002, 1003, 1004],

    # Raw HN item records keyed by id
    "hn_items": {
        1001: {
            "id": 1001,
            "type": "story",
            "title": "New LLM beats every benchmark",
            "url": "https://www.example.com/llm",
            "by": "alice",
            "time": NOW - 7200,
            "score": 150,
            "descendants": 40,
        },
        1002: {
            "id": 1002,
            "type": "story",
            "title": "Show HN: My Rust parser",
            "url": "https://github.com/bob/parser",
            "by": "bob",
            "time": NOW - 60,
            "score": 60,
            "descendants": 12,
        },
        1003: {
            "id": 1003,
            "type": "job",
            "title": "Acme is hiring engineers",
            "by": "acme",
            "time": NOW - 300,
            "score": 1,
        },
        1004: {
            "id": 1004,
            "type": "story",
            "title": "Ask HN: How do you take notes?",
            "text": "Curious what everyone uses.",
            "by": "carol",
            "time": NOW - 90000,
            "score": 10,
            "descendants": 80,
        },
    },

    # RSS 2.0 document: two usable entries and one with neither link nor guid
    "rss_document": """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Hack The Box Blog</title>
    <link>https://www.hackthebox.com/blog</link>
    <description>HTB blog</description>
    <item>
      <title>Exploit chain walkthrough</title>
      <link>https://www.hackthebox.com/blog/exploit-chain</link>
      <guid>https://www.hackthebox.com/blog/exploit-chain</guid>
      <description>&lt;p&gt;An offensive &lt;b&gt;attack&lt;/b&gt; path&lt;/p&gt;</description>
      <pubDate>Tue, 14 Nov 2023 20:00:00 GMT</pubDate>
    </item>
    <item>
      <title>SOC detection tips</title>
      <link>https://www.hackthebox.com/blog/soc-tips</link>
      <description>Monitoring basics for new analysts</description>
      <pubDate>Mon, 13 Nov 2023 10:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Orphan entry</title>
      <description>No link and no guid</description>
    </item>
  </channel>
</rss>
""",

    # Unified items as the dashboard posts them back to /api/analyze
    "unified_content": [
        {
            "id": "hn-1001",
            "title": "New LLM beats every benchmark",
            "url": "https://www.example.com/llm",
            "author": "alice",
            "score": 150,
            "comments": 40,
            "timeAgo": "2 hours ago",
            "category": "AI/ML",
            "source": "HackerNews",
            "type": "story",
            "pubDate": "2023-11-14T20:13:20+00:00",
            "domain": "example.com",
        },
        {
            "id": "rss-red-team-0123456789ab",
            "title": "Exploit chain walkthrough",
            "url": "https://www.hackthebox.com/blog/exploit-chain",
            "description": "An offensive attack path",
            "author": "HackTheBox",
            "timeAgo": "2 hours ago",
            "category": "Red Team",
            "source": "HackTheBox",
            "sourceCategory": "Red Team",
            "type": "article",
            "pubDate": "2023-11-14T20:00:00+00:00",
            "domain": "hackthebox.com",
        },
    ],

    # Title/score/comments/category triples for trend tests
    "trend_items": [
        {"title": "New LLM beats every benchmark", "score": 150, "comments": 40, "category": "AI/ML"},
        {"title": "Show HN: My Rust parser", "score": 60, "comments": 12, "category": "Programming"},
        {"title": "Ask HN: How do you take notes?", "score": 10, "comments": 80, "category": "Ask HN"},
    ],

    # Titles that share topic words
    "topic_titles": [
        "Kubernetes operators explained",
        "Writing kubernetes operators in Python",
        "Postgres tuning for kubernetes",
        "Postgres vacuum internals",
    ],
}


# =============================================================================
# EXPECTED VALUES FOR VALIDATION
# =============================================================================

EXPECTED = {
    "time_ago": [
        # (seconds elapsed, expected text)
        (0, "0 minutes ago"),
        (59, "0 minutes ago"),
        (60, "1 minute ago"),
        (119, "1 minute ago"),
        (3599, "59 minutes ago"),
        (3600, "1 hour ago"),
        (7199, "1 hour ago"),
        (86399, "23 hours ago"),
        (86400, "1 day ago"),
        (172800, "2 days ago"),
    ],

    "hn": {
        "story_ids": [1001, 1002, 1004],
        "categories": {1001: "AI/ML", 1002: "Programming", 1004: "Ask HN"},
        "domains": {1001: "example.com", 1002: "github.com", 1004: None},
        "time_ago": {1001: "2 hours ago", 1002: "1 minute ago", 1004: "1 day ago"},
    },

    "rss": {
        "titles": ["Exploit chain walkthrough", "SOC detection tips"],
        "catch_all_categories": ["Red Team", "Blue Team"],
        "content_snippet": "An offensive attack path",
        "default_author": "HackTheBox",
        "time_ago": ["2 hours ago", "1 day ago"],
        "feed_count": 14,
        "default_feed_count": 6,
    },

    "trends": {
        "sentiment": {"positive": 33, "neutral": 33, "negative": 33},
        "top_category": "AI/ML",
        "insights": [
            "3 stories analyzed from today's front page",
            "Most popular category: AI/ML (33%)",
            "Average score: 73",
            "Total comments: 132",
        ],
        "mood": "moderately engaged",
        "topics": ["kubernetes", "operators", "postgres"],
    },

    "analysis": {
        "story_relevance_default": 0.5,
        "unified_relevance_default": 0.6,
        "article_mock_relevance": 0.7,
        "max_key_points": 4,
    },
}


# =============================================================================
# ERROR MESSAGES - Expected messages for validation
# =============================================================================

MESSAGES = {
    "api_errors": {
        "story_not_found": "Story not found",
        "content_not_found": "Content not found",
        "invalid_type": "Invalid request type",
        "analysis_failed": "Failed to analyze content",
        "unauthorized": "Unauthorized",
        "invalid_body": "Invalid request body",
    },
    "config_errors": {
        "cron_secret": "CRON_SECRET",
    },
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_hn_item(item_id: int) -> Dict[str, Any]:
    """Get a copy of a raw HN record."""
    return dict(TEST_DATA["hn_items"][item_id])


def get_unified_content() -> List[Dict[str, Any]]:
    """Get copies of the unified wire items."""
    return [dict(item) for item in TEST_DATA["unified_content"]]
