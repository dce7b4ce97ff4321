"""
Content Pulse - JSON API

Flask app serving the dashboard API: Hacker News stories, HackTheBox RSS
articles, the unified feed, per-item analysis, daily trends and a cron
refresh hook.

Run with: python -m web.app
Or: cd web && python app.py
"""

import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, jsonify, request

from pulse.config import CRON_SECRET, DEBUG
from pulse.content import (
    DEFAULT_CONTENT_LIMIT,
    MAX_CONTENT_FETCH,
    ContentUnifier,
    filter_content,
    summarize_content,
)
from pulse.logging_util import setup_logger
from pulse.models import Story, TrendItem, UnifiedContent
from pulse.services import ContentAnalyzer, get_analyzer, reset_analyzer
from pulse.sources import HackerNewsSource, RSSSource, available_feeds
from pulse.sources.hackernews import DEFAULT_STORY_LIMIT, MAX_STORY_LIMIT
from pulse.trends import TrendAnalyzer

logger = setup_logger(__name__)

app = Flask(__name__)

DEFAULT_RSS_LIMIT = 25
MAX_RSS_LIMIT = 50

# The cron job refreshes this many stories and analyzes trends on the top slice
CRON_STORY_LIMIT = 30
CRON_TREND_STORIES = 20


# =============================================================================
# Service Singletons
# =============================================================================

_hn_source: Optional[HackerNewsSource] = None
_rss_source: Optional[RSSSource] = None
_unifier: Optional[ContentUnifier] = None
_trend_analyzer: Optional[TrendAnalyzer] = None


def get_hn_source() -> HackerNewsSource:
    """Get the shared Hacker News source (and its story cache)."""
    global _hn_source
    if _hn_source is None:
        _hn_source = HackerNewsSource()
    return _hn_source


def get_rss_source() -> RSSSource:
    """Get the shared RSS source (and its article cache)."""
    global _rss_source
    if _rss_source is None:
        _rss_source = RSSSource()
    return _rss_source


def get_unifier() -> ContentUnifier:
    global _unifier
    if _unifier is None:
        _unifier = ContentUnifier(hn_source=get_hn_source(), rss_source=get_rss_source())
    return _unifier


def get_trend_analyzer() -> TrendAnalyzer:
    global _trend_analyzer
    if _trend_analyzer is None:
        _trend_analyzer = TrendAnalyzer()
    return _trend_analyzer


def reset_services() -> None:
    """Drop every service singleton, caches included."""
    global _hn_source, _rss_source, _unifier, _trend_analyzer
    _hn_source = _rss_source = _unifier = _trend_analyzer = None
    reset_analyzer()


# =============================================================================
# Request Helpers
# =============================================================================

def _int_arg(name: str, default: int) -> int:
    """Read a non-negative integer query parameter; unparsable values fall back to default."""
    try:
        return max(int(request.args.get(name, default)), 0)
    except (TypeError, ValueError):
        return default


def _list_arg(name: str) -> List[str]:
    """Read a comma-separated query parameter, dropping empty parts."""
    raw = request.args.get(name, "")
    return [part for part in raw.split(",") if part]


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Content Endpoints
# =============================================================================

@app.route("/api/stories")
def api_stories():
    """Top Hacker News stories, optionally filtered by exact category."""
    limit = _int_arg("limit", DEFAULT_STORY_LIMIT)
    category = request.args.get("category")

    try:
        source = get_hn_source()
        stories = source.fetch_top_stories(min(limit, MAX_STORY_LIMIT))

        if category and category != "all":
            stories = [story for story in stories if story.category == category]

        return jsonify({
            "stories": [story.to_dict() for story in stories],
            "total": len(stories),
            "cached": source.is_cached(),
        })
    except Exception:
        logger.exception("Stories API error")
        return jsonify({"error": "Failed to fetch stories"}), 500


@app.route("/api/rss")
def api_rss():
    """HackTheBox articles from the selected feed categories."""
    selected = _list_arg("feeds") or None
    limit = _int_arg("limit", DEFAULT_RSS_LIMIT)

    try:
        source = get_rss_source()
        articles = source.fetch_all_feeds(selected)

        return jsonify({
            "articles": [article.to_dict() for article in articles[:min(limit, MAX_RSS_LIMIT)]],
            "total": len(articles),
            "cached": source.is_cached(),
            "availableFeeds": available_feeds(),
        })
    except Exception:
        logger.exception("RSS API error")
        return jsonify({"error": "Failed to fetch RSS feeds"}), 500


@app.route("/api/content")
def api_content():
    """
    Unified feed with filters.

    Fetches twice the requested limit (capped) so that filtering still leaves
    enough items, then filters and cuts to limit.
    """
    include_hn = request.args.get("includeHN") != "false"
    include_rss = request.args.get("includeRSS") != "false"
    rss_feeds = _list_arg("rssFeeds")
    limit = _int_arg("limit", DEFAULT_CONTENT_LIMIT)
    category = request.args.get("category")
    source = request.args.get("source")

    try:
        unifier = get_unifier()
        content = unifier.fetch_unified_content(
            include_hn=include_hn,
            include_rss=include_rss,
            rss_feeds=rss_feeds,
            limit=min(limit * 2, MAX_CONTENT_FETCH),
        )

        content = filter_content(content, source=source, category=category)[:limit]

        return jsonify({
            "content": [item.to_dict() for item in content],
            "total": len(content),
            "cached": unifier.is_cached(),
            **summarize_content(content),
        })
    except Exception:
        logger.exception("Unified content API error")
        return jsonify({"error": "Failed to fetch unified content"}), 500


# =============================================================================
# Analysis Endpoint
# =============================================================================

def _dict_items(value) -> List[dict]:
    """The dict entries of a request list; anything else yields nothing."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _trend_items_from_request(data: dict) -> Optional[List[TrendItem]]:
    """Unified content wins over stories when both are sent."""
    content = data.get("content")
    if isinstance(content, list):
        return [TrendItem.from_content_dict(item) for item in _dict_items(content)]

    stories = data.get("stories")
    if isinstance(stories, list):
        return [TrendItem.from_story_dict(story) for story in _dict_items(stories)]

    return None


@app.route("/api/analyze", methods=["POST"])
def api_analyze():
    """
    Analyze one item or a batch.

    Body:
        {"type": "unified", "contentId": ..., "content": [...]}
        {"type": "story", "storyId": ..., "stories": [...]}
        {"type": "trends", "content": [...]} or {"type": "trends", "stories": [...]}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    request_type = data.get("type")

    try:
        analyzer: ContentAnalyzer = get_analyzer()

        if request_type == "unified" and data.get("contentId"):
            content_id = data["contentId"]
            match = next(
                (item for item in _dict_items(data.get("content")) if item.get("id") == content_id),
                None,
            )
            if match is None:
                return jsonify({"error": "Content not found"}), 404

            analysis = analyzer.analyze_unified(UnifiedContent.from_dict(match))
            return jsonify({"analysis": analysis.to_dict()})

        if request_type == "story" and data.get("storyId"):
            story_id = data["storyId"]
            match = next(
                (story for story in _dict_items(data.get("stories")) if story.get("id") == story_id),
                None,
            )
            if match is None:
                return jsonify({"error": "Story not found"}), 404

            analysis = analyzer.analyze_story(Story.from_dict(match))
            return jsonify({"analysis": analysis.to_dict()})

        if request_type == "trends":
            items = _trend_items_from_request(data)
            if items is not None:
                trends = get_trend_analyzer().analyze_trends(items)
                return jsonify({"trends": trends.to_dict()})

        return jsonify({"error": "Invalid request type"}), 400

    except ValueError as e:
        logger.warning(f"Rejected analysis request: {e}")
        return jsonify({"error": "Invalid request body"}), 400
    except Exception:
        logger.exception("Analysis API error")
        return jsonify({"error": "Failed to analyze content"}), 500


@app.route("/api/status")
def api_status():
    """Check whether LLM analysis is available and the cron hook is secured."""
    analyzer = get_analyzer()
    return jsonify({
        "llmAvailable": analyzer.is_available(),
        "model": analyzer.model if analyzer.is_available() else None,
        "cron": {"secured": bool(CRON_SECRET)},
    })


# =============================================================================
# Cron Endpoint
# =============================================================================

def _run_trends_async(stories: List[Story]) -> None:
    """Warm today's trend snapshot in a background thread."""
    try:
        get_trend_analyzer().analyze_trends([TrendItem.from_story(story) for story in stories])
        logger.info(f"[cron] Trend analysis completed for {len(stories)} stories")
    except Exception:
        logger.exception("[cron] Failed to run trend analysis")


@app.route("/api/cron", methods=["GET", "POST"])
def api_cron():
    """Refresh the story cache and warm today's trends."""
    if CRON_SECRET and request.headers.get("Authorization") != f"Bearer {CRON_SECRET}":
        return jsonify({"error": "Unauthorized"}), 401

    try:
        source = get_hn_source()
        was_cached = source.is_cached()
        stories = source.fetch_top_stories(CRON_STORY_LIMIT)

        if stories:
            thread = threading.Thread(target=_run_trends_async, args=(stories[:CRON_TREND_STORIES],))
            thread.daemon = True
            thread.start()

        timestamp = _utc_timestamp()
        logger.info(f"[cron] Cron job completed: refreshed {len(stories)} stories")

        return jsonify({
            "success": True,
            "timestamp": timestamp,
            "storiesRefreshed": len(stories),
            "cached": was_cached,
        })
    except Exception as e:
        logger.exception("[cron] Cron job error")
        return jsonify({
            "success": False,
            "error": str(e) or "Unknown error",
            "timestamp": _utc_timestamp(),
        }), 500


if __name__ == "__main__":
    print("=" * 50)
    print("Content Pulse API")
    print("=" * 50)
    print("Serving on http://localhost:5001/api")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=DEBUG, port=5001)
