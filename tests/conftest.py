"""
Pytest Configuration and Fixtures

This module provides:
- A frozen clock shared by every time-dependent test
- Sample stories, articles and unified items
- Mocked HTTP responses for the HN API and the RSS feeds
- An autouse fixture that resets the web app's service singletons
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.test_config import NOW, TEST_DATA, get_unified_content

from pulse.models import Article, Story, UnifiedContent


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(json_data=None, content: bytes = b"", status_code: int = 200) -> Mock:
    """Build a requests.Response stand-in."""
    response = Mock()
    response.status_code = status_code
    response.content = content
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    return response


def hn_api_side_effect(url, **kwargs):
    """Route HN API urls to the sample records."""
    if url.endswith("topstories.json"):
        return make_response(TEST_DATA["hn_top_story_ids"])
    item_id = int(url.rsplit("/", 1)[-1].split(".")[0])
    return make_response(TEST_DATA["hn_items"].get(item_id))


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def clock():
    """A clock frozen at NOW."""
    return FakeClock()


@pytest.fixture
def rss_response():
    """Successful response carrying the sample RSS document."""
    return make_response(content=TEST_DATA["rss_document"].encode("utf-8"))


@pytest.fixture
def sample_stories():
    """Enriched stories, ranked order."""
    return [
        Story(
            id=1001, title="New LLM beats every benchmark", by="alice", score=150,
            descendants=40, time=NOW - 7200, url="https://www.example.com/llm",
            domain="example.com", time_ago="2 hours ago", category="AI/ML",
        ),
        Story(
            id=1002, title="Show HN: My Rust parser", by="bob", score=60,
            descendants=12, time=NOW - 60, url="https://github.com/bob/parser",
            domain="github.com", time_ago="1 minute ago", category="Programming",
        ),
        Story(
            id=1004, title="Ask HN: How do you take notes?", by="carol", score=10,
            descendants=80, time=NOW - 90000, text="Curious what everyone uses.",
            time_ago="1 day ago", category="Ask HN",
        ),
    ]


@pytest.fixture
def sample_articles():
    """Normalized articles, newest first."""
    return [
        Article(
            id="red-team-aaaaaaaaaaaa",
            title="Exploit chain walkthrough",
            url="https://www.hackthebox.com/blog/exploit-chain",
            pub_date=datetime(2023, 11, 14, 20, 0, tzinfo=timezone.utc),
            content="An offensive attack path",
            description="<p>An offensive <b>attack</b> path</p>",
            source_category="Red Team",
            category="Red Team",
            time_ago="2 hours ago",
        ),
        Article(
            id="blue-team-bbbbbbbbbbbb",
            title="SOC detection tips",
            url="https://www.hackthebox.com/blog/soc-tips",
            pub_date=datetime(2023, 11, 13, 10, 0, tzinfo=timezone.utc),
            content="Monitoring basics for new analysts",
            description="Monitoring basics for new analysts",
            source_category="Blue Team",
            category="Blue Team",
            time_ago="1 day ago",
        ),
    ]


@pytest.fixture
def unified_dicts():
    """Unified items in their wire shape."""
    return get_unified_content()


@pytest.fixture
def unified_items(unified_dicts):
    """Unified items as models."""
    return [UnifiedContent.from_dict(item) for item in unified_dicts]


@pytest.fixture
def mock_hn_source(sample_stories):
    """HackerNewsSource stand-in returning the sample stories."""
    source = Mock()
    source.fetch_top_stories.return_value = sample_stories
    source.is_cached.return_value = False
    return source


@pytest.fixture
def mock_rss_source(sample_articles):
    """RSSSource stand-in returning the sample articles."""
    source = Mock()
    source.fetch_all_feeds.return_value = sample_articles
    source.is_cached.return_value = False
    return source


@pytest.fixture(autouse=True)
def reset_web_singletons():
    """Every test starts with fresh service singletons (and empty caches)."""
    from web import app as web_app
    web_app.reset_services()
    yield
    web_app.reset_services()
