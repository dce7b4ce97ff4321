"""
Core content models for Content Pulse.

Three shapes flow through the system:

    Story           a Hacker News story, enriched with domain/age/category
    Article         a HackTheBox blog post from one of the RSS feeds
    UnifiedContent  the shared shape both are merged into for the dashboard

Each model serializes to the JSON wire shape the dashboard consumes
(camelCase keys) via to_dict(). Optional fields that are unset are omitted
from the wire shape.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

HN_SOURCE = "HackerNews"
RSS_SOURCE = "HackTheBox"

STORY_TYPE = "story"
ARTICLE_TYPE = "article"

HN_ID_PREFIX = "hn-"
RSS_ID_PREFIX = "rss-"

_SOURCE_PREFIX_RE = re.compile(r"^(hn-|rss-)")


def strip_source_prefix(content_id: str) -> str:
    """Recover a source identifier from a unified id ("hn-123" -> "123")."""
    return _SOURCE_PREFIX_RE.sub("", str(content_id))


def parse_datetime(value) -> Optional[datetime]:
    """
    Parse an ISO-8601 string (or pass through a datetime) as an aware UTC datetime.

    Returns None for empty or unparsable values.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def as_int(value, default: Optional[int] = 0) -> Optional[int]:
    """
    Coerce a numeric wire value (int, float or numeric string) to int.

    Missing values give default.

    Raises:
        ValueError: If the value is present but not numeric.
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise ValueError(f"Expected a number, got {value!r}") from None


def _compact(data: dict) -> dict:
    """Drop keys whose value is None."""
    return {key: value for key, value in data.items() if value is not None}


@dataclass
class Story:
    """
    A Hacker News story.

    The raw fields mirror the HN item API; domain, time_ago and category are
    derived once at fetch time and never change afterwards.

    Attributes:
        id: HN item id.
        title: Story title.
        by: Author username.
        score: Points.
        descendants: Comment count.
        time: Unix timestamp (seconds) of posting.
        type: HN item type ("story" for everything we keep).
        url: External link, absent for text posts.
        text: Body of a text post.
        kids: Ids of top-level comments.
        domain: Hostname of url without "www.".
        time_ago: Relative age at fetch time ("3 hours ago").
        category: Heuristic category label.
    """

    id: int
    title: str
    by: str = ""
    score: int = 0
    descendants: int = 0
    time: int = 0
    type: str = STORY_TYPE
    url: Optional[str] = None
    text: Optional[str] = None
    kids: Optional[list[int]] = None
    domain: Optional[str] = None
    time_ago: str = ""
    category: Optional[str] = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Validate required fields.

        Raises:
            ValueError: If id or title is missing.
        """
        errors = []
        if self.id is None:
            errors.append("id is required")
        if not self.title or not str(self.title).strip():
            errors.append("title is required and cannot be empty")
        if errors:
            raise ValueError(f"Story validation failed: {'; '.join(errors)}")

    @property
    def posted_at(self) -> datetime:
        return datetime.fromtimestamp(self.time, tz=timezone.utc)

    def to_dict(self) -> dict:
        return _compact({
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "text": self.text,
            "by": self.by,
            "score": self.score,
            "descendants": self.descendants,
            "time": self.time,
            "type": self.type,
            "kids": self.kids,
            "domain": self.domain,
            "timeAgo": self.time_ago,
            "category": self.category,
        })

    @classmethod
    def from_dict(cls, data: dict) -> "Story":
        """
        Build a Story from an HN API record or a previously serialized story.

        Raises:
            ValueError: If the record lacks an id or title.
        """
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            by=data.get("by") or "",
            score=as_int(data.get("score")),
            descendants=as_int(data.get("descendants")),
            time=as_int(data.get("time")),
            type=data.get("type") or STORY_TYPE,
            url=data.get("url"),
            text=data.get("text"),
            kids=data.get("kids"),
            domain=data.get("domain"),
            time_ago=data.get("timeAgo") or "",
            category=data.get("category"),
        )

    def __str__(self) -> str:
        return f"[{HN_SOURCE}] {self.title} ({self.score} points)"


@dataclass
class Article:
    """
    A HackTheBox blog article from one RSS feed.

    Attributes:
        id: Stable identifier: feed category slug plus a hash of feed url and entry guid/link.
        title: Article title.
        url: Link to the article (required).
        pub_date: Publication time (aware, UTC).
        content: Full content, or a plain-text snippet when the feed has none.
        description: Feed summary/description.
        author: Author name.
        source: Always "HackTheBox".
        source_category: Label of the feed the article came from.
        category: Heuristic category label.
        time_ago: Relative age at fetch time.
    """

    id: str
    title: str
    url: str
    pub_date: datetime
    content: str = ""
    description: str = ""
    author: str = RSS_SOURCE
    source: str = RSS_SOURCE
    source_category: str = ""
    category: Optional[str] = None
    time_ago: str = ""

    def to_dict(self) -> dict:
        return _compact({
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "content": self.content,
            "description": self.description,
            "pubDate": self.pub_date.isoformat(),
            "author": self.author,
            "source": self.source,
            "sourceCategory": self.source_category,
            "category": self.category,
            "timeAgo": self.time_ago,
        })

    def __str__(self) -> str:
        return f"[{self.source}/{self.source_category}] {self.title}"


@dataclass
class UnifiedContent:
    """
    A story or article in the shared dashboard shape.

    The id carries a source prefix ("hn-" for stories, "rss-" for articles)
    that always agrees with type and source. score/comments are only set for
    stories; description/source_category only for articles.
    """

    id: str
    title: str
    author: str
    time_ago: str
    category: str
    source: str
    type: str
    pub_date: Optional[datetime] = None
    url: Optional[str] = None
    description: Optional[str] = None
    score: Optional[int] = None
    comments: Optional[int] = None
    source_category: Optional[str] = None
    domain: Optional[str] = None

    @property
    def source_id(self) -> str:
        return strip_source_prefix(self.id)

    @property
    def is_story(self) -> bool:
        return self.type == STORY_TYPE

    def to_dict(self) -> dict:
        return _compact({
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "description": self.description,
            "author": self.author,
            "score": self.score,
            "comments": self.comments,
            "timeAgo": self.time_ago,
            "category": self.category,
            "source": self.source,
            "sourceCategory": self.source_category,
            "type": self.type,
            "pubDate": self.pub_date.isoformat() if self.pub_date else None,
            "domain": self.domain,
        })

    @classmethod
    def from_dict(cls, data: dict) -> "UnifiedContent":
        """Rebuild a unified item from its wire shape (e.g. a dashboard request)."""
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            author=data.get("author") or "",
            time_ago=data.get("timeAgo") or "",
            category=data.get("category") or "",
            source=data.get("source") or "",
            type=data.get("type") or "",
            pub_date=parse_datetime(data.get("pubDate")),
            url=data.get("url"),
            description=data.get("description"),
            score=as_int(data.get("score"), None),
            comments=as_int(data.get("comments"), None),
            source_category=data.get("sourceCategory"),
            domain=data.get("domain"),
        )

    def __str__(self) -> str:
        return f"[{self.source}] {self.title}"
