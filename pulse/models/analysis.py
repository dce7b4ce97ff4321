"""
Analysis and trend result models.
"""

from dataclasses import dataclass
from typing import Any, Optional

from pulse.models.items import Story, UnifiedContent, as_int

SENTIMENTS = ("positive", "neutral", "negative")
TECHNICAL_LEVELS = ("beginner", "intermediate", "advanced")

# Stand-ins used when an article enters trend analysis without engagement data
DEFAULT_ARTICLE_SCORE = 50
DEFAULT_ARTICLE_COMMENTS = 5


@dataclass
class AnalysisResult:
    """
    Per-item analysis, from the LLM or from a deterministic template.

    Attributes:
        summary: Short prose summary.
        sentiment: One of SENTIMENTS.
        key_points: At most four short strings.
        technical_level: One of TECHNICAL_LEVELS.
        relevance_score: Relevance in [0, 1].
    """
    summary: str
    sentiment: str
    key_points: list[str]
    technical_level: str
    relevance_score: float

    def to_dict(self) -> dict:
        return {
            "summary": self.summary,
            "sentiment": self.sentiment,
            "keyPoints": list(self.key_points),
            "technicalLevel": self.technical_level,
            "relevanceScore": self.relevance_score,
        }


@dataclass
class CategoryCount:
    """One bar of the category histogram."""
    category: str
    count: int
    percentage: int

    def to_dict(self) -> dict:
        return {"category": self.category, "count": self.count, "percentage": self.percentage}


@dataclass
class TrendAnalysis:
    """
    One day's aggregate view over a batch of items.

    Percentages are rounded independently, so neither the category shares nor
    the sentiment split are guaranteed to add up to 100.
    """
    top_categories: list[CategoryCount]
    emerging_topics: list[str]
    sentiment: dict[str, int]
    key_insights: list[str]
    todays_summary: str

    def to_dict(self) -> dict:
        return {
            "topCategories": [entry.to_dict() for entry in self.top_categories],
            "emergingTopics": list(self.emerging_topics),
            "sentiment": dict(self.sentiment),
            "keyInsights": list(self.key_insights),
            "todaysSummary": self.todays_summary,
        }


@dataclass
class TrendItem:
    """The story-like fields trend analysis reads from each item."""
    title: str
    score: float = 0
    comments: int = 0
    category: Optional[str] = None

    @classmethod
    def from_story(cls, story: Story) -> "TrendItem":
        return cls(
            title=story.title,
            score=story.score,
            comments=story.descendants,
            category=story.category,
        )

    @classmethod
    def from_unified(cls, content: UnifiedContent) -> "TrendItem":
        """Articles (and zero-engagement stories) get the default score and comment count."""
        return cls(
            title=content.title,
            score=content.score or DEFAULT_ARTICLE_SCORE,
            comments=content.comments or DEFAULT_ARTICLE_COMMENTS,
            category=content.category,
        )

    @classmethod
    def from_story_dict(cls, data: dict[str, Any]) -> "TrendItem":
        return cls(
            title=data.get("title") or "",
            score=as_int(data.get("score")),
            comments=as_int(data.get("descendants")),
            category=data.get("category"),
        )

    @classmethod
    def from_content_dict(cls, data: dict[str, Any]) -> "TrendItem":
        return cls(
            title=data.get("title") or "",
            score=as_int(data.get("score"), None) or DEFAULT_ARTICLE_SCORE,
            comments=as_int(data.get("comments"), None) or DEFAULT_ARTICLE_COMMENTS,
            category=data.get("category"),
        )
