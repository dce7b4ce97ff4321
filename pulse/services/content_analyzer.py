"""
AI Content Analysis Service using OpenRouter.

Produces a short structured analysis (summary, sentiment, key points,
technical level, relevance) for a Hacker News story or a unified content item.
OpenRouter exposes an OpenAI-compatible chat completions API, so any model it
hosts can be used.

Analyses are cached per item for the life of the process:

- No API key: a deterministic template ("mock") analysis is returned.
- API key: the LLM is asked for JSON, which is validated field by field.
- The LLM call fails: a second template ("fallback") analysis is returned and
  cached for ANALYSIS_FAILURE_TTL seconds (forever when unset), so a failed
  item is not retried until that entry expires.
"""

import json
import math
import requests
from typing import Any, List, Optional

from pulse.cache import TTLCache
from pulse.config import (
    ANALYSIS_CACHE_MAX_ENTRIES,
    ANALYSIS_FAILURE_TTL,
    OPENROUTER_API_KEY,
    OPENROUTER_API_URL,
    OPENROUTER_MODEL,
    REQUEST_TIMEOUT,
)
from pulse.logging_util import setup_logger
from pulse.models.analysis import SENTIMENTS, TECHNICAL_LEVELS, AnalysisResult
from pulse.models.items import HN_SOURCE, Story, UnifiedContent
from pulse.trends.analyzer import score_bucket

logger = setup_logger(__name__)

# Sentinel meaning "read the value from config"
_FROM_CONFIG = object()

MAX_KEY_POINTS = 4

# Unified items in these categories are rated advanced by the template analysis
ADVANCED_CATEGORY_MARKERS = ("Security", "Red Team", "Blue Team")

STORY_SYSTEM_PROMPT = (
    "You are an expert tech analyst who summarizes and analyzes Hacker News stories. "
    "Always respond with valid JSON."
)
UNIFIED_SYSTEM_PROMPT = (
    "You are an expert tech and cybersecurity analyst who summarizes and analyzes "
    "content from HackerNews and security blogs. Always respond with valid JSON."
)


class AnalysisError(Exception):
    """Raised when an LLM analysis cannot be produced."""


class LLMResponseError(AnalysisError):
    """The LLM answered, but not with a usable JSON object."""


def sanitize_analysis(
    raw: dict,
    summary_default: str,
    key_points_default: List[str],
    relevance_default: float,
) -> AnalysisResult:
    """
    Coerce an LLM JSON object into a valid AnalysisResult.

    Invalid fields are replaced rather than rejected:
    - sentiment outside SENTIMENTS -> "neutral"
    - keyPoints not a list -> key_points_default; always cut to MAX_KEY_POINTS
    - technicalLevel outside TECHNICAL_LEVELS -> "intermediate"
    - relevanceScore not a number -> relevance_default; always clamped to [0, 1]
    """
    sentiment = raw.get("sentiment")
    if sentiment not in SENTIMENTS:
        sentiment = "neutral"

    key_points = raw.get("keyPoints")
    if not isinstance(key_points, list):
        key_points = key_points_default

    technical_level = raw.get("technicalLevel")
    if technical_level not in TECHNICAL_LEVELS:
        technical_level = "intermediate"

    relevance = raw.get("relevanceScore")
    if isinstance(relevance, bool) or not isinstance(relevance, (int, float)) or math.isnan(relevance):
        relevance = relevance_default

    return AnalysisResult(
        summary=str(raw.get("summary") or summary_default),
        sentiment=sentiment,
        key_points=[str(point) for point in key_points[:MAX_KEY_POINTS]],
        technical_level=technical_level,
        relevance_score=float(max(0, min(1, relevance))),
    )


def parse_analysis_json(text: str) -> dict:
    """
    Parse the LLM reply strictly as a JSON object.

    Raises:
        LLMResponseError: If the text is not JSON or not an object.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise LLMResponseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class ContentAnalyzer:
    """AI-powered item analysis using the OpenRouter API, with template fallbacks."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        api_url: Optional[str] = None,
        max_entries: int = ANALYSIS_CACHE_MAX_ENTRIES,
        failure_ttl: Any = _FROM_CONFIG,
    ):
        self.api_key = api_key if api_key is not None else OPENROUTER_API_KEY
        self.model = model or OPENROUTER_MODEL
        self.api_url = api_url or OPENROUTER_API_URL
        self.failure_ttl = ANALYSIS_FAILURE_TTL if failure_ttl is _FROM_CONFIG else failure_ttl
        self.story_cache = TTLCache(ttl=None, max_size=max_entries)
        self.unified_cache = TTLCache(ttl=None, max_size=max_entries)

    def is_available(self) -> bool:
        """Check if LLM analysis is available (API key configured)."""
        return bool(self.api_key)

    def clear_cache(self) -> None:
        self.story_cache.clear()
        self.unified_cache.clear()

    # -------------------------------------------------------------------------
    # Hacker News stories
    # -------------------------------------------------------------------------

    def analyze_story(self, story: Story) -> AnalysisResult:
        """
        Analyze a Hacker News story.

        Args:
            story: The enriched story.

        Returns:
            AnalysisResult (cached per story id).
        """
        key = f"story-{story.id}"
        cached = self.story_cache.get(key)
        if cached is not None:
            return cached

        if not self.is_available():
            analysis = self._mock_story_analysis(story)
            self.story_cache.set(key, analysis)
            return analysis

        try:
            reply = self._call_api(self._build_story_prompt(story), STORY_SYSTEM_PROMPT)
            analysis = sanitize_analysis(
                parse_analysis_json(reply),
                summary_default=f"A story about {story.title}",
                key_points_default=[f"{story.score} points", f"{story.descendants} comments"],
                relevance_default=0.5,
            )
        except Exception as e:
            logger.error(f"[analysis] Error analyzing story {story.id}: {e}")
            analysis = self._fallback_story_analysis(story)
            self.story_cache.set(key, analysis, ttl=self.failure_ttl)
            return analysis

        self.story_cache.set(key, analysis)
        return analysis

    def _mock_story_analysis(self, story: Story) -> AnalysisResult:
        return AnalysisResult(
            summary=(
                f"A discussion about {story.title} with {story.score} points "
                f"and {story.descendants} comments."
            ),
            sentiment=score_bucket(story.score),
            key_points=[
                f"Popular story with {story.score} points",
                f"Generated {story.descendants} comments",
                f"Posted {story.time_ago} by {story.by}",
            ],
            technical_level="advanced" if story.category == "Programming" else "intermediate",
            relevance_score=min(story.score / 100, 1),
        )

    def _fallback_story_analysis(self, story: Story) -> AnalysisResult:
        return AnalysisResult(
            summary=(
                f'A story titled "{story.title}" with {story.score} points '
                f"and {story.descendants} comments."
            ),
            sentiment="neutral",
            key_points=[
                f"{story.score} points on Hacker News",
                f"{story.descendants} comments from the community",
                f"Posted by {story.by} {story.time_ago}",
                f"From {story.domain}" if story.domain else "Discussion post",
            ],
            technical_level="intermediate",
            relevance_score=0.5,
        )

    def _build_story_prompt(self, story: Story) -> str:
        return f"""Analyze this Hacker News story:

Title: {story.title}
URL: {story.url or 'No URL'}
Author: {story.by}
Score: {story.score} points
Comments: {story.descendants}
Category: {story.category}
Posted: {story.time_ago}

Please provide:
1. A 2-3 sentence summary of what this story is about
2. The general sentiment (positive/neutral/negative) based on the title and engagement
3. 3-4 key points about this story
4. Technical complexity level (beginner/intermediate/advanced)
5. Relevance score (0-1) for tech professionals

Format your response as JSON with keys: summary, sentiment, keyPoints (array), technicalLevel, relevanceScore"""

    # -------------------------------------------------------------------------
    # Unified content
    # -------------------------------------------------------------------------

    def analyze_unified(self, content: UnifiedContent) -> AnalysisResult:
        """
        Analyze a unified content item (story or article).

        Args:
            content: The unified item.

        Returns:
            AnalysisResult (cached per unified id).
        """
        key = f"unified-{content.id}"
        cached = self.unified_cache.get(key)
        if cached is not None:
            return cached

        if not self.is_available():
            analysis = self._mock_unified_analysis(content)
            self.unified_cache.set(key, analysis)
            return analysis

        try:
            reply = self._call_api(self._build_unified_prompt(content), UNIFIED_SYSTEM_PROMPT)
            analysis = sanitize_analysis(
                parse_analysis_json(reply),
                summary_default=f"Content about {content.title}",
                key_points_default=[content.source, content.category, f"Published {content.time_ago}"],
                relevance_default=0.6,
            )
        except Exception as e:
            logger.error(f"[analysis] Error analyzing unified content {content.id}: {e}")
            analysis = self._fallback_unified_analysis(content)
            self.unified_cache.set(key, analysis, ttl=self.failure_ttl)
            return analysis

        self.unified_cache.set(key, analysis)
        return analysis

    def _mock_unified_analysis(self, content: UnifiedContent) -> AnalysisResult:
        if content.is_story:
            summary = (
                f"A {HN_SOURCE} discussion about {content.title} with {content.score} points "
                f"and {content.comments} comments."
            )
            sentiment = score_bucket(content.score or 0)
            key_points = [
                f"Popular {content.source} story with {content.score} points",
                f"Generated {content.comments} comments",
                f"Posted {content.time_ago} by {content.author}",
            ]
        else:
            summary = f"A {content.source} article about {content.title} published {content.time_ago}."
            sentiment = "neutral"
            key_points = [
                f"{content.source} article from {content.domain}",
                f"Published {content.time_ago}",
                f"Category: {content.category}",
                "Includes detailed content" if content.description else "Technical article",
            ]

        category = content.category or ""
        advanced = any(marker in category for marker in ADVANCED_CATEGORY_MARKERS)

        return AnalysisResult(
            summary=summary,
            sentiment=sentiment,
            key_points=key_points,
            technical_level="advanced" if advanced else "intermediate",
            relevance_score=min(content.score / 100, 1) if content.is_story and content.score else 0.7,
        )

    def _fallback_unified_analysis(self, content: UnifiedContent) -> AnalysisResult:
        return AnalysisResult(
            summary=f'Content titled "{content.title}" from {content.source} published {content.time_ago}.',
            sentiment="neutral",
            key_points=[
                f"{content.source} content",
                f"Category: {content.category}",
                f"Posted {content.time_ago} by {content.author}",
                f"From {content.domain}" if content.domain else "Tech/Security content",
            ],
            technical_level="intermediate",
            relevance_score=0.6,
        )

    def _build_unified_prompt(self, content: UnifiedContent) -> str:
        lines = [
            f"Analyze this {content.source} content:",
            "",
            f"Title: {content.title}",
            f"URL: {content.url or 'No URL'}",
            f"Author: {content.author}",
            f"Type: {content.type}",
            f"Source: {content.source}",
            f"Category: {content.category}",
            f"Posted: {content.time_ago}",
        ]
        if content.is_story:
            lines.append(f"Score: {content.score} points, Comments: {content.comments}")
        if content.description:
            lines.append(f"Description: {content.description[:2000]}")

        return "\n".join(lines) + """

Please provide:
1. A 2-3 sentence summary of what this content is about
2. The general sentiment (positive/neutral/negative) based on the title and engagement
3. 3-4 key points about this content
4. Technical complexity level (beginner/intermediate/advanced)
5. Relevance score (0-1) for tech and security professionals

Format your response as JSON with keys: summary, sentiment, keyPoints (array), technicalLevel, relevanceScore"""

    # -------------------------------------------------------------------------
    # API
    # -------------------------------------------------------------------------

    def _call_api(self, prompt: str, system_prompt: str, max_tokens: int = 400) -> str:
        """
        Make a chat completions call and return the reply text.

        Raises:
            requests.RequestException: On network errors.
            AnalysisError: On an error status or a reply without content.
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "X-Title": "Content Pulse",
        }

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": 0.3,  # Lower for more focused responses
        }

        response = requests.post(
            self.api_url,
            headers=headers,
            json=payload,
            timeout=REQUEST_TIMEOUT,
        )

        if response.status_code != 200:
            raise AnalysisError(f"API error ({response.status_code}): {response.text[:200]}")

        data = response.json()
        try:
            reply = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMResponseError(f"No response content from {self.model}") from e
        if not reply:
            raise LLMResponseError(f"No response content from {self.model}")
        return reply.strip()


# Singleton instance
_analyzer: Optional[ContentAnalyzer] = None


def get_analyzer() -> ContentAnalyzer:
    """Get the singleton content analyzer instance."""
    global _analyzer
    if _analyzer is None:
        _analyzer = ContentAnalyzer()
    return _analyzer


def reset_analyzer() -> None:
    """Forget the singleton so the next get_analyzer() re-reads config."""
    global _analyzer
    _analyzer = None
