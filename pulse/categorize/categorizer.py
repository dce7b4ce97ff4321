"""
Heuristic categorization for stories and articles.

Both sources are labelled by an ordered list of CategoryRule objects; the
first rule whose predicate accepts the item decides the label. The rule lists
are built once from pulse.categorize.rules and are pure functions of their
input, so they can be tested without any network access.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from pulse.categorize.rules import (
    HN_DEFAULT_CATEGORY,
    HN_KEYWORD_CATEGORIES,
    HN_PREFIX_CATEGORIES,
    HN_RESEARCH_DOMAINS,
    HN_RESEARCH_KEYWORDS,
    RSS_CATCH_ALL_FEED_CATEGORY,
    RSS_DEFAULT_CATEGORY,
    RSS_KEYWORD_CATEGORIES,
)
from pulse.utils import extract_domain


@dataclass(frozen=True)
class CategoryText:
    """The text a rule looks at: lower-cased content plus an optional domain."""
    text: str
    domain: str = ""


@dataclass(frozen=True)
class CategoryRule:
    """A label and the predicate that selects it."""
    label: str
    predicate: Callable[[CategoryText], bool]

    def matches(self, subject: CategoryText) -> bool:
        return self.predicate(subject)


def keyword_pattern(keywords: list[str]) -> re.Pattern:
    """Compile keywords into one whole-word alternation."""
    alternation = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"\b({alternation})\b")


def keyword_rule(label: str, keywords: list[str]) -> CategoryRule:
    pattern = keyword_pattern(keywords)
    return CategoryRule(label, lambda subject: pattern.search(subject.text) is not None)


def prefix_rule(label: str, prefix: str) -> CategoryRule:
    return CategoryRule(label, lambda subject: subject.text.startswith(prefix))


def research_rule(label: str = "Research") -> CategoryRule:
    pattern = keyword_pattern(HN_RESEARCH_KEYWORDS)

    def predicate(subject: CategoryText) -> bool:
        if pattern.search(subject.text):
            return True
        return any(marker in subject.domain for marker in HN_RESEARCH_DOMAINS)

    return CategoryRule(label, predicate)


def apply_rules(rules: list[CategoryRule], subject: CategoryText, default: str) -> str:
    """Return the label of the first matching rule, or default."""
    for rule in rules:
        if rule.matches(subject):
            return rule.label
    return default


# Priority: AI/ML, Programming, Startup, Security, Research, Show HN, Ask HN
HN_RULES: list[CategoryRule] = (
    [keyword_rule(label, keywords) for label, keywords in HN_KEYWORD_CATEGORIES]
    + [research_rule()]
    + [prefix_rule(label, prefix) for label, prefix in HN_PREFIX_CATEGORIES]
)

RSS_RULES: list[CategoryRule] = [
    keyword_rule(label, keywords) for label, keywords in RSS_KEYWORD_CATEGORIES
]


def categorize_story(title: str, url: Optional[str] = None) -> str:
    """
    Categorize a Hacker News story from its title and url.

    Example:
        >>> categorize_story("Show HN: my rust parser")
        'Programming'
        >>> categorize_story("Show HN: a tiny notebook")
        'Show HN'
    """
    subject = CategoryText(text=(title or "").lower(), domain=extract_domain(url) or "")
    return apply_rules(HN_RULES, subject, HN_DEFAULT_CATEGORY)


def categorize_rss_content(title: str, description: str, source_category: str) -> str:
    """
    Categorize an RSS article.

    Articles keep their feed's own label unless they come from the catch-all
    feed, in which case the content rules decide.
    """
    if source_category != RSS_CATCH_ALL_FEED_CATEGORY:
        return source_category

    subject = CategoryText(text=f"{title} {description}".lower())
    return apply_rules(RSS_RULES, subject, RSS_DEFAULT_CATEGORY)
