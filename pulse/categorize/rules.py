"""
Category keyword configuration for Content Pulse.

This file is the single source of truth for how items are labelled.
Each entry maps a category label to the keywords that select it. Keywords are
matched case-insensitively as whole words (regex word boundaries), so "ai"
matches "AI tools" but not "email".

ORDER MATTERS: rules are evaluated top to bottom and the first match wins.
Reordering these lists changes which label an item gets.

CUSTOMIZATION:

To add a category:
    1. Insert a (label, keywords) pair at the priority you want
    2. Use lowercase keywords; multi-word phrases are allowed
"""

# =============================================================================
# Hacker News story categories (matched against the lower-cased title)
# =============================================================================

HN_KEYWORD_CATEGORIES: list[tuple[str, list[str]]] = [
    ("AI/ML", [
        "ai",
        "artificial intelligence",
        "machine learning",
        "ml",
        "gpt",
        "chatgpt",
        "openai",
        "llm",
        "neural",
        "deep learning",
    ]),
    ("Programming", [
        "javascript",
        "python",
        "rust",
        "go",
        "programming",
        "code",
        "software",
        "framework",
        "library",
        "api",
    ]),
    ("Startup", [
        "startup",
        "funding",
        "vc",
        "venture",
        "business",
        "company",
        "entrepreneur",
    ]),
    ("Security", [
        "security",
        "privacy",
        "encryption",
        "hack",
        "breach",
        "vulnerability",
        "cyber",
    ]),
]

# Research matches either title keywords or the story's domain
HN_RESEARCH_KEYWORDS: list[str] = [
    "research",
    "study",
    "science",
    "scientific",
    "paper",
    "university",
    "academic",
]
HN_RESEARCH_DOMAINS: list[str] = ["arxiv", "nature", "science"]

# Title prefixes, checked after every keyword rule
HN_PREFIX_CATEGORIES: list[tuple[str, str]] = [
    ("Show HN", "show hn"),
    ("Ask HN", "ask hn"),
]

HN_DEFAULT_CATEGORY = "Tech News"


# =============================================================================
# RSS article categories (matched against "title description", lower-cased)
# Only used for the catch-all feed; every other feed keeps its own label.
# =============================================================================

RSS_CATCH_ALL_FEED_CATEGORY = "All"

RSS_KEYWORD_CATEGORIES: list[tuple[str, list[str]]] = [
    ("Red Team", ["red team", "penetration", "exploit", "attack", "offensive"]),
    ("Blue Team", ["blue team", "defense", "detection", "monitoring", "soc"]),
    ("AI/Security", ["ai", "artificial intelligence", "machine learning", "ml"]),
    ("Threat Intel", ["threat", "intel", "apt", "malware", "vulnerability"]),
    ("CISO", ["ciso", "governance", "compliance", "risk"]),
    ("Write-ups", ["writeup", "ctf", "challenge", "solution"]),
    ("Career", ["career", "job", "interview", "skill"]),
]

RSS_DEFAULT_CATEGORY = "Cyber Security"
