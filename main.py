#!/usr/bin/env python3
"""
Content Pulse - Tech and security content aggregator.

Command-line entry point for browsing the feeds:
  - Hacker News top stories, enriched and categorized
  - HackTheBox blog articles from the RSS feeds
  - The unified, date-ordered feed of both
  - Today's trend snapshot over the unified feed

Usage:
    python main.py                      # Unified feed
    python main.py stories --limit 10   # Top 10 HN stories
    python main.py rss --feeds "Red Team,Blue Team"
    python main.py trends --json        # Trend snapshot as JSON

Examples:
    # Only security articles, newest first
    python main.py content --no-hn --category security

    # Debug logging
    python main.py stories -v
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from pulse.config import print_config_summary, validate_config
from pulse.content import DEFAULT_CONTENT_LIMIT, MAX_CONTENT_FETCH, ContentUnifier, filter_content
from pulse.logging_util import set_level
from pulse.models import TrendItem
from pulse.sources import HackerNewsSource, RSSSource
from pulse.sources.hackernews import MAX_STORY_LIMIT
from pulse.trends import TrendAnalyzer

VIEWS = ["content", "stories", "rss", "trends"]


def non_negative_int(value: str) -> int:
    """argparse type for --limit."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="content-pulse",
        description="Browse Hacker News stories and HackTheBox articles from the terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                             Unified feed (30 items)
  %(prog)s stories -l 10               Top 10 Hacker News stories
  %(prog)s rss --feeds "Red Team"      Articles from the Red Team feed
  %(prog)s content --no-rss            Unified feed, stories only
  %(prog)s trends --json               Today's trend snapshot as JSON
        """,
    )

    parser.add_argument(
        "view",
        nargs="?",
        choices=VIEWS,
        default="content",
        help="What to show (default: content)",
    )

    parser.add_argument(
        "--limit", "-l",
        type=non_negative_int,
        default=DEFAULT_CONTENT_LIMIT,
        metavar="N",
        help=f"Maximum items to show (default: {DEFAULT_CONTENT_LIMIT})",
    )

    parser.add_argument(
        "--category", "-c",
        default=None,
        help="Filter by category (exact for stories, substring for content)",
    )

    parser.add_argument(
        "--feeds",
        default="",
        metavar="A,B",
        help="Comma-separated RSS feed categories to fetch",
    )

    parser.add_argument(
        "--no-hn",
        action="store_true",
        help="Leave Hacker News out of the unified feed",
    )

    parser.add_argument(
        "--no-rss",
        action="store_true",
        help="Leave RSS articles out of the unified feed",
    )

    # Output options
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the API JSON instead of text",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show debug logging",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Content Pulse Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration errors:")
        for error in errors:
            print(f"  - {error}")
    else:
        print("\nConfiguration valid")
    print("=" * 60)


def _feeds(raw: str) -> Optional[List[str]]:
    return [part.strip() for part in raw.split(",") if part.strip()] or None


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def show_content(args) -> int:
    unifier = ContentUnifier()
    content = unifier.fetch_unified_content(
        include_hn=not args.no_hn,
        include_rss=not args.no_rss,
        rss_feeds=_feeds(args.feeds),
        limit=min(args.limit * 2, MAX_CONTENT_FETCH),
    )
    content = filter_content(content, category=args.category)[:args.limit]

    if args.json:
        _print_json([item.to_dict() for item in content])
    else:
        for item in content:
            print(f"[{item.source}] {item.title} ({item.category}, {item.time_ago})")
            if item.url:
                print(f"    {item.url}")

    return 0 if content else 1


def show_stories(args) -> int:
    stories = HackerNewsSource().fetch_top_stories(min(args.limit, MAX_STORY_LIMIT))
    if args.category and args.category != "all":
        stories = [story for story in stories if story.category == args.category]
    stories = stories[:args.limit]

    if args.json:
        _print_json([story.to_dict() for story in stories])
    else:
        for rank, story in enumerate(stories, 1):
            print(f"{rank:>3}. {story.title} [{story.category}]")
            print(f"     {story.score} points | {story.descendants} comments | {story.time_ago} by {story.by}")

    return 0 if stories else 1


def show_rss(args) -> int:
    articles = RSSSource().fetch_all_feeds(_feeds(args.feeds))[:args.limit]

    if args.json:
        _print_json([article.to_dict() for article in articles])
    else:
        for article in articles:
            print(f"[{article.source_category}] {article.title} ({article.category}, {article.time_ago})")
            print(f"    {article.url}")

    return 0 if articles else 1


def show_trends(args) -> int:
    content = ContentUnifier().fetch_unified_content(
        include_hn=not args.no_hn,
        include_rss=not args.no_rss,
        rss_feeds=_feeds(args.feeds),
        limit=args.limit,
    )
    if not content:
        print("No content available for trend analysis")
        return 1

    trends = TrendAnalyzer().analyze_trends([TrendItem.from_unified(item) for item in content])

    if args.json:
        _print_json(trends.to_dict())
        return 0

    print(trends.todays_summary)
    print("\nTop categories:")
    for entry in trends.top_categories:
        print(f"  {entry.category:<20} {entry.count:>3} ({entry.percentage}%)")
    print("\nSentiment:")
    for bucket, share in trends.sentiment.items():
        print(f"  {bucket:<10} {share}%")
    if trends.emerging_topics:
        print(f"\nEmerging topics: {', '.join(trends.emerging_topics)}")
    print("\nInsights:")
    for insight in trends.key_insights:
        print(f"  - {insight}")
    return 0


HANDLERS = {
    "content": show_content,
    "stories": show_stories,
    "rss": show_rss,
    "trends": show_trends,
}


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = nothing to show, 2 = configuration error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_config:
        show_config()
        return 0

    errors = validate_config()
    if errors:
        for error in errors:
            print(f"Configuration error: {error}", file=sys.stderr)
        return 2

    if args.verbose:
        set_level(logging.DEBUG)

    try:
        code = HANDLERS[args.view](args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130

    if code == 1 and not args.json:
        print(f"No {args.view} found", file=sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())
