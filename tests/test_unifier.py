"""
Tests for the content unifier: conversion, merging, caching and the
filter/summary helpers used by the HTTP layer.
"""

import pytest

from pulse.content import (
    ContentUnifier,
    article_to_unified,
    filter_content,
    story_to_unified,
    summarize_content,
)


@pytest.fixture
def unifier(mock_hn_source, mock_rss_source, clock):
    return ContentUnifier(
        hn_source=mock_hn_source,
        rss_source=mock_rss_source,
        cache_ttl=300,
        clock=clock,
    )


class TestConversion:

    def test_story_to_unified(self, sample_stories):
        item = story_to_unified(sample_stories[0])
        assert item.id == "hn-1001"
        assert item.source == "HackerNews"
        assert item.type == "story"
        assert item.author == "alice"
        assert item.comments == 40
        assert item.source_id == "1001"

    def test_article_to_unified(self, sample_articles):
        item = article_to_unified(sample_articles[0])
        assert item.id == f"rss-{sample_articles[0].id}"
        assert item.source == "HackTheBox"
        assert item.type == "article"
        assert item.domain == "hackthebox.com"
        assert item.score is None
        assert item.source_category == "Red Team"

    def test_prefix_agrees_with_type(self, sample_stories, sample_articles):
        items = [story_to_unified(s) for s in sample_stories] + [article_to_unified(a) for a in sample_articles]
        for item in items:
            assert item.id.startswith("hn-") == (item.type == "story")
            assert item.id.startswith("rss-") == (item.type == "article")


class TestFetchUnifiedContent:

    def test_merged_newest_first(self, unifier):
        content = unifier.fetch_unified_content()

        assert [item.id for item in content[:2]] == ["hn-1002", "hn-1001"]
        dates = [item.pub_date for item in content]
        assert dates == sorted(dates, reverse=True)
        assert len(content) == 5

    def test_limit(self, unifier):
        assert len(unifier.fetch_unified_content(limit=2)) == 2

    def test_source_limits(self, unifier, mock_hn_source, mock_rss_source):
        unifier.fetch_unified_content(rss_feeds=["Red Team"])
        mock_hn_source.fetch_top_stories.assert_called_once_with(20)
        mock_rss_source.fetch_all_feeds.assert_called_once_with(["Red Team"])

    def test_excluding_a_source(self, unifier, mock_hn_source):
        content = unifier.fetch_unified_content(include_hn=False)
        assert {item.source for item in content} == {"HackTheBox"}
        mock_hn_source.fetch_top_stories.assert_not_called()

    def test_cache_hit_ignores_options(self, unifier, mock_hn_source, mock_rss_source):
        unifier.fetch_unified_content()
        content = unifier.fetch_unified_content(include_hn=False, include_rss=False, limit=3)

        assert len(content) == 3
        assert content[0].source == "HackerNews"
        assert mock_hn_source.fetch_top_stories.call_count == 1
        assert mock_rss_source.fetch_all_feeds.call_count == 1

    def test_cache_expires(self, unifier, mock_hn_source, clock):
        unifier.fetch_unified_content()
        assert unifier.is_cached()

        clock.advance(300)
        assert not unifier.is_cached()
        unifier.fetch_unified_content()
        assert mock_hn_source.fetch_top_stories.call_count == 2

    def test_source_failure_is_isolated(self, unifier, mock_hn_source):
        mock_hn_source.fetch_top_stories.side_effect = RuntimeError("HN down")

        content = unifier.fetch_unified_content()

        assert {item.source for item in content} == {"HackTheBox"}
        results = {r.source_name: r for r in unifier.last_results}
        assert not results["HackerNews"].success
        assert "HN down" in results["HackerNews"].error
        assert results["HackTheBox"].success

    def test_no_sources(self, unifier):
        assert unifier.fetch_unified_content(include_hn=False, include_rss=False) == []


class TestFilterContent:

    def test_filter_by_source(self, unified_items):
        assert [i.id for i in filter_content(unified_items, source="HackerNews")] == ["hn-1001"]

    def test_category_substring_case_insensitive(self, unified_items):
        assert [i.id for i in filter_content(unified_items, category="red")] == [unified_items[1].id]
        assert [i.id for i in filter_content(unified_items, category="ai/ml")] == ["hn-1001"]

    @pytest.mark.parametrize("category", [None, "", "all"])
    def test_category_all_skips(self, unified_items, category):
        assert filter_content(unified_items, category=category) == unified_items


class TestSummarizeContent:

    def test_summary(self, unified_items):
        summary = summarize_content(unified_items)
        assert summary["categories"] == ["AI/ML", "Red Team"]
        assert summary["sources"] == ["HackerNews", "HackTheBox"]
        assert summary["stats"] == {
            "hackerNews": 1,
            "hackTheBox": 1,
            "totalStories": 1,
            "totalArticles": 1,
        }

    def test_empty(self):
        summary = summarize_content([])
        assert summary["categories"] == []
        assert summary["stats"]["totalStories"] == 0
