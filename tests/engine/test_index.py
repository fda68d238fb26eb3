"""End-to-end digest tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from digester.engine.errors import EmptyInputError
from digester.engine.index import analyze_page
from digester.engine.normalize import normalize_markup
from digester.engine.types import LinkRef

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

ARTICLE = """
<html>
  <head><title>Quarterly Planning Notes</title></head>
  <body>
    <nav><a href="/">Home</a> <a href="/blog">Blog</a></nav>
    <h1>Quarterly Planning</h1>
    <p>The quarterly plan focuses on growth in the northern region. Growth targets
       were raised after the spring review. The northern region team will hire
       two analysts.</p>
    <h2>Open items</h2>
    <ul>
      <li>Update the growth forecast</li>
      <li>Contact the regional leads about hiring</li>
      <li>Budget owners gather weekly</li>
    </ul>
    <p>TODO: archive last year's plan. Is the hiring budget approved?</p>
    <p>Details live in the <a href="/blog/growth">growth report</a>.</p>
  </body>
</html>
"""


def test_launch_plan_scenario(engine_config):
    result = analyze_page(
        "<h1>Launch Plan</h1><p>Review the budget by Friday.</p><ul><li>Send the invite</li></ul>",
        config=engine_config,
        now=FIXED_NOW,
    )

    assert result.title == "Launch Plan"
    assert result.metadata.headings == ("Launch Plan",)
    assert [(task.text, task.source, task.confidence, task.status) for task in result.tasks] == [
        ("Review the budget by Friday.", "deadline", 0.6, "pending"),
        ("Send the invite", "imperative-list", 0.7, "pending"),
    ]
    assert result.metadata.extracted_at == FIXED_NOW


def test_relative_link_scenario(engine_config):
    result = analyze_page(
        '<p>Read the <a href="/docs">Docs</a> first.</p>',
        "https://example.com/page",
        engine_config,
    )

    assert LinkRef(href="https://example.com/docs", label="Docs") in result.metadata.links
    assert result.metadata.url == "https://example.com/page"


@pytest.mark.parametrize("document", ["", "   \n\t "])
def test_empty_input_is_rejected(engine_config, document):
    with pytest.raises(EmptyInputError):
        analyze_page(document, config=engine_config)


def test_script_only_document_yields_empty_digest(engine_config):
    result = analyze_page("<script>alert('hi')</script>", config=engine_config)

    assert result.title == "Untitled page"
    assert result.summary == ""
    assert result.key_points == ()
    assert result.tasks == ()
    assert result.metadata.word_count == 0
    assert result.metadata.headings == ()


def test_article_digest(engine_config):
    result = analyze_page(ARTICLE, "https://example.com/plans/q3", engine_config, FIXED_NOW)

    assert result.title == "Quarterly Planning Notes"
    assert result.metadata.headings == ("Quarterly Planning", "Open items")
    assert [link.href for link in result.metadata.links] == [
        "https://example.com/",
        "https://example.com/blog",
        "https://example.com/blog/growth",
    ]
    assert [(task.text, task.source) for task in result.tasks] == [
        ("Update the growth forecast", "imperative-list"),
        ("Contact the regional leads about hiring", "imperative-list"),
        ("TODO: archive last year's plan.", "marker"),
    ]
    assert len({task.id for task in result.tasks}) == len(result.tasks)
    assert result.summary
    assert 0 < len(result.key_points) <= engine_config.get("max_key_points")


def test_key_points_come_from_the_document(engine_config):
    result = analyze_page(ARTICLE, config=engine_config)
    plain_text = normalize_markup(ARTICLE).plain_text

    for point in result.key_points:
        assert point in plain_text
    assert len(set(result.key_points)) == len(result.key_points)


def test_reanalysis_is_deterministic(engine_config):
    first = analyze_page(ARTICLE, config=engine_config, now=FIXED_NOW)
    second = analyze_page(ARTICLE, config=engine_config, now=FIXED_NOW)

    assert first == second
    assert [task.id for task in first.tasks] == [task.id for task in second.tasks]


def test_word_count_ignores_whitespace_edits(engine_config):
    compact = analyze_page("<p>alpha beta</p><p>gamma</p>", config=engine_config)
    spaced = analyze_page("<p>alpha   beta</p>\n\n<p>  gamma </p>", config=engine_config)

    assert compact.metadata.word_count == spaced.metadata.word_count == 3


def test_summary_can_be_fed_back(engine_config):
    result = analyze_page(ARTICLE, config=engine_config)

    again = analyze_page(result.summary, config=engine_config)

    assert len(again.key_points) <= engine_config.get("max_key_points")


def test_default_timestamp_is_timezone_aware():
    result = analyze_page("<p>Some pasted content here.</p>")

    assert result.metadata.extracted_at.tzinfo is not None
    assert result.metadata.url is None


def test_malformed_href_does_not_break_analysis(engine_config):
    result = analyze_page(
        '<p>See <a href="http://[broken/x">here</a> now please.</p>',
        "https://example.com/page",
        engine_config,
    )

    assert result.metadata.links == (LinkRef(href="http://[broken/x", label="here"),)
