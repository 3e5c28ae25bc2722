from __future__ import annotations

from textscrub import normalize_markdown
from textscrub.ingest.markdown_events import (
    CodeSpan,
    EndTag,
    FootnoteRef,
    HardBreak,
    RawHtml,
    SoftBreak,
    StartTag,
    TaskListMarker,
    Text,
    ThematicBreak,
)
from textscrub.ingest.markdown_walker import walk_markdown_events
from textscrub.logic.postprocess import TokenSink


def test_heading_content_is_suppressed(sink: TokenSink) -> None:
    events = [
        StartTag("heading"),
        Text("Title"),
        CodeSpan("ignored"),
        RawHtml("<b>hidden</b>"),
        HardBreak(),
        EndTag("heading"),
        StartTag("paragraph"),
        Text("Body text."),
        EndTag("paragraph"),
    ]
    walk_markdown_events(events, sink)
    assert sink.tokens == ["Body", "text", "."]
    assert (sink.stats.accepted, sink.stats.rejected) == (2, 0)


def test_code_span_becomes_single_placeholder(sink: TokenSink) -> None:
    events = [StartTag("paragraph"), Text("Run "), CodeSpan("x=1"), Text(" now"), EndTag("paragraph")]
    walk_markdown_events(events, sink)
    assert sink.tokens == ["Run", "[SEP]", "code", "now", "[SEP]"]
    assert sink.tokens.count("code") == 1
    assert "x" not in sink.tokens


def test_adjacent_code_spans_collapse(sink: TokenSink) -> None:
    walk_markdown_events([CodeSpan("a"), CodeSpan("b")], sink)
    assert sink.tokens == ["code"]


def test_code_block_leaves_placeholder_and_hides_body(sink: TokenSink) -> None:
    events = [StartTag("block_code"), Text("print(secret)"), EndTag("block_code"), Text("after")]
    walk_markdown_events(events, sink)
    assert sink.tokens == ["code", "[SEP]", "after", "[SEP]"]


def test_breaks_emit_single_separator(sink: TokenSink) -> None:
    walk_markdown_events([Text("one"), SoftBreak(), HardBreak(), Text("two")], sink)
    assert sink.tokens == ["one", "[SEP]", "two", "[SEP]"]


def test_raw_html_runs_through_html_pipeline(sink: TokenSink) -> None:
    walk_markdown_events([RawHtml("<p>hello <code>x()</code> world</p>")], sink)
    assert sink.tokens == ["hello", ".", "world", "[SEP]"]


def test_diagnostic_events_emit_nothing(sink: TokenSink) -> None:
    walk_markdown_events([FootnoteRef("1"), ThematicBreak(), TaskListMarker(True)], sink)
    assert sink.tokens == []


def test_statistics_accumulate_across_nested_calls(sink: TokenSink) -> None:
    events = [Text("hello привет"), RawHtml("<b>bonjour</b> friend")]
    walk_markdown_events(events, sink)
    assert "bonjour" not in sink.tokens
    assert "привет" not in sink.tokens
    assert (sink.stats.accepted, sink.stats.rejected) == (2, 2)


def test_unbalanced_end_tag_does_not_unlock_heading(sink: TokenSink) -> None:
    events = [StartTag("heading"), EndTag("paragraph"), Text("still hidden"), EndTag("heading"), Text("shown")]
    walk_markdown_events(events, sink)
    assert sink.tokens == ["shown", "[SEP]"]


def test_normalize_markdown_heading_suppression(detector) -> None:
    result = normalize_markdown("# Title\n\nBody text.", detector=detector)
    assert "Title" not in result.tokens
    assert "Body" in result.tokens
    assert "text" in result.tokens


def test_normalize_markdown_code_span(detector) -> None:
    result = normalize_markdown("Use `x=1` here.", detector=detector)
    assert result.tokens.count("code") == 1
    assert "x=1" not in result.tokens
    assert "Use" in result.tokens
    assert "here" in result.tokens


def test_normalize_markdown_fenced_code(detector) -> None:
    result = normalize_markdown("Intro\n\n```python\nprint('hi')\n```\n\nOutro", detector=detector)
    assert "code" in result.tokens
    assert "print" not in result.tokens
    assert result.tokens.index("Intro") < result.tokens.index("code") < result.tokens.index("Outro")


def test_normalize_markdown_inline_html(detector) -> None:
    result = normalize_markdown("Hello <b>bold</b> world", detector=detector)
    assert "bold" in result.tokens
    assert "<" not in result.tokens
    assert "b" not in result.tokens


def test_normalize_markdown_link_text_and_bare_url(detector) -> None:
    result = normalize_markdown("See [the docs](http://example.com) or http://example.org/x", detector=detector)
    assert "docs" in result.tokens
    assert "link" in result.tokens
    assert "example" not in result.tokens
