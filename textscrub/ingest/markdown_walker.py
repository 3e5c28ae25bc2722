from __future__ import annotations

import logging
from typing import Iterable, List

from textscrub.ingest.html_extract import extract_html_text
from textscrub.ingest.markdown_events import (
    CodeSpan,
    EndTag,
    FootnoteRef,
    HardBreak,
    MarkdownEvent,
    RawHtml,
    SoftBreak,
    StartTag,
    TaskListMarker,
    Text,
    ThematicBreak,
)
from textscrub.logic.lexer import clean_text
from textscrub.logic.postprocess import TokenSink
from textscrub.models import CODE_TOKEN, SEP_TOKEN

logger = logging.getLogger(__name__)

# Tags whose content never reaches the token stream. Code blocks leave a
# single placeholder where they stood; headings leave nothing.
SUPPRESSED_TAGS = {"heading", "block_code"}
PLACEHOLDER_TAGS = {"block_code": CODE_TOKEN}


def walk_markdown_events(events: Iterable[MarkdownEvent], sink: TokenSink) -> TokenSink:
    open_suppressed: List[str] = []

    for event in events:
        if isinstance(event, StartTag):
            if event.kind in SUPPRESSED_TAGS:
                if not open_suppressed and event.kind in PLACEHOLDER_TAGS:
                    sink.push_placeholder(PLACEHOLDER_TAGS[event.kind])
                    sink.push_marker(SEP_TOKEN)
                open_suppressed.append(event.kind)
            continue

        if isinstance(event, EndTag):
            if open_suppressed and open_suppressed[-1] == event.kind:
                open_suppressed.pop()
            continue

        if open_suppressed:
            continue

        if isinstance(event, Text):
            clean_text(event.content, sink)
            sink.push_marker(SEP_TOKEN)
        elif isinstance(event, CodeSpan):
            sink.push_placeholder(CODE_TOKEN)
        elif isinstance(event, (HardBreak, SoftBreak)):
            sink.push_marker(SEP_TOKEN)
        elif isinstance(event, RawHtml):
            clean_text(extract_html_text(event.content, sink.settings), sink)
            sink.push_marker(SEP_TOKEN)
        elif isinstance(event, FootnoteRef):
            logger.debug("markdown_footnote_ref name=%s", event.name)
        elif isinstance(event, ThematicBreak):
            logger.debug("markdown_thematic_break")
        elif isinstance(event, TaskListMarker):
            logger.debug("markdown_task_marker checked=%s", event.checked)

    return sink
