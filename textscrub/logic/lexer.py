from __future__ import annotations

import string

from textscrub.logic.postprocess import TokenSink
from textscrub.models import SEP_TOKEN

ASCII_PUNCTUATION = frozenset(string.punctuation)
SPLIT_PUNCTUATION = frozenset("!?,;()<>$&'\"[]")
URL_SAFE_PUNCTUATION = frozenset(":.")
ESCAPED_BREAKS = frozenset("ntr")


def clean_text(text: str, sink: TokenSink) -> TokenSink:
    """Scan markup-free ``text`` character by character into ``sink``.

    Words accumulate in a buffer that is flushed on whitespace, on escaped
    ``\\n``/``\\t``/``\\r`` sequences and before split punctuation. Repeated
    ASCII punctuation collapses to one character. ``:`` and ``.`` stay in
    the buffer once it starts with ``http`` so URLs survive as one token.
    """
    buffer = ""
    last_punct = " "
    escaped = False

    def flush() -> None:
        nonlocal buffer
        if buffer:
            sink.push(buffer)
            buffer = ""

    for ch in text:
        if ch in ASCII_PUNCTUATION and ch == last_punct:
            continue
        last_punct = ch

        if ch.isspace():
            if buffer:
                flush()
                if ch != " ":
                    sink.push_marker(SEP_TOKEN)
            continue

        if ch == "\\":
            escaped = True
            continue

        if escaped:
            escaped = False
            if ch in ESCAPED_BREAKS:
                flush()
                continue

        if ch in SPLIT_PUNCTUATION:
            flush()
            sink.push(ch)
            continue

        if ch in URL_SAFE_PUNCTUATION and not buffer.startswith("http"):
            flush()
            sink.push(ch)
            continue

        buffer += ch

    flush()
    return sink
