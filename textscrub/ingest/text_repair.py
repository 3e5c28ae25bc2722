from __future__ import annotations

import re
import unicodedata


# UTF-8 punctuation that was decoded as cp1252 somewhere upstream.
_MOJIBAKE_MAP = {
    "â€™": "'",
    "â€˜": "'",
    "â€œ": '"',
    "â€\x9d": '"',
    "â€“": "-",
    "â€”": "-",
    "â€¦": "...",
}
# Stray lead byte of a mis-decoded two-byte sequence (U+00A0..U+00BF).
_MOJIBAKE_LEAD = re.compile("Â(?=[\u00a0-\u00bf])")
_NON_SPACE_RUN = re.compile(r"\S+")


def _strip_control_chars(text: str) -> str:
    out = []
    for ch in text:
        code = ord(ch)
        if ch.isspace():
            out.append(ch)
            continue
        if code < 32 or 127 <= code < 160:
            continue
        out.append(ch)
    return "".join(out)


def _normalize_runs(text: str) -> str:
    return _NON_SPACE_RUN.sub(lambda match: unicodedata.normalize("NFKC", match.group(0)), text)


def repair_text(raw: str) -> str:
    """Undo common mojibake and fold compatibility characters before scanning.

    Whitespace of every kind is left untouched because the scanner turns
    anything other than a plain space into a separator marker.
    """
    text = raw or ""
    for bad, good in _MOJIBAKE_MAP.items():
        text = text.replace(bad, good)
    text = _MOJIBAKE_LEAD.sub("", text)
    text = _normalize_runs(text)
    return _strip_control_chars(text)
