from __future__ import annotations

import logging
from typing import Optional

from textscrub.ingest.html_extract import extract_html_text
from textscrub.ingest.markdown_events import markdown_events
from textscrub.ingest.markdown_walker import walk_markdown_events
from textscrub.ingest.text_repair import repair_text
from textscrub.logic.language import LanguageDetector, get_default_detector
from textscrub.logic.lexer import clean_text
from textscrub.logic.postprocess import TokenSink
from textscrub.models import NormalizeResult, NormalizerSettings

logger = logging.getLogger(__name__)


def _new_sink(
    settings: Optional[NormalizerSettings],
    detector: Optional[LanguageDetector],
) -> TokenSink:
    settings = settings or NormalizerSettings()
    if detector is None and settings.language_filter:
        detector = get_default_detector()
    return TokenSink(settings=settings, detector=detector)


def _prepare(text: str, sink: TokenSink) -> str:
    text = text or ""
    if sink.settings.repair_unicode:
        text = repair_text(text)
    return text


def _finish(kind: str, sink: TokenSink, chars: int) -> NormalizeResult:
    result = sink.result()
    logger.debug(
        "normalize_done kind=%s chars=%s tokens=%s accepted=%s rejected=%s",
        kind,
        chars,
        len(result.tokens),
        result.accepted,
        result.rejected,
    )
    return result


def normalize_fragment(
    text: str,
    *,
    settings: Optional[NormalizerSettings] = None,
    detector: Optional[LanguageDetector] = None,
) -> NormalizeResult:
    sink = _new_sink(settings, detector)
    clean_text(_prepare(text, sink), sink)
    return _finish("fragment", sink, len(text or ""))


def normalize_html(
    text: str,
    *,
    settings: Optional[NormalizerSettings] = None,
    detector: Optional[LanguageDetector] = None,
) -> NormalizeResult:
    sink = _new_sink(settings, detector)
    clean_text(extract_html_text(_prepare(text, sink), sink.settings), sink)
    return _finish("html", sink, len(text or ""))


def normalize_markdown(
    text: str,
    *,
    settings: Optional[NormalizerSettings] = None,
    detector: Optional[LanguageDetector] = None,
) -> NormalizeResult:
    sink = _new_sink(settings, detector)
    walk_markdown_events(markdown_events(_prepare(text, sink)), sink)
    return _finish("markdown", sink, len(text or ""))
