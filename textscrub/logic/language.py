from __future__ import annotations

import logging
import threading
import unicodedata
from collections import Counter
from dataclasses import dataclass
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

# unicodedata names lead with the script for letters ("LATIN SMALL LETTER A",
# "CYRILLIC CAPITAL LETTER ZHE"); a few blocks need mapping to a script name.
_SCRIPT_ALIASES = {
    "CJK": "Han",
    "FULLWIDTH": "Latin",
    "MODIFIER": "Latin",
}

_DEFAULT_DETECTOR: Optional["LinguaDetector"] = None
_DETECTOR_LOCK = threading.Lock()


@dataclass(frozen=True)
class LanguageGuess:
    script: Optional[str]
    language: Optional[str]
    confidence: float = 0.0


class LanguageDetector(Protocol):
    def detect(self, text: str) -> Optional[LanguageGuess]: ...


def _char_script(ch: str) -> Optional[str]:
    if not ch.isalpha():
        return None
    name = unicodedata.name(ch, "")
    if not name:
        return None
    head = name.split(" ", 1)[0]
    if head in _SCRIPT_ALIASES:
        return _SCRIPT_ALIASES[head]
    return head.capitalize()


def detect_script(text: str) -> Optional[str]:
    """Return the dominant writing system of ``text`` or None when it has no letters."""
    counts: Counter[str] = Counter()
    for ch in text:
        script = _char_script(ch)
        if script:
            counts[script] += 1
    if not counts:
        return None
    return counts.most_common(1)[0][0]


class LinguaDetector:
    """Language guesses backed by lingua, with the script taken from character names."""

    def __init__(self, detector: Any = None) -> None:
        if detector is None:
            try:
                from lingua import LanguageDetectorBuilder
            except ImportError as exc:
                raise RuntimeError(
                    "lingua-language-detector is required for language filtering"
                ) from exc
            detector = LanguageDetectorBuilder.from_all_languages().build()
        self._detector = detector

    def detect(self, text: str) -> Optional[LanguageGuess]:
        script = detect_script(text)
        if script is None:
            return None
        values = self._detector.compute_language_confidence_values(text)
        if not values:
            return LanguageGuess(script=script, language=None)
        top = values[0]
        language = str(top.language.iso_code_639_1.name).lower()
        return LanguageGuess(script=script, language=language, confidence=float(top.value))


def get_default_detector() -> LinguaDetector:
    global _DEFAULT_DETECTOR
    with _DETECTOR_LOCK:
        if _DEFAULT_DETECTOR is None:
            logger.debug("language_detector_init backend=lingua")
            _DEFAULT_DETECTOR = LinguaDetector()
        return _DEFAULT_DETECTOR
