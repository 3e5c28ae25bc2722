from __future__ import annotations

from typing import Dict, List, Optional

import pytest

from textscrub.logic.language import LanguageGuess, detect_script
from textscrub.logic.postprocess import TokenSink
from textscrub.models import NormalizerSettings


class FakeDetector:
    """Everything Latin is English unless listed in ``foreign``."""

    def __init__(self, foreign: Optional[Dict[str, str]] = None, confidence: float = 0.9) -> None:
        self.foreign = foreign or {}
        self.confidence = confidence
        self.calls: List[str] = []

    def detect(self, text: str) -> Optional[LanguageGuess]:
        self.calls.append(text)
        script = detect_script(text)
        if script is None:
            return None
        language = self.foreign.get(text.lower(), "en")
        return LanguageGuess(script=script, language=language, confidence=self.confidence)


@pytest.fixture
def detector() -> FakeDetector:
    return FakeDetector(foreign={"bonjour": "fr", "gracias": "es"})


@pytest.fixture
def sink(detector: FakeDetector) -> TokenSink:
    return TokenSink(settings=NormalizerSettings(), detector=detector)
