from __future__ import annotations

from types import SimpleNamespace

import pytest

from textscrub.logic.language import LanguageGuess, LinguaDetector, detect_script


class _StubLingua:
    def __init__(self, values) -> None:
        self.values = values
        self.calls = []

    def compute_language_confidence_values(self, text: str):
        self.calls.append(text)
        return self.values


def _confidence(code: str, value: float):
    language = SimpleNamespace(iso_code_639_1=SimpleNamespace(name=code))
    return SimpleNamespace(language=language, value=value)


@pytest.mark.parametrize(
    ("text", "script"),
    [
        ("hello", "Latin"),
        ("Straße", "Latin"),
        ("привет", "Cyrillic"),
        ("ελληνικά", "Greek"),
        ("東京", "Han"),
        ("مرحبا", "Arabic"),
        ("abпри", "Cyrillic"),
        ("123", None),
        ("--", None),
    ],
)
def test_detect_script(text: str, script) -> None:
    assert detect_script(text) == script


def test_lingua_detector_reports_top_language() -> None:
    stub = _StubLingua([_confidence("FR", 0.91), _confidence("EN", 0.09)])
    guess = LinguaDetector(stub).detect("bonjour")
    assert guess == LanguageGuess(script="Latin", language="fr", confidence=0.91)


def test_lingua_detector_without_values_has_no_language() -> None:
    guess = LinguaDetector(_StubLingua([])).detect("zzzz")
    assert guess == LanguageGuess(script="Latin", language=None, confidence=0.0)


def test_lingua_detector_skips_tokens_without_letters() -> None:
    stub = _StubLingua([_confidence("EN", 1.0)])
    assert LinguaDetector(stub).detect("2024") is None
    assert stub.calls == []
