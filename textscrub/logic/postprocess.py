from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from textscrub.logic.language import LanguageDetector, LanguageGuess
from textscrub.models import (
    LINK_TOKEN,
    SEP_TOKEN,
    STRUCTURAL_MARKERS,
    NormalizeResult,
    NormalizerSettings,
    TokenStats,
)

logger = logging.getLogger(__name__)

SPECIAL_PUNCTUATION = frozenset(".!?,;()<>$&'\":")
URL_PREFIXES = ("http:/", "https:/")


class PushOutcome(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    UNCOUNTED = "uncounted"


def is_structural_punctuation(token: str) -> bool:
    if len(token) != 1:
        return False
    return token in SPECIAL_PUNCTUATION or token.isspace()


class TokenSink:
    """Growing token stream plus the accepted/rejected tally.

    One sink is shared by every nested normalizer call of a top-level
    request, so duplicate suppression always looks at the real previous
    token and the counters need no merging on the way back up.
    """

    def __init__(
        self,
        settings: Optional[NormalizerSettings] = None,
        detector: Optional[LanguageDetector] = None,
    ) -> None:
        self.settings = settings or NormalizerSettings()
        self.detector = detector
        self.tokens: List[str] = []
        self.stats = TokenStats()

    @property
    def last(self) -> Optional[str]:
        return self.tokens[-1] if self.tokens else None

    def _is_duplicate(self, candidate: str) -> bool:
        previous = self.last
        if previous is None:
            return False
        if previous == candidate:
            return True
        return candidate in STRUCTURAL_MARKERS and is_structural_punctuation(previous)

    def _count(self, outcome: PushOutcome) -> PushOutcome:
        if outcome is PushOutcome.ACCEPTED:
            self.stats.accepted += 1
        elif outcome is PushOutcome.REJECTED:
            self.stats.rejected += 1
        return outcome

    def _guess(self, token: str) -> Optional[LanguageGuess]:
        if self.detector is None:
            return None
        try:
            return self.detector.detect(token)
        except Exception as exc:
            logger.debug("language_detect_failed token=%r error=%s", token, exc)
            return None

    def _is_foreign(self, token: str) -> bool:
        guess = self._guess(token)
        if guess is None:
            return False
        if guess.script is not None and guess.script != self.settings.allowed_script:
            return True
        return (
            guess.language is not None
            and guess.language != self.settings.allowed_language
            and guess.confidence > self.settings.language_confidence_threshold
        )

    def push(self, candidate: str) -> PushOutcome:
        token = candidate.strip()
        if not token:
            return PushOutcome.UNCOUNTED

        if token.startswith(URL_PREFIXES):
            if self.last != LINK_TOKEN:
                self.tokens.append(LINK_TOKEN)
            return self._count(PushOutcome.ACCEPTED)

        multi_char = len(token) > 1
        if self._is_duplicate(token):
            return self._count(PushOutcome.ACCEPTED if multi_char else PushOutcome.UNCOUNTED)

        if not multi_char:
            self.tokens.append(token)
            return PushOutcome.UNCOUNTED

        if self.settings.language_filter and self._is_foreign(token):
            logger.debug("token_rejected token=%r", token)
            return self._count(PushOutcome.REJECTED)

        if len(token) > self.settings.max_token_chars:
            token = self.settings.long_token_placeholder
        self.tokens.append(token)
        return self._count(PushOutcome.ACCEPTED)

    def push_marker(self, marker: str = SEP_TOKEN) -> None:
        if not self._is_duplicate(marker):
            self.tokens.append(marker)

    def push_placeholder(self, placeholder: str) -> None:
        if not self._is_duplicate(placeholder):
            self.tokens.append(placeholder)

    def result(self) -> NormalizeResult:
        return NormalizeResult(
            tokens=list(self.tokens),
            accepted=self.stats.accepted,
            rejected=self.stats.rejected,
        )
