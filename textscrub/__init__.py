from textscrub.logic.postprocess import is_structural_punctuation
from textscrub.models import NormalizeResult, NormalizerSettings, TokenStats
from textscrub.pipeline import normalize_fragment, normalize_html, normalize_markdown

__all__ = [
    "NormalizeResult",
    "NormalizerSettings",
    "TokenStats",
    "is_structural_punctuation",
    "normalize_fragment",
    "normalize_html",
    "normalize_markdown",
]
