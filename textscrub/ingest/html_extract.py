from __future__ import annotations

import logging
import re
import warnings
from typing import Iterable, List, Optional

from textscrub.models import NormalizerSettings
from textscrub.utils import escape_non_printable

logger = logging.getLogger(__name__)

# Residual code that survived tag-level stripping: brace blocks (inline
# scripts/styles), literal <code> spans and PHP openers.
CODE_MASK_PATTERN = re.compile(r"\{.*\}|<code>.*</code>|\?php.?", flags=re.DOTALL)


def _parse_html(html: str):
    try:
        from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
    except ImportError as exc:
        raise RuntimeError("beautifulsoup4 is required to parse HTML text") from exc

    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
        return BeautifulSoup(html, "html.parser")


def _clean_fragment(raw: str) -> str:
    return escape_non_printable(raw.strip())


def extract_fragments(soup, skip_tags: Iterable[str] = ("pre", "code")) -> List[str]:
    """Collect visible text and comment fragments from ``soup`` in document order."""
    from bs4 import Comment, NavigableString, ProcessingInstruction, Tag
    from bs4.element import PreformattedString

    skip = {name.lower() for name in skip_tags}
    fragments: List[str] = []
    stack = [soup]
    while stack:
        node = stack.pop()
        if isinstance(node, Comment):
            text = _clean_fragment(str(node))
        elif isinstance(node, ProcessingInstruction):
            logger.debug("html_node_skipped kind=processing_instruction")
            continue
        elif isinstance(node, PreformattedString):
            # doctype, declarations, CDATA
            continue
        elif isinstance(node, NavigableString):
            text = _clean_fragment(str(node))
        elif isinstance(node, Tag):
            if (node.name or "").lower() in skip:
                continue
            stack.extend(reversed(node.contents))
            continue
        else:
            continue

        if text:
            fragments.append(text)
    return fragments


def mask_code(text: str, replacement: str = "Section contained code.") -> str:
    return CODE_MASK_PATTERN.sub(lambda _match: replacement, text)


def extract_html_text(html: str, settings: Optional[NormalizerSettings] = None) -> str:
    settings = settings or NormalizerSettings()
    soup = _parse_html(html or "")
    fragments = extract_fragments(soup, skip_tags=settings.skip_html_tags)
    joined = settings.fragment_separator.join(fragments)
    masked = mask_code(joined, settings.code_mask_text)
    logger.debug(
        "html_extracted fragments=%s chars=%s masked=%s",
        len(fragments),
        len(joined),
        masked != joined,
    )
    return masked
