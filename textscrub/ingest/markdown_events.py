from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class StartTag:
    kind: str


@dataclass(frozen=True)
class EndTag:
    kind: str


@dataclass(frozen=True)
class Text:
    content: str


@dataclass(frozen=True)
class CodeSpan:
    content: str


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class RawHtml:
    content: str


@dataclass(frozen=True)
class FootnoteRef:
    name: str


@dataclass(frozen=True)
class ThematicBreak:
    pass


@dataclass(frozen=True)
class TaskListMarker:
    checked: bool


MarkdownEvent = Union[
    StartTag,
    EndTag,
    Text,
    CodeSpan,
    HardBreak,
    SoftBreak,
    RawHtml,
    FootnoteRef,
    ThematicBreak,
    TaskListMarker,
]

MARKDOWN_PLUGINS = ["footnotes", "task_lists", "table", "strikethrough"]
_LEAF_EVENTS = {
    "linebreak": HardBreak,
    "softbreak": SoftBreak,
    "thematic_break": ThematicBreak,
}
_SKIPPED_LEAVES = {"blank_line"}


def _build_markdown():
    try:
        import mistune
    except ImportError as exc:
        raise RuntimeError("mistune is required to parse Markdown text") from exc

    return mistune.create_markdown(renderer="ast", plugins=MARKDOWN_PLUGINS)


def _leaf_events(node: Dict[str, Any]) -> List[MarkdownEvent]:
    kind = node.get("type", "")
    raw = node.get("raw")
    if kind == "text":
        return [Text(raw or "")]
    if kind == "codespan":
        return [CodeSpan(raw or "")]
    if kind in {"inline_html", "block_html"}:
        return [RawHtml(raw or "")]
    if kind == "footnote_ref":
        return [FootnoteRef(str(raw or ""))]
    if kind == "block_code":
        return [StartTag("block_code"), Text(raw or ""), EndTag("block_code")]
    if kind in _LEAF_EVENTS:
        return [_LEAF_EVENTS[kind]()]
    if kind in _SKIPPED_LEAVES or raw is None:
        return []
    return [Text(str(raw))]


def flatten_ast(nodes: List[Dict[str, Any]]) -> List[MarkdownEvent]:
    """Turn mistune's nested AST into a flat event list with Start/End pairs."""
    events: List[MarkdownEvent] = []
    # Entries are AST nodes still to visit, or EndTag events to emit once a
    # container's children are done.
    stack: List[Any] = list(reversed(nodes))
    while stack:
        item = stack.pop()
        if isinstance(item, EndTag):
            events.append(item)
            continue
        children = item.get("children")
        if children is None:
            events.extend(_leaf_events(item))
            continue

        kind = item.get("type", "")
        if kind == "task_list_item":
            kind = "list_item"
            events.append(StartTag(kind))
            events.append(TaskListMarker(bool(item.get("attrs", {}).get("checked"))))
        else:
            events.append(StartTag(kind))
        stack.append(EndTag(kind))
        stack.extend(reversed(children))
    return events


def markdown_events(text: str) -> List[MarkdownEvent]:
    markdown = _build_markdown()
    nodes = markdown(text or "")
    return flatten_ast(nodes)
