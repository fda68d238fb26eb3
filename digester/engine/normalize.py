"""Markup normalization: visible text blocks and anchors from raw HTML.

The normalizer never fails on non-empty input. Markup is parsed with
BeautifulSoup (``lxml`` first, ``html.parser`` as a fallback); if no tree can
be built or walked, the text is recovered by stripping tags instead and the
document is flagged as degraded.
"""

from __future__ import annotations

import html
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup  # type: ignore
from bs4.element import NavigableString, PreformattedString, Tag  # type: ignore

from .errors import ParseDegraded
from .text import collapse_whitespace
from .types import BlockKind, NormalizedDocument, NormalizedNode

logger = logging.getLogger(__name__)

PARSERS = ("lxml", "html.parser")

# Elements whose content is never visible text
SKIP_TAGS: set[str] = {"script", "style", "noscript", "template", "head", "title", "svg", "iframe"}

HEADING_LEVELS = {f"h{level}": level for level in range(1, 7)}
PARAGRAPH_TAGS: set[str] = {"p", "blockquote", "pre", "dd", "dt", "figcaption", "caption", "summary"}
BLOCK_TAGS: set[str] = {
    "address", "article", "aside", "body", "details", "dialog", "div", "dl",
    "fieldset", "figure", "footer", "form", "header", "hgroup", "hr", "html",
    "legend", "li", "main", "nav", "ol", "section", "table", "tbody", "td",
    "tfoot", "th", "thead", "tr", "ul",
} | PARAGRAPH_TAGS | set(HEADING_LEVELS)

_MARKUP_RE = re.compile(r"<(?:[a-zA-Z][\w:-]*|/[a-zA-Z]|!)")
_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)

_INVISIBLE_RE = re.compile(
    r"<(script|style|noscript|template|head|title)\b.*?</\1\s*>|<!--.*?-->",
    re.IGNORECASE | re.DOTALL,
)
_BREAK_TAG_RE = re.compile(
    r"</?(?:p|div|li|ul|ol|h[1-6]|br|tr|td|th|section|article|header|footer|blockquote|pre|table)\b[^>]*>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"<[^>]*>")


class _BlockWriter:
    """Accumulates inline text and emits one node per block."""

    def __init__(self) -> None:
        self.nodes: List[NormalizedNode] = []
        self.anchors: List[NormalizedNode] = []
        self._parts: List[str] = []
        self._kind = BlockKind.OTHER
        self._level: Optional[int] = None

    def write(self, text: str, kind: BlockKind, level: Optional[int]) -> None:
        if not self._parts:
            self._kind = kind
            self._level = level
        self._parts.append(text)

    def flush(self) -> None:
        text = collapse_whitespace("".join(self._parts))
        self._parts = []
        if text:
            self.nodes.append(
                NormalizedNode(kind=self._kind, order=len(self.nodes), text=text, level=self._level)
            )

    def anchor(self, tag: Tag) -> None:
        href = (tag.get("href") or "").strip()
        self.anchors.append(
            NormalizedNode(
                kind=BlockKind.ANCHOR,
                order=len(self.anchors),
                text=collapse_whitespace(tag.get_text()),
                href=href,
            )
        )


def normalize_markup(markup: str) -> NormalizedDocument:
    """Return the visible blocks, anchors and plain text of ``markup``."""

    if not _MARKUP_RE.search(markup):
        return _text_document(markup)

    try:
        return _tree_document(markup)
    except ParseDegraded as exc:
        logger.warning("Falling back to tag stripping: %s", exc)
        return _text_document(_strip_tags(markup), degraded=True)


def _tree_document(markup: str) -> NormalizedDocument:
    soup = _parse(markup)
    title_tag = _document_title(soup)
    title = collapse_whitespace(title_tag.get_text()) if title_tag is not None else ""

    writer = _BlockWriter()
    try:
        _walk(soup, BlockKind.OTHER, None, writer)
    except RecursionError as exc:
        raise ParseDegraded("markup is nested too deeply to walk") from exc
    writer.flush()

    return NormalizedDocument(
        title=title,
        nodes=tuple(writer.nodes),
        anchors=tuple(writer.anchors),
        plain_text="\n".join(node.text for node in writer.nodes),
    )


def _document_title(soup: BeautifulSoup) -> Optional[Tag]:
    """Return the first <title> that is not an inline SVG label."""

    for tag in soup.find_all("title"):
        if tag.find_parent("svg") is None:
            return tag
    return None


def _parse(markup: str) -> BeautifulSoup:
    for parser in PARSERS:
        try:
            return BeautifulSoup(markup, parser)
        except Exception as exc:
            logger.debug("Parser %s rejected the markup: %s", parser, exc)
    raise ParseDegraded("no parser could read the markup")


def _walk(node: Tag, kind: BlockKind, level: Optional[int], writer: _BlockWriter) -> None:
    for child in node.children:
        if isinstance(child, PreformattedString):
            # Comments, doctype, CDATA and processing instructions
            continue
        if isinstance(child, NavigableString):
            writer.write(str(child), kind, level)
            continue
        if not isinstance(child, Tag) or not child.name:
            continue

        name = child.name.lower()
        if name in SKIP_TAGS or _is_hidden(child):
            continue
        if name == "br":
            writer.flush()
            continue
        if name == "a":
            writer.anchor(child)

        if name in BLOCK_TAGS:
            child_kind, child_level = _block_kind(name, kind, level)
            writer.flush()
            _walk(child, child_kind, child_level, writer)
            writer.flush()
        else:
            _walk(child, kind, level, writer)


def _block_kind(name: str, kind: BlockKind, level: Optional[int]) -> tuple[BlockKind, Optional[int]]:
    if name in HEADING_LEVELS:
        return BlockKind.HEADING, HEADING_LEVELS[name]
    if name == "li":
        return BlockKind.LIST_ITEM, None
    if name in PARAGRAPH_TAGS and kind not in (BlockKind.LIST_ITEM, BlockKind.HEADING):
        return BlockKind.PARAGRAPH, None
    return kind, level


def _is_hidden(tag: Tag) -> bool:
    if tag.has_attr("hidden"):
        return True
    if str(tag.get("aria-hidden", "")).strip().lower() == "true":
        return True
    style = tag.get("style") or ""
    return bool(_HIDDEN_STYLE_RE.search(str(style)))


def _strip_tags(markup: str) -> str:
    text = _INVISIBLE_RE.sub(" ", markup)
    text = _BREAK_TAG_RE.sub("\n", text)
    return _TAG_RE.sub(" ", text)


def _text_document(text: str, degraded: bool = False) -> NormalizedDocument:
    """Build a document from plain text, one block per non-empty line."""

    nodes: List[NormalizedNode] = []
    for line in html.unescape(text).splitlines():
        cleaned = collapse_whitespace(line)
        if cleaned:
            nodes.append(NormalizedNode(kind=BlockKind.PARAGRAPH, order=len(nodes), text=cleaned))
    return NormalizedDocument(
        title="",
        nodes=tuple(nodes),
        anchors=(),
        plain_text="\n".join(node.text for node in nodes),
        degraded=degraded,
    )
