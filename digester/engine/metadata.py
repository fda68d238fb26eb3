"""Heading, link and word-count collection from a normalized document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Set, Tuple
from urllib.parse import urljoin

from .text import word_count
from .types import BlockKind, LinkRef, NormalizedDocument

# Pseudo-links that never point at a resource
IGNORED_SCHEMES = ("javascript:",)


@dataclass(frozen=True)
class CollectedMetadata:
    headings: Tuple[str, ...]
    links: Tuple[LinkRef, ...]
    word_count: int


def collect_metadata(document: NormalizedDocument, source_url: Optional[str] = None) -> CollectedMetadata:
    """Gather headings, outbound links and the word count in one pass."""

    headings = [node.text for node in document.nodes if node.kind is BlockKind.HEADING and node.text.strip()]
    return CollectedMetadata(
        headings=tuple(headings),
        links=tuple(_collect_links(document, source_url)),
        word_count=word_count(document.plain_text),
    )


def _collect_links(document: NormalizedDocument, source_url: Optional[str]) -> List[LinkRef]:
    links: List[LinkRef] = []
    seen: Set[Tuple[str, str]] = set()
    for anchor in document.anchors:
        raw_href = (anchor.href or "").strip()
        if not raw_href or raw_href.lower().startswith(IGNORED_SCHEMES):
            continue
        href = resolve_href(raw_href, source_url)
        label = anchor.text.strip() or href
        key = (href, label)
        if key in seen:
            continue
        seen.add(key)
        links.append(LinkRef(href=href, label=label))
    return links


def resolve_href(href: str, source_url: Optional[str]) -> str:
    """Resolve ``href`` against the source URL when one is known."""

    if not source_url:
        return href
    try:
        return urljoin(source_url, href)
    except ValueError:
        # Malformed href, e.g. an unbalanced IPv6 bracket
        return href
