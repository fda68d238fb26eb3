"""Split normalized blocks into ordered, tagged segments."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .config import EngineConfig
from .text import split_sentences, word_count
from .types import BlockKind, NormalizedDocument, NormalizedNode, Segment

logger = logging.getLogger(__name__)

# Leading bullet, numbering or checkbox glyph on a plain-text line
_BULLET_RE = re.compile(r"^\s*(?:[-*•‣◦▪–]|\d{1,3}[.)]|\[[ xX]?\]|[☐☑☒✓✔])\s+")


def segment_document(document: NormalizedDocument, config: EngineConfig) -> List[Segment]:
    """Return document-ordered segments, dropping ones too short to carry meaning."""

    minimum = int(config.get("min_segment_tokens", 3))
    limit = int(config.get("max_segments", 2000))

    segments: List[Segment] = []
    previous_kind: Optional[BlockKind] = None
    for node in document.nodes:
        for kind, text in _units(node):
            if len(segments) >= limit:
                logger.info("Segment cap of %d reached, ignoring the rest of the document", limit)
                return segments
            count = word_count(text)
            if count < minimum:
                continue
            segments.append(
                Segment(
                    text=text,
                    kind=kind,
                    order=len(segments),
                    word_count=count,
                    follows_heading=previous_kind is BlockKind.HEADING and kind is not BlockKind.HEADING,
                )
            )
        previous_kind = node.kind
    return segments


def strip_bullet(text: str) -> Tuple[str, bool]:
    """Remove leading bullet/checkbox glyphs, reporting whether any were found."""

    stripped = text
    while True:
        match = _BULLET_RE.match(stripped)
        if not match:
            break
        stripped = stripped[match.end():]
    return stripped.strip(), stripped != text


def _units(node: NormalizedNode) -> List[Tuple[BlockKind, str]]:
    if node.kind is BlockKind.HEADING:
        return [(node.kind, node.text)]

    text, had_bullet = strip_bullet(node.text)
    if node.kind is BlockKind.LIST_ITEM or had_bullet:
        return [(BlockKind.LIST_ITEM, text)] if text else []
    return [(node.kind, sentence) for sentence in split_sentences(node.text)]
