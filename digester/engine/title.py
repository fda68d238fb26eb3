"""Title selection for a normalized document."""

from __future__ import annotations

from typing import Iterator

from .config import EngineConfig
from .types import BlockKind, NormalizedDocument


def resolve_title(document: NormalizedDocument, config: EngineConfig) -> str:
    """Return the best single-line title, or the configured placeholder.

    Candidates in priority order: the ``<title>`` element, the first level-1
    heading, then the first plain-text line long enough to not be a stray token.
    """

    limit = int(config.get("max_title_chars", 180))
    for candidate in _candidates(document, config):
        title = candidate.strip()
        if title:
            return title[:limit].rstrip()
    return str(config.get("untitled_placeholder", "Untitled page"))


def _candidates(document: NormalizedDocument, config: EngineConfig) -> Iterator[str]:
    yield document.title

    for node in document.nodes:
        if node.kind is BlockKind.HEADING and node.level == 1 and node.text.strip():
            yield node.text
            break

    minimum = int(config.get("min_title_chars", 8))
    for line in document.plain_text.splitlines():
        if len(line.strip()) > minimum:
            yield line
            break
