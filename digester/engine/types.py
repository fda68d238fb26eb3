"""Typed data structures used by the digest pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

TASK_PENDING = "pending"
TASK_COMPLETED = "completed"
TASK_STATUSES = (TASK_PENDING, TASK_COMPLETED)


class BlockKind(str, Enum):
    """Category of a block of normalized markup."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list-item"
    ANCHOR = "anchor"
    OTHER = "other"


@dataclass(frozen=True)
class NormalizedNode:
    """A block (or anchor) of visible text in document order."""

    kind: BlockKind
    order: int
    text: str
    level: Optional[int] = None
    href: Optional[str] = None


@dataclass(frozen=True)
class NormalizedDocument:
    """Result of markup normalization for a single pipeline run."""

    title: str
    nodes: Tuple[NormalizedNode, ...]
    anchors: Tuple[NormalizedNode, ...]
    plain_text: str
    degraded: bool = False


@dataclass(frozen=True)
class Segment:
    """Sentence, heading or list item used as the atomic scoring unit."""

    text: str
    kind: BlockKind
    order: int
    word_count: int
    follows_heading: bool = False


@dataclass(frozen=True)
class LinkRef:
    href: str
    label: str


@dataclass(frozen=True)
class TaskCandidate:
    """Candidate action item detected in the document."""

    id: str
    text: str
    confidence: float
    source: Optional[str]
    status: str = TASK_PENDING


@dataclass(frozen=True)
class DigestMetadata:
    url: Optional[str]
    headings: Tuple[str, ...]
    links: Tuple[LinkRef, ...]
    extracted_at: datetime
    word_count: int
    degraded: bool = False


@dataclass(frozen=True)
class AnalysisResult:
    """Digest produced for one document."""

    title: str
    summary: str
    key_points: Tuple[str, ...]
    tasks: Tuple[TaskCandidate, ...]
    metadata: DigestMetadata
