"""Heuristic action-item detection over document segments."""

from __future__ import annotations

import hashlib
from typing import Callable, Dict, List, Optional, Sequence

from .config import EngineConfig, Lexicon
from .text import tokenize
from .types import BlockKind, Segment, TaskCandidate

SIGNAL_MARKER = "marker"
SIGNAL_IMPERATIVE_LIST = "imperative-list"
SIGNAL_DEADLINE = "deadline"
SIGNAL_IMPERATIVE_TEXT = "imperative-text"

# Descending confidence; the first matching signal wins.
SIGNAL_ORDER = (SIGNAL_MARKER, SIGNAL_IMPERATIVE_LIST, SIGNAL_DEADLINE, SIGNAL_IMPERATIVE_TEXT)


def detect_tasks(
    segments: Sequence[Segment],
    config: EngineConfig,
    lexicon: Optional[Lexicon] = None,
) -> List[TaskCandidate]:
    """Return task candidates in document order, at most one per segment."""

    lexicon = lexicon or config.lexicon
    order = tuple(config.get("signal_order") or SIGNAL_ORDER)

    tasks: List[TaskCandidate] = []
    for segment in segments:
        signal = match_signal(segment, lexicon, order)
        if signal is None:
            continue
        tasks.append(
            TaskCandidate(
                id=task_id(segment),
                text=segment.text,
                confidence=config.confidence(signal),
                source=signal,
            )
        )
    return tasks


def match_signal(
    segment: Segment,
    lexicon: Lexicon,
    order: Sequence[str] = SIGNAL_ORDER,
) -> Optional[str]:
    """Return the name of the first signal the segment triggers."""

    for signal in order:
        check = _CHECKS.get(signal)
        if check is not None and check(segment, lexicon):
            return signal
    return None


def task_id(segment: Segment) -> str:
    """Stable identifier derived from the segment position and text."""

    digest = hashlib.sha1(f"{segment.order}:{segment.text}".encode("utf-8")).hexdigest()
    return f"task-{digest[:16]}"


def _has_marker(segment: Segment, lexicon: Lexicon) -> bool:
    return bool(lexicon.marker_pattern.match(segment.text))


def _is_imperative_list(segment: Segment, lexicon: Lexicon) -> bool:
    if segment.kind is not BlockKind.LIST_ITEM or _is_question(segment.text):
        return False
    return starts_with_imperative(segment.text, lexicon)


def _has_deadline(segment: Segment, lexicon: Lexicon) -> bool:
    if _is_question(segment.text):
        return False
    tokens = tokenize(segment.text)
    dated = bool(lexicon.date_pattern.search(segment.text)) or any(
        token in lexicon.deadline_words or token in lexicon.date_words for token in tokens
    )
    return dated and any(lexicon.is_verb(token) for token in tokens)


def _is_imperative_text(segment: Segment, lexicon: Lexicon) -> bool:
    if segment.kind is BlockKind.LIST_ITEM or _is_question(segment.text):
        return False
    return starts_with_imperative(segment.text, lexicon)


def starts_with_imperative(text: str, lexicon: Lexicon) -> bool:
    """True when the first word, ignoring politeness words, is an imperative verb."""

    tokens = tokenize(text)
    while tokens and tokens[0] in lexicon.politeness_words:
        tokens = tokens[1:]
    return bool(tokens) and tokens[0] in lexicon.imperative_verbs


def _is_question(text: str) -> bool:
    return text.rstrip().endswith("?")


_CHECKS: Dict[str, Callable[[Segment, Lexicon], bool]] = {
    SIGNAL_MARKER: _has_marker,
    SIGNAL_IMPERATIVE_LIST: _is_imperative_list,
    SIGNAL_DEADLINE: _has_deadline,
    SIGNAL_IMPERATIVE_TEXT: _is_imperative_text,
}
