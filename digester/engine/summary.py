"""Extractive summary and key-point selection."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import EngineConfig, Lexicon
from .text import normalize_key, term_frequencies, tokenize
from .types import Segment


@dataclass(frozen=True)
class ScoredSegment:
    segment: Segment
    score: float


def summarize(
    segments: Sequence[Segment],
    word_count: int,
    config: EngineConfig,
    lexicon: Optional[Lexicon] = None,
) -> Tuple[str, List[str]]:
    """Return ``(summary, key_points)`` for the document segments.

    The summary keeps document order for readability; key points keep score
    order and never repeat a sentence already in the summary. Both are drawn
    verbatim from the segments.
    """

    if not segments:
        return "", []

    ranked = rank_segments(segments, word_count, config, lexicon or config.lexicon)

    summary_size = max(int(config.get("summary_sentences", 3)), 0)
    chosen = _distinct(ranked, summary_size, excluded=set())
    chosen.sort(key=lambda segment: segment.order)
    summary = str(config.get("summary_separator", " ")).join(segment.text for segment in chosen)

    key_limit = max(int(config.get("max_key_points", 6)), 0)
    key_points = _distinct(ranked, key_limit, excluded={normalize_key(segment.text) for segment in chosen})
    return summary, [segment.text for segment in key_points]


def rank_segments(
    segments: Sequence[Segment],
    word_count: int,
    config: EngineConfig,
    lexicon: Lexicon,
) -> List[ScoredSegment]:
    """Score every segment and sort by salience, earlier segments first on ties."""

    frequencies = term_frequencies(
        token for segment in segments for token in _content_tokens(segment.text, lexicon)
    )
    peak = max(frequencies.values(), default=0)

    position_bonus = float(config.get("position_bonus", 0.2))
    heading_bonus = float(config.get("heading_bonus", 0.15))

    scored: List[ScoredSegment] = []
    words_before = 0
    for segment in segments:
        salience = _salience(_content_tokens(segment.text, lexicon), frequencies, peak)
        score = salience * config.kind_weight(segment.kind.value)
        if word_count > 0:
            score += position_bonus * max(0.0, 1.0 - words_before / word_count)
        if segment.follows_heading:
            score += heading_bonus
        scored.append(ScoredSegment(segment=segment, score=score))
        words_before += segment.word_count

    scored.sort(key=lambda item: (-item.score, item.segment.order))
    return scored


def _content_tokens(text: str, lexicon: Lexicon) -> List[str]:
    return [token for token in tokenize(text) if token not in lexicon.stopwords]


def _salience(tokens: List[str], frequencies: Counter[str], peak: int) -> float:
    if not tokens or peak == 0:
        return 0.0
    return sum(frequencies[token] for token in tokens) / (len(tokens) * peak)


def _distinct(ranked: Sequence[ScoredSegment], limit: int, excluded: set[str]) -> List[Segment]:
    selected: List[Segment] = []
    seen = set(excluded)
    for item in ranked:
        if len(selected) >= limit:
            break
        key = normalize_key(item.segment.text)
        if key in seen:
            continue
        seen.add(key)
        selected.append(item.segment)
    return selected
