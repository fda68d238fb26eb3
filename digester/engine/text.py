"""Shared text utilities for the digest engine."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, List

_TOKEN_RE = re.compile(r"[\w']+")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+(?=\S)")


def tokenize(text: str) -> List[str]:
    """Return lower-cased word tokens from the provided text."""

    return [token.lower() for token in _TOKEN_RE.findall(text)]


def term_frequencies(tokens: Iterable[str]) -> Counter[str]:
    """Return term frequencies for the tokens."""

    return Counter(tokens)


def word_count(text: str) -> int:
    """Count whitespace-delimited tokens."""

    return len(text.split())


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_key(text: str) -> str:
    """Return a lowercase, single-space version of ``text`` for comparisons."""

    return collapse_whitespace(text).lower()


def split_sentences(text: str) -> List[str]:
    """Split a block on terminal punctuation followed by whitespace."""

    return [part.strip() for part in _SENTENCE_BREAK_RE.split(text) if part.strip()]
