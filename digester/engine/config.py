"""Configuration helpers for the digest engine."""

from __future__ import annotations

import copy
import os
import re
from dataclasses import dataclass, field
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, Tuple

import yaml

CONFIG_ENV_VAR = "DIGESTER_CONFIG"
LEXICON_PATH = Path(__file__).with_name("lexicon.yaml")


@dataclass(frozen=True)
class Lexicon:
    """Word lists and patterns driving task detection and scoring."""

    imperative_verbs: FrozenSet[str]
    auxiliary_verbs: FrozenSet[str]
    politeness_words: FrozenSet[str]
    deadline_words: FrozenSet[str]
    date_words: FrozenSet[str]
    stopwords: FrozenSet[str]
    markers: Tuple[str, ...]
    marker_pattern: re.Pattern[str]
    date_pattern: re.Pattern[str]

    def is_verb(self, token: str) -> bool:
        return token in self.imperative_verbs or token in self.auxiliary_verbs


@dataclass(frozen=True)
class EngineConfig:
    """Typed wrapper around the engine configuration dictionary."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def confidence(self, signal: str) -> float:
        return float(self.raw.get("confidence", {}).get(signal, 0.0))

    def kind_weight(self, kind: str) -> float:
        return float(self.raw.get("kind_weights", {}).get(kind, 1.0))

    @cached_property
    def lexicon(self) -> Lexicon:
        """Compiled lexicon, built on first use and kept for the life of the config."""

        return build_lexicon(self.raw.get("lexicon", {}))


DEFAULTS: Dict[str, Any] = {
    # Fallback title lines must be strictly longer than this
    "min_title_chars": 8,
    "max_title_chars": 180,
    "untitled_placeholder": "Untitled page",
    "min_segment_tokens": 3,
    "max_segments": 2000,
    "summary_sentences": 3,
    "summary_separator": " ",
    "max_key_points": 6,
    "position_bonus": 0.2,
    "heading_bonus": 0.15,
    "kind_weights": {
        "heading": 0.6,
        "paragraph": 1.0,
        "list-item": 0.9,
        "other": 0.9,
    },
    "signal_order": ["marker", "imperative-list", "deadline", "imperative-text"],
    "confidence": {
        "marker": 0.9,
        "imperative-list": 0.7,
        "deadline": 0.6,
        "imperative-text": 0.5,
    },
    "lexicon": {},
}


def load_config(path: str | Path | None = None) -> EngineConfig:
    """Load configuration from YAML, merging with defaults and the packaged lexicon."""

    data: Dict[str, Any] = copy.deepcopy(DEFAULTS)
    merge_into(data["lexicon"], _read_yaml(LEXICON_PATH))

    if path is not None and Path(path).exists():
        merge_into(data, _read_yaml(Path(path)))

    return EngineConfig(data)


@lru_cache(maxsize=None)
def default_config() -> EngineConfig:
    """Return the process-wide configuration, loaded once.

    ``DIGESTER_CONFIG`` may name a YAML file overriding the defaults.
    """

    return load_config(os.getenv(CONFIG_ENV_VAR) or None)


def merge_into(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base dict."""

    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merge_into(base[key], value)
        else:
            base[key] = value


def build_lexicon(raw: Dict[str, Any]) -> Lexicon:
    """Compile the raw lexicon mapping into matchers."""

    markers = tuple(str(marker).strip().lower() for marker in raw.get("markers", []) if str(marker).strip())
    date_words = _word_set(raw.get("date_words", []))
    return Lexicon(
        imperative_verbs=_word_set(raw.get("imperative_verbs", [])),
        auxiliary_verbs=_word_set(raw.get("auxiliary_verbs", [])),
        politeness_words=_word_set(raw.get("politeness_words", [])),
        deadline_words=_word_set(raw.get("deadline_words", [])),
        date_words=date_words,
        stopwords=_word_set(raw.get("stopwords", [])),
        markers=markers,
        marker_pattern=_marker_pattern(markers),
        date_pattern=_date_pattern(raw.get("date_patterns", [])),
    )


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as stream:
        return yaml.safe_load(stream) or {}


def _word_set(words: Any) -> FrozenSet[str]:
    return frozenset(str(word).strip().lower() for word in words or [] if str(word).strip())


def _marker_pattern(markers: Tuple[str, ...]) -> re.Pattern[str]:
    if not markers:
        return re.compile(r"(?!x)x")
    alternatives = []
    # Longest first so "action item:" wins over "action:".
    for marker in sorted(markers, key=len, reverse=True):
        suffix = r"\b" if marker[-1].isalnum() else ""
        alternatives.append(re.escape(marker) + suffix)
    return re.compile(r"^\s*(?:" + "|".join(alternatives) + ")", re.IGNORECASE)


def _date_pattern(patterns: Any) -> re.Pattern[str]:
    cleaned = [str(pattern) for pattern in patterns or [] if str(pattern)]
    if not cleaned:
        return re.compile(r"(?!x)x")
    return re.compile("|".join(f"(?:{pattern})" for pattern in cleaned), re.IGNORECASE)
