"""Shared fixtures for engine tests."""

from __future__ import annotations

from typing import List

import pytest

from digester.engine.config import EngineConfig, load_config
from digester.engine.normalize import normalize_markup
from digester.engine.segments import segment_document
from digester.engine.types import BlockKind, Segment


@pytest.fixture()
def engine_config():
    """Provide a mutable copy of the default engine configuration."""

    return load_config(None)


def make_segment(
    text: str,
    kind: BlockKind = BlockKind.PARAGRAPH,
    *,
    order: int = 0,
    follows_heading: bool = False,
) -> Segment:
    return Segment(
        text=text,
        kind=kind,
        order=order,
        word_count=len(text.split()),
        follows_heading=follows_heading,
    )


def segments_for(markup: str, config: EngineConfig) -> List[Segment]:
    return segment_document(normalize_markup(markup), config)
