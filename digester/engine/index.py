"""Coordinator for the digest pipeline."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from . import metadata as metadata_module
from . import normalize as normalize_module
from . import segments as segments_module
from . import summary as summary_module
from . import tasks as tasks_module
from . import title as title_module
from .config import EngineConfig, default_config
from .errors import EmptyInputError
from .types import AnalysisResult, DigestMetadata

logger = logging.getLogger(__name__)


def analyze_page(
    document: str,
    source_url: Optional[str] = None,
    config: EngineConfig | None = None,
    now: Optional[datetime] = None,
) -> AnalysisResult:
    """Turn raw markup into a digest.

    Raises :class:`EmptyInputError` for empty or whitespace-only documents;
    any other input yields a complete result, degrading gracefully on
    malformed markup.
    """

    if not document or not document.strip():
        raise EmptyInputError("No content available for analysis.")

    engine_config = config or default_config()
    lexicon = engine_config.lexicon

    normalized = normalize_module.normalize_markup(document)
    collected = metadata_module.collect_metadata(normalized, source_url)
    title = title_module.resolve_title(normalized, engine_config)
    segments = segments_module.segment_document(normalized, engine_config)

    summary, key_points = summary_module.summarize(segments, collected.word_count, engine_config, lexicon)
    tasks = tasks_module.detect_tasks(segments, engine_config, lexicon)

    logger.debug(
        "Analyzed %s: %d words, %d segments, %d tasks%s",
        source_url or "pasted content",
        collected.word_count,
        len(segments),
        len(tasks),
        " (degraded)" if normalized.degraded else "",
    )

    return AnalysisResult(
        title=title,
        summary=summary,
        key_points=tuple(key_points),
        tasks=tuple(tasks),
        metadata=DigestMetadata(
            url=source_url,
            headings=collected.headings,
            links=collected.links,
            extracted_at=now or datetime.now(timezone.utc),
            word_count=collected.word_count,
            degraded=normalized.degraded,
        ),
    )
