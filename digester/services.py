"""Service functions at the boundary between the engine and its callers.

These helpers keep the HTTP, storage and dashboard layers thin: they turn a
digest into the JSON shape those layers exchange and validate the task lists
sent back when a user flips a task between pending and completed.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Dict, List, Optional, Sequence

from .engine.config import EngineConfig
from .engine.errors import InvalidTaskPayload
from .engine.index import analyze_page
from .engine.types import TASK_STATUSES, AnalysisResult, TaskCandidate

logger = logging.getLogger(__name__)


def analyze_html(html: str, url: Optional[str] = None, config: EngineConfig | None = None) -> Dict[str, Any]:
    """Analyze ``html`` and return the serialized digest."""

    result = analyze_page(html, url, config)
    if result.metadata.degraded:
        logger.warning("Markup for %s could not be parsed; used plain text extraction", url or "pasted content")
    logger.info("Digest ready for %s with %d tasks", url or "pasted content", len(result.tasks))
    return digest_to_dict(result)


def digest_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    """Convert a digest into the JSON-ready mapping shared with collaborators.

    Parameters
    ----------
    result:
        The digest returned by :func:`analyze_page`.

    Returns
    -------
    dict
        Camel-cased keys (``keyPoints``, ``extractedAt``, ``wordCount``) with
        an ISO-8601 timestamp. ``degraded`` is only present when set.
    """

    metadata: Dict[str, Any] = {
        "url": result.metadata.url,
        "headings": list(result.metadata.headings),
        "links": [{"href": link.href, "label": link.label} for link in result.metadata.links],
        "extractedAt": result.metadata.extracted_at.isoformat(),
        "wordCount": result.metadata.word_count,
    }
    if result.metadata.degraded:
        metadata["degraded"] = True

    return {
        "title": result.title,
        "summary": result.summary,
        "keyPoints": list(result.key_points),
        "tasks": [_task_to_dict(task) for task in result.tasks],
        "metadata": metadata,
    }


def tasks_from_payload(items: Any) -> List[TaskCandidate]:
    """Validate a task-list update and return it as task candidates.

    Parameters
    ----------
    items:
        Sequence of mappings with ``id``, ``text``, ``status``,
        ``confidence`` and an optional ``source``.

    Returns
    -------
    list of TaskCandidate
        The tasks in the order given.

    Raises
    ------
    InvalidTaskPayload
        If the payload is not a list or any entry breaks the task contract.
    """

    if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
        raise InvalidTaskPayload("Tasks must be a list.")

    tasks: List[TaskCandidate] = []
    for index, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            raise InvalidTaskPayload(f"Task {index} must be an object.")
        for key in ("id", "text"):
            if not isinstance(item.get(key), str):
                raise InvalidTaskPayload(f"Task {index}: {key} must be a string.")
        status = item.get("status")
        if status not in TASK_STATUSES:
            raise InvalidTaskPayload(f"Task {index}: status must be one of {', '.join(TASK_STATUSES)}.")
        confidence = item.get("confidence")
        if isinstance(confidence, bool) or not isinstance(confidence, Real):
            raise InvalidTaskPayload(f"Task {index}: confidence must be a number.")
        source = item.get("source")
        if source is not None and not isinstance(source, str):
            raise InvalidTaskPayload(f"Task {index}: source must be a string or null.")
        tasks.append(
            TaskCandidate(
                id=item["id"],
                text=item["text"],
                confidence=float(confidence),
                source=source,
                status=status,
            )
        )
    return tasks


def _task_to_dict(task: TaskCandidate) -> Dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "status": task.status,
        "confidence": task.confidence,
        "source": task.source,
    }
