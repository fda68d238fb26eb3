"""Tests for the collaborator boundary helpers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from digester.engine.errors import InvalidTaskPayload
from digester.engine.types import AnalysisResult, DigestMetadata, LinkRef, TaskCandidate
from digester.services import analyze_html, digest_to_dict, tasks_from_payload


def _result(degraded: bool = False) -> AnalysisResult:
    return AnalysisResult(
        title="Launch Plan",
        summary="Review the budget by Friday.",
        key_points=("Review the budget by Friday.",),
        tasks=(TaskCandidate(id="task-1", text="Send the invite", confidence=0.7, source="imperative-list"),),
        metadata=DigestMetadata(
            url="https://example.com/page",
            headings=("Launch Plan",),
            links=(LinkRef(href="https://example.com/docs", label="Docs"),),
            extracted_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            word_count=10,
            degraded=degraded,
        ),
    )


def test_digest_to_dict_matches_contract():
    payload = digest_to_dict(_result())

    assert payload == {
        "title": "Launch Plan",
        "summary": "Review the budget by Friday.",
        "keyPoints": ["Review the budget by Friday."],
        "tasks": [
            {
                "id": "task-1",
                "text": "Send the invite",
                "status": "pending",
                "confidence": 0.7,
                "source": "imperative-list",
            }
        ],
        "metadata": {
            "url": "https://example.com/page",
            "headings": ["Launch Plan"],
            "links": [{"href": "https://example.com/docs", "label": "Docs"}],
            "extractedAt": "2024-05-01T12:00:00+00:00",
            "wordCount": 10,
        },
    }


def test_degraded_flag_only_when_set():
    assert digest_to_dict(_result(degraded=True))["metadata"]["degraded"] is True


def test_analyze_html_returns_payload():
    payload = analyze_html("<h1>Launch Plan</h1><ul><li>Send the invite</li></ul>")

    assert payload["title"] == "Launch Plan"
    assert payload["tasks"][0]["source"] == "imperative-list"
    assert payload["metadata"]["url"] is None


def test_tasks_from_payload_accepts_completed_tasks():
    tasks = tasks_from_payload(
        [
            {"id": "task-1", "text": "Send the invite", "status": "completed", "confidence": 0.7, "source": "imperative-list"},
            {"id": "task-2", "text": "Book the room", "status": "pending", "confidence": 1},
        ]
    )

    assert tasks == [
        TaskCandidate(id="task-1", text="Send the invite", confidence=0.7, source="imperative-list", status="completed"),
        TaskCandidate(id="task-2", text="Book the room", confidence=1.0, source=None, status="pending"),
    ]


@pytest.mark.parametrize(
    "payload, message",
    [
        ("not a list", "must be a list"),
        ([["task-1"]], "must be an object"),
        ([{"id": 1, "text": "x", "status": "pending", "confidence": 0.5}], "id must be a string"),
        ([{"id": "a", "text": "x", "status": "done", "confidence": 0.5}], "status must be one of"),
        ([{"id": "a", "text": "x", "status": "pending", "confidence": True}], "confidence must be a number"),
        ([{"id": "a", "text": "x", "status": "pending", "confidence": 0.5, "source": 3}], "source must be"),
    ],
)
def test_tasks_from_payload_rejects_bad_entries(payload, message):
    with pytest.raises(InvalidTaskPayload, match=message):
        tasks_from_payload(payload)
