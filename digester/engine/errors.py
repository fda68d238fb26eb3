"""Exceptions raised by the digest pipeline."""

from __future__ import annotations


class DigestError(Exception):
    """Base class for digest failures."""


class EmptyInputError(DigestError, ValueError):
    """The document had no usable content."""


class ParseDegraded(DigestError):
    """Markup could not be parsed into a tree.

    Internal signal only: the normalizer catches it and falls back to plain
    tag stripping, so callers never see it.
    """


class InvalidTaskPayload(DigestError, ValueError):
    """A task-list update did not match the task contract."""
