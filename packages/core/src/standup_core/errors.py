"""Exceptions raised by the standup pipeline.

The CLI catches ``StandupError`` at the top level and reports it as a fatal
error; nothing below the CLI retries or recovers except the commit search.
"""

from __future__ import annotations


class StandupError(RuntimeError):
    """Base class for every error the standup pipeline raises on purpose."""


class CollectionError(StandupError):
    """A search surface failed while collecting activity."""

    def __init__(self, source: str, message: str):
        super().__init__(f"failed to get {source}: {message}")
        self.source = source


class PromptConfigError(StandupError):
    """The prompt definition (embedded or user-supplied) is malformed."""


class ReportGenerationError(StandupError):
    """The completion endpoint failed or returned nothing usable."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
