"""Base completion provider implementing the Template Method pattern.

Every provider shares the same algorithm:
    complete() → _call_api()      ← only this differs per provider
               → _extract_text()

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the response object

There is deliberately no retry loop here: a failed call ends the run.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from standup_core.errors import ReportGenerationError
from standup_core.prompt import CompletionRequest

logger = logging.getLogger(__name__)


class BaseCompletionProvider(ABC):
    def complete(self, request: CompletionRequest) -> str:
        """Send ``request`` once and return the first choice's text, trimmed."""
        logger.info("Calling %s (%s)", self.__class__.__name__, request.model)
        response = self._call_api(request)
        return self._extract_text(response)

    @abstractmethod
    def _call_api(self, request: CompletionRequest) -> Any:
        """Make a single API call and return the parsed response.

        Should raise ReportGenerationError on transport or status failures.
        """

    def _extract_text(self, response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            raise ReportGenerationError("no response generated from the model")
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if content is None:
            raise ReportGenerationError("malformed response: first choice has no message content")
        return content.strip()
