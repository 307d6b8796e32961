"""Standup report generation: prompt assembly followed by one completion call."""

from __future__ import annotations

import logging
from typing import Optional

from standup_core.models import Activity
from standup_core.prompt import PromptMessage, build_request, load_prompt_config
from standup_core.providers.base import BaseCompletionProvider

logger = logging.getLogger(__name__)


def generate_standup_report(
    activities: list[Activity],
    provider: BaseCompletionProvider,
    model: Optional[str] = None,
    prompt_messages: Optional[list[PromptMessage]] = None,
) -> str:
    """Return the model-written standup report for ``activities``.

    The prompt definition is loaded fresh on every call. ``model`` falls back
    to the definition's model when empty; ``prompt_messages`` replaces the
    definition's messages when non-empty.
    """
    config = load_prompt_config()
    logger.debug("Loaded prompt configuration %r with %d message(s)", config.name, len(config.messages))
    request = build_request(activities, config, model=model, prompt_messages=prompt_messages)
    return provider.complete(request)
