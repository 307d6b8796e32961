"""Prompt assembly for the standup report.

Turns collected activities into a plain-text block, substitutes it into the
message templates of the embedded prompt definition and resolves the model
and sampling parameters sent to the completion endpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import yaml

from standup_core.errors import PromptConfigError
from standup_core.models import Activity, ActivityType

logger = logging.getLogger(__name__)

PROMPT_PATH = Path(__file__).parent / "prompts" / "standup.prompt.yml"
ACTIVITIES_PLACEHOLDER = "{{activities}}"
NO_ACTIVITY_MESSAGE = "No GitHub activity found for the specified period."

# PR and issue bodies at or above this length are left out of the prompt.
_MAX_INLINE_DESCRIPTION = 200

# Some models reject any temperature other than their default.
# Keys are lowercase model identifiers.
MODEL_TEMPERATURES: Mapping[str, float] = MappingProxyType(
    {
        "openai/gpt-5": 1.0,
        "openai/gpt-5-mini": 1.0,
    }
)


@dataclass(frozen=True)
class PromptMessage:
    role: str
    content: str


@dataclass(frozen=True)
class ModelParameters:
    temperature: float = 0.0
    top_p: float = 1.0


@dataclass(frozen=True)
class PromptConfig:
    model: str
    messages: list[PromptMessage]
    model_parameters: ModelParameters = field(default_factory=ModelParameters)
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class CompletionRequest:
    """Body of a chat-completion call."""

    messages: list[PromptMessage]
    model: str
    temperature: float
    top_p: float
    stream: bool = False

    def to_payload(self) -> dict:
        return {
            "messages": [{"role": m.role, "content": m.content} for m in self.messages],
            "model": self.model,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "stream": self.stream,
        }


# ---------------------------------------------------------------------------
# Prompt definition
# ---------------------------------------------------------------------------


def load_prompt_config(path: Optional[Path] = None) -> PromptConfig:
    """Parse the prompt definition. Read from disk on every call."""
    path = path or PROMPT_PATH
    try:
        raw = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise PromptConfigError(f"failed to parse prompt configuration: {e}") from e

    if not isinstance(raw, dict):
        raise PromptConfigError("failed to parse prompt configuration: expected a mapping")

    params = raw.get("modelParameters") or {}
    try:
        messages = [PromptMessage(role=str(m["role"]), content=str(m["content"])) for m in raw.get("messages") or []]
        model_parameters = ModelParameters(
            temperature=float(params.get("temperature", 0.0)),
            top_p=float(params.get("topP", 1.0)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise PromptConfigError(f"failed to parse prompt configuration: {e}") from e

    if not messages:
        raise PromptConfigError("failed to parse prompt configuration: no messages defined")

    return PromptConfig(
        model=str(raw.get("model") or ""),
        messages=messages,
        model_parameters=model_parameters,
        name=str(raw.get("name") or ""),
        description=str(raw.get("description") or ""),
    )


def parse_prompt_override(text: str) -> PromptMessage:
    """Parse a ``role:message`` override. Only the first colon separates the two."""
    role, sep, content = text.partition(":")
    if not sep:
        raise PromptConfigError(f"invalid prompt format (expected 'role:message'): {text}")
    return PromptMessage(role=role, content=content)


# ---------------------------------------------------------------------------
# Activity formatting
# ---------------------------------------------------------------------------


def _commit_lines(activity: Activity) -> list[str]:
    lines = [f"- [{activity.repository}] {activity.title}"]
    if activity.description != activity.title:
        # First non-blank line of the body; git separates subject and body with a blank line.
        body = next((line.strip() for line in activity.description.split("\n")[1:] if line.strip()), "")
        if body:
            lines.append(f"  Description: {body}")
    return lines


def _item_lines(activity: Activity) -> list[str]:
    lines = [f"- [{activity.repository}] {activity.title}"]
    if activity.description and len(activity.description) < _MAX_INLINE_DESCRIPTION:
        lines.append(f"  Description: {activity.description.strip()}")
    return lines


def _review_lines(activity: Activity) -> list[str]:
    return [f"- [{activity.repository}] {activity.title}"]


_SECTIONS = (
    (ActivityType.COMMIT, "COMMITS:", _commit_lines),
    (ActivityType.PULL_REQUEST, "PULL REQUESTS:", _item_lines),
    (ActivityType.ISSUE, "ISSUES:", _item_lines),
    (ActivityType.REVIEW, "CODE REVIEWS:", _review_lines),
)


def format_activities(activities: list[Activity]) -> str:
    """Render activities as the text block substituted for ``{{activities}}``.

    Sections appear in a fixed order and only when they have entries. Within a
    section, records keep the order they were collected in.
    """
    if not activities:
        return NO_ACTIVITY_MESSAGE

    lines: list[str] = []
    for activity_type, header, render in _SECTIONS:
        section = [a for a in activities if a.type is activity_type]
        if not section:
            continue
        lines.append(header)
        for activity in section:
            lines.extend(render(activity))
        lines.append("")

    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Request assembly
# ---------------------------------------------------------------------------


def select_model(model: Optional[str], config: PromptConfig) -> str:
    return model or config.model


def resolve_temperature(model: str, config: PromptConfig) -> float:
    """Per-model override first, then the prompt definition's temperature."""
    if model:
        mapped = MODEL_TEMPERATURES.get(model.lower())
        if mapped is not None:
            return mapped
    return config.model_parameters.temperature


def render_messages(messages: list[PromptMessage], activity_block: str) -> list[PromptMessage]:
    return [PromptMessage(role=m.role, content=m.content.replace(ACTIVITIES_PLACEHOLDER, activity_block)) for m in messages]


def build_request(
    activities: list[Activity],
    config: PromptConfig,
    model: Optional[str] = None,
    prompt_messages: Optional[list[PromptMessage]] = None,
) -> CompletionRequest:
    """Assemble the completion request.

    ``prompt_messages``, when non-empty, replaces the configured messages
    entirely. Top-p always comes from the prompt definition.
    """
    activity_block = format_activities(activities)
    templates = prompt_messages if prompt_messages else config.messages
    selected_model = select_model(model, config)
    temperature = resolve_temperature(selected_model, config)
    logger.debug("Using model %s (temperature=%s, top_p=%s)", selected_model, temperature, config.model_parameters.top_p)

    return CompletionRequest(
        messages=render_messages(templates, activity_block),
        model=selected_model,
        temperature=temperature,
        top_p=config.model_parameters.top_p,
        stream=False,
    )
