"""Tests for generate_standup_report."""

from datetime import datetime, timezone

from standup_core import report as report_mod
from standup_core.models import Activity, ActivityType
from standup_core.prompt import PromptMessage, load_prompt_config
from standup_core.report import generate_standup_report


class RecordingProvider:
    def __init__(self, text="Report"):
        self.text = text
        self.requests = []

    def complete(self, request):
        self.requests.append(request)
        return self.text


PR = Activity(
    type=ActivityType.PULL_REQUEST,
    repository="octo/app",
    title="PR #1: Add cache",
    description="Adds a cache",
    url="https://github.com/octo/app/pull/1",
    created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
)


def test_uses_embedded_messages_when_no_overrides():
    provider = RecordingProvider()
    generate_standup_report([PR], provider)

    config = load_prompt_config()
    request = provider.requests[0]
    assert [m.role for m in request.messages] == [m.role for m in config.messages]
    assert any("PR #1: Add cache" in m.content for m in request.messages)
    assert all("{{activities}}" not in m.content for m in request.messages)
    assert request.model == config.model


def test_overrides_and_model_passed_through():
    provider = RecordingProvider()
    generate_standup_report(
        [PR],
        provider,
        model="OpenAI/GPT-5",
        prompt_messages=[PromptMessage("user", "{{activities}}")],
    )

    request = provider.requests[0]
    assert request.model == "OpenAI/GPT-5"
    assert request.temperature == 1.0
    assert len(request.messages) == 1
    assert request.messages[0].content.startswith("PULL REQUESTS:")


def test_returns_provider_text():
    assert generate_standup_report([PR], RecordingProvider("Done.")) == "Done."


def test_prompt_config_loaded_on_every_call(mocker):
    spy = mocker.spy(report_mod, "load_prompt_config")
    generate_standup_report([PR], RecordingProvider())
    generate_standup_report([PR], RecordingProvider())
    assert spy.call_count == 2
