from __future__ import annotations

import httpx
from openai import APIError, APIStatusError, OpenAI

from standup_core.errors import ReportGenerationError, StandupError
from standup_core.prompt import CompletionRequest
from standup_core.providers.base import BaseCompletionProvider

GITHUB_MODELS_BASE_URL = "https://models.github.ai/inference"


class GitHubModelsProvider(BaseCompletionProvider):
    """Chat completions through GitHub Models, authenticated with a GitHub token."""

    BASE_URL = GITHUB_MODELS_BASE_URL
    TIMEOUT_SECONDS = 30.0

    def __init__(self, token: str, http_client: httpx.Client | None = None):
        if not token:
            raise StandupError("no GitHub token found. Please run 'gh auth login' to authenticate")
        # max_retries=0: the SDK would otherwise retry 429/5xx on its own.
        self.client = OpenAI(
            api_key=token,
            base_url=self.BASE_URL,
            timeout=self.TIMEOUT_SECONDS,
            max_retries=0,
            http_client=http_client,
        )

    def _call_api(self, request: CompletionRequest):
        payload = request.to_payload()
        try:
            return self.client.chat.completions.create(**payload)
        except APIStatusError as e:
            raise ReportGenerationError(
                f"API request failed with status {e.status_code}: {e.response.text}",
                status_code=e.status_code,
                body=e.response.text,
            ) from e
        except APIError as e:
            raise ReportGenerationError(f"failed to make request: {e}") from e
        except ValueError as e:
            # 200 with a body that is not valid JSON.
            raise ReportGenerationError(f"failed to unmarshal response: {e}") from e
