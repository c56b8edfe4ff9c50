from pathlib import Path

import httpx
import openai

from docworker.summarization.client_base import BaseSummarizationClient
from docworker.summarization.exceptions import SummarizationError, SummarizationNetworkError
from docworker.summarization.prompt_loader import load_prompt_template


class OpenAIClientAdapter(BaseSummarizationClient):
    """Summarization client built on an OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
        prompt_template_path: Path | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )
        self._model = model
        self._prompt_template = load_prompt_template(prompt_template_path)

    def summarize(self, text: str, *, min_length: int, max_length: int) -> str:
        prompt = self._prompt_template.format(
            text=text,
            min_length=min_length,
            max_length=max_length,
        )
        try:
            response = self._client.chat.completions.create(
                model=self._model,
                temperature=0.0,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise SummarizationNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise SummarizationNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise SummarizationError("AI returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise SummarizationError("AI returned empty response")
        return content.strip()
