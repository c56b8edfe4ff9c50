from typing import ClassVar

from docworker.config.settings import Settings
from docworker.summarization.base import BaseSummarizer
from docworker.summarization.client_base import BaseSummarizationClient
from docworker.summarization.example_client_adapter import ExampleClientAdapter
from docworker.summarization.openai_client_adapter import OpenAIClientAdapter
from docworker.summarization.summarizer import Summarizer
from docworker.summarization.transformers_client_adapter import TransformersClientAdapter


class SummarizerFactory:
    """Creates the configured summarizer and its model client."""

    PROVIDERS: ClassVar[tuple[str, ...]] = (
        "transformers",
        "openai",
        "openai_compatible",
        "example",
        "none",
    )

    @classmethod
    def create(cls, settings: Settings) -> BaseSummarizer:
        """Create a summarizer from application settings."""
        return Summarizer(
            client=cls.create_client(settings),
            min_length=settings.summarization_min_length,
            max_length=settings.summarization_max_length,
            max_chunk_length=settings.summarization_max_chunk_length,
            max_workers=settings.summarization_max_workers,
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseSummarizationClient | None:
        provider = settings.summarization_provider.lower()
        if provider == "none":
            return None
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "transformers":
            return TransformersClientAdapter(model_name=settings.summarization_model_name)
        if provider in ("openai", "openai_compatible"):
            return OpenAIClientAdapter(
                api_key=settings.summarization_openai_api_key,
                model=settings.summarization_openai_model_name,
                timeout_seconds=settings.summarization_openai_timeout_seconds,
                base_url=cls._resolve_base_url(provider, settings),
            )
        raise ValueError(
            f"Unknown summarization provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        url = settings.summarization_openai_compatible_base_url.strip()
        if not url:
            raise ValueError(
                "summarization_openai_compatible_base_url is required for "
                "summarization_provider=openai_compatible"
            )
        return url
