"""Example summarization client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseSummarizationClient and register the provider in SummarizerFactory.
"""

from docworker.summarization.client_base import BaseSummarizationClient


class ExampleClientAdapter(BaseSummarizationClient):
    """Offline adapter that keeps the leading words of each chunk.

    No network calls and no model download. Useful for local development and tests.
    """

    def summarize(self, text: str, *, min_length: int, max_length: int) -> str:
        _ = min_length
        words = text.split()
        kept: list[str] = []
        size = 0
        for word in words:
            extra = len(word) + (1 if kept else 0)
            if size + extra > max_length:
                break
            kept.append(word)
            size += extra
        return " ".join(kept)
