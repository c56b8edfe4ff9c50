"""Chunked model summarization with an extractive fallback."""

from concurrent.futures import ThreadPoolExecutor

from docworker.logging.logger import Log
from docworker.summarization.base import BaseSummarizer
from docworker.summarization.chunker import MAX_CHUNK_LENGTH, Chunk, chunk_text
from docworker.summarization.client_base import BaseSummarizationClient
from docworker.summarization.exceptions import SummarizationError
from docworker.summarization.fallback import extractive_summary


class Summarizer(BaseSummarizer):
    """Summarizes each chunk with the model client and joins the results in order.

    Any chunk failure abandons the model path for the whole document and the
    extractive summary is returned instead. Without a client the extractive
    summary is always used.
    """

    def __init__(
        self,
        *,
        client: BaseSummarizationClient | None,
        min_length: int = 40,
        max_length: int = 150,
        max_chunk_length: int = MAX_CHUNK_LENGTH,
        max_workers: int = 4,
    ) -> None:
        self._client = client
        self._min_length = min_length
        self._max_length = max_length
        self._max_chunk_length = max_chunk_length
        self._max_workers = max(1, max_workers)

    def summarize(self, text: str) -> str:
        if self._client is None:
            return self._fallback(text, "no summarization model configured")
        try:
            return self._summarize_with_model(self._client, text)
        except SummarizationError as exc:
            return self._fallback(text, str(exc))

    def _summarize_with_model(self, client: BaseSummarizationClient, text: str) -> str:
        chunks = chunk_text(text, self._max_chunk_length)
        if not chunks:
            return ""
        Log.info(f"Split text into {len(chunks)} chunks for summarization")

        def summarize_chunk(chunk: Chunk) -> str:
            return client.summarize(
                chunk.text,
                min_length=self._min_length,
                max_length=self._max_length,
            )

        workers = min(self._max_workers, len(chunks))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            summaries = list(pool.map(summarize_chunk, chunks))

        summary = " ".join(summaries)
        Log.info(f"Model summary length: {len(summary)} characters")
        return summary

    @staticmethod
    def _fallback(text: str, reason: str) -> str:
        Log.warning(f"Using extractive summary: {reason}")
        return extractive_summary(text)
