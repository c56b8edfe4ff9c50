from abc import ABC, abstractmethod


class BaseSummarizationClient(ABC):
    """Contract for model clients that summarize a single chunk of text."""

    @abstractmethod
    def summarize(self, text: str, *, min_length: int, max_length: int) -> str:
        """Return an abstractive summary of ``text``.

        Decoding must be deterministic (no sampling).

        Raises:
            SummarizationError: on any failure, including model load errors.
        """
