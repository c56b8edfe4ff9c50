from abc import ABC, abstractmethod


class BaseSummarizer(ABC):
    """Contract for the summarization stage."""

    @abstractmethod
    def summarize(self, text: str) -> str:
        """Summarize a document's extracted text.

        Never fails on model problems: implementations fall back to an
        extractive summary.
        """
