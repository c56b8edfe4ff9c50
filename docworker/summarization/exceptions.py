class SummarizationError(Exception):
    """Raised when the summarization model cannot produce a summary."""


class SummarizationNetworkError(SummarizationError):
    """Raised when the model provider call fails due to network/infrastructure issues."""
