from docworker.summarization.base import BaseSummarizer
from docworker.summarization.factory import SummarizerFactory
from docworker.summarization.summarizer import Summarizer

__all__ = ["BaseSummarizer", "Summarizer", "SummarizerFactory"]
