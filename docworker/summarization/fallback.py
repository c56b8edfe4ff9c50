"""Extractive summary used when no model summary is available.

Sentences are scored by position, length and indicator words; the best ones
are kept in document order. Pure and deterministic.
"""

import math

from docworker.summarization.chunker import split_sentences

MIN_SUMMARY_SENTENCES = 5
SUMMARY_RATIO_PERCENT = 30

INDICATOR_WORDS = (
    "important",
    "significant",
    "therefore",
    "conclusion",
    "summary",
    "result",
    "key",
    "main",
)

_POSITION_BONUS = 0.3
_LENGTH_BONUS = 0.3
_INDICATOR_BONUS = 0.1


def score_sentence(sentence: str, index: int, total: int) -> float:
    score = 0.0
    # First or last 20% of the document.
    if index * 5 < total or index * 5 > total * 4:
        score += _POSITION_BONUS

    word_count = len(sentence.split())
    if 5 < word_count < 25:
        score += _LENGTH_BONUS

    lowered = sentence.lower()
    score += _INDICATOR_BONUS * sum(1 for word in INDICATOR_WORDS if word in lowered)
    return score


def summary_size(total: int) -> int:
    """max(5, ceil(30% of the sentence count))."""
    return max(MIN_SUMMARY_SENTENCES, math.ceil(total * SUMMARY_RATIO_PERCENT / 100))


def select_sentences(sentences: list[str]) -> list[str]:
    """Return the top-scoring sentences in their original order."""
    total = len(sentences)
    ranked = sorted(
        range(total),
        key=lambda i: (-score_sentence(sentences[i], i, total), i),
    )
    keep = sorted(ranked[: summary_size(total)])
    return [sentences[i] for i in keep]


def extractive_summary(text: str) -> str:
    sentences = split_sentences(text)
    if len(sentences) <= MIN_SUMMARY_SENTENCES:
        return text
    return ". ".join(select_sentences(sentences)) + "."
