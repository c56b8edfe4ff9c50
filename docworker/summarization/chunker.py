"""Sentence splitting and greedy sentence packing for model-sized chunks."""

import re
from dataclasses import dataclass

MAX_CHUNK_LENGTH = 512

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


def split_sentences(text: str) -> list[str]:
    """Split on runs of terminal punctuation; fragments are stripped, empty ones dropped."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


@dataclass(frozen=True)
class Chunk:
    """Consecutive sentences rendered as ``"First. Second."``."""

    sentences: tuple[str, ...]

    @property
    def text(self) -> str:
        return render(self.sentences)

    def __len__(self) -> int:
        return len(self.text)


def render(sentences: tuple[str, ...] | list[str]) -> str:
    return " ".join(f"{sentence}." for sentence in sentences)


def chunk_sentences(
    sentences: list[str],
    max_length: int = MAX_CHUNK_LENGTH,
) -> list[Chunk]:
    """Greedily pack sentences, in order, into chunks of at most ``max_length`` chars.

    A sentence that cannot fit even alone is broken into word-bounded pieces.
    """
    if max_length < 2:
        raise ValueError("max_length must be at least 2")

    chunks: list[Chunk] = []
    current: list[str] = []
    size = 0
    for sentence in sentences:
        for piece in _fit(sentence, max_length):
            piece_size = len(piece) + 1
            added = piece_size if not current else piece_size + 1
            if current and size + added > max_length:
                chunks.append(Chunk(tuple(current)))
                current, size = [], 0
                added = piece_size
            current.append(piece)
            size += added
    if current:
        chunks.append(Chunk(tuple(current)))
    return chunks


def chunk_text(text: str, max_length: int = MAX_CHUNK_LENGTH) -> list[Chunk]:
    return chunk_sentences(split_sentences(text), max_length)


def _fit(sentence: str, max_length: int) -> list[str]:
    # Each piece is rendered with a trailing period.
    limit = max_length - 1
    if len(sentence) <= limit:
        return [sentence]

    pieces: list[str] = []
    current = ""
    for word in sentence.split():
        while len(word) > limit:
            if current:
                pieces.append(current)
                current = ""
            pieces.append(word[:limit])
            word = word[limit:]
        if not word:
            continue
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= limit:
            current = candidate
        else:
            pieces.append(current)
            current = word
    if current:
        pieces.append(current)
    return pieces
