"""Word-count chunking for the retrieval pipeline.

Chunks are consecutive, non-overlapping windows over the whitespace-split
word sequence of the document.
"""
from typing import List
from dataclasses import dataclass
import structlog

from docqa import config
from docqa.errors import InvalidInput

logger = structlog.get_logger()


@dataclass(frozen=True)
class TextChunk:
    """A window of words with its position in the document word sequence."""

    content: str
    chunk_index: int
    word_start: int
    word_end: int

    @property
    def word_count(self) -> int:
        return self.word_end - self.word_start

    def __str__(self) -> str:
        return self.content


class WordChunker:
    """Splits text into chunks of at most ``max_words`` words."""

    def __init__(self, max_words: int = None):
        """Initialize the chunker.

        Args:
            max_words: Maximum words per chunk (default from config)

        Raises:
            InvalidInput: If max_words is not a positive integer
        """
        self.max_words = config.CHUNK_MAX_WORDS if max_words is None else max_words
        _validate_max_words(self.max_words)

    def chunk_text(self, text: str) -> List[TextChunk]:
        """Split text into word-count-bounded chunks in document order.

        Args:
            text: Text to chunk

        Returns:
            List of TextChunk objects; every chunk but the last has exactly
            ``max_words`` words

        Raises:
            InvalidInput: If text is not a non-empty string with at least one word
        """
        if not isinstance(text, str) or not text:
            raise InvalidInput("Invalid input: text must be a non-empty string")

        words = text.split()
        if not words:
            raise InvalidInput("Invalid input: text contains no words")

        chunks = []
        for chunk_index, start in enumerate(range(0, len(words), self.max_words)):
            window = words[start : start + self.max_words]
            chunks.append(
                TextChunk(
                    content=" ".join(window),
                    chunk_index=chunk_index,
                    word_start=start,
                    word_end=start + len(window),
                )
            )

        logger.info(
            "text_chunked",
            word_count=len(words),
            chunk_count=len(chunks),
            max_words=self.max_words,
        )

        return chunks

    def get_chunk_stats(self, chunks: List[TextChunk]) -> dict:
        """Get statistics about a set of chunks."""
        if not chunks:
            return {
                "chunk_count": 0,
                "total_words": 0,
                "avg_chunk_words": 0,
                "min_chunk_words": 0,
                "max_chunk_words": 0,
            }

        sizes = [c.word_count for c in chunks]

        return {
            "chunk_count": len(chunks),
            "total_words": sum(sizes),
            "avg_chunk_words": sum(sizes) // len(chunks),
            "min_chunk_words": min(sizes),
            "max_chunk_words": max(sizes),
        }


def _validate_max_words(max_words) -> None:
    if isinstance(max_words, bool) or not isinstance(max_words, int) or max_words <= 0:
        raise InvalidInput("Invalid input: max_words must be a positive integer")


def chunk_text(text: str, max_words: int = None) -> List[TextChunk]:
    """Chunk text with a one-off chunker (convenience function).

    Args:
        text: Text to chunk
        max_words: Maximum words per chunk (default from config)

    Returns:
        List of TextChunk objects
    """
    return WordChunker(max_words=max_words).chunk_text(text)
