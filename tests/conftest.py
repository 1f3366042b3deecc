"""Shared fixtures for the unit test suite.

Provides deterministic stand-ins for the external services so the pipeline
can run end to end without network access.
"""
from typing import List
from unittest.mock import AsyncMock

import pytest

from docqa.pipeline import DocumentQAPipeline
from docqa.rag.chunker import WordChunker
from docqa.rag.embedder import BatchEmbedder

VOCABULARY = ["grace", "premium", "waiting", "maternity", "cataract"]

POLICY_TEXT = (
    "a grace period of thirty days is allowed for premium payment "
    "the waiting period for cataract surgery is two years "
    "maternity expenses are covered after a waiting period of two years "
    "the policy may be renewed every year without medical tests"
)


def keyword_vector(text: str) -> List[float]:
    """Bag-of-keywords embedding with a small bias so no vector is zero."""
    words = text.lower().replace("?", " ").split()
    return [float(words.count(term)) for term in VOCABULARY] + [0.1]


class KeywordEmbeddingClient:
    """Embedding service double that records every batch it receives."""

    def __init__(self, fail_on: str = None):
        self.fail_on = fail_on
        self.batches: List[List[str]] = []

    async def embed_batch(self, texts: List[str]) -> List[List[float]]:
        self.batches.append(list(texts))
        if self.fail_on and any(self.fail_on in text for text in texts):
            raise RuntimeError("upstream 429: rate limited")
        return [keyword_vector(text) for text in texts]


@pytest.fixture
def embedding_client() -> KeywordEmbeddingClient:
    """Provide a keyword embedding client."""
    return KeywordEmbeddingClient()


@pytest.fixture
def extractor() -> AsyncMock:
    """Provide a text extractor returning the sample policy text."""
    mock = AsyncMock()
    mock.extract.return_value = POLICY_TEXT
    return mock


@pytest.fixture
def answerer() -> AsyncMock:
    """Provide an answer client echoing the question and passage count."""
    mock = AsyncMock()

    async def answer(question, passages):
        return f"answer to '{question}' from {len(passages)} passages"

    mock.answer.side_effect = answer
    return mock


@pytest.fixture
def make_pipeline(extractor, answerer, embedding_client):
    """Build a pipeline over the service doubles with small chunks and no pacing."""

    def _make(client=None, max_words: int = 10, top_k: int = 2) -> DocumentQAPipeline:
        return DocumentQAPipeline(
            extractor=extractor,
            embedder=BatchEmbedder(
                client=client or embedding_client, batch_size=2, batch_delay=0
            ),
            answerer=answerer,
            chunker=WordChunker(max_words=max_words),
            top_k=top_k,
        )

    return _make
