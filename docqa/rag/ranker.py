"""Relevance ranking of document chunks against a query embedding."""
from typing import Any, List, Optional, Sequence
from dataclasses import dataclass
import structlog

from docqa import config
from docqa.errors import InvalidInput
from docqa.rag.vector_math import cosine_similarity

logger = structlog.get_logger()


@dataclass
class RankedChunk:
    """A chunk selected by the ranker, with its score."""

    chunk: Any
    index: int
    score: float


def rank_chunks(
    query: Sequence[float],
    doc_vectors: Sequence[Sequence[float]],
    doc_chunks: Sequence[Any],
    top_k: Optional[int] = None,
) -> List[RankedChunk]:
    """Score every chunk against the query and keep the best ``top_k``.

    Out-of-range ``top_k`` values (<= 0 or larger than the number of chunks)
    are reset to ``min(RETRIEVAL_TOP_K, len(doc_chunks))`` instead of failing.

    Args:
        query: Query embedding
        doc_vectors: One embedding per chunk, aligned with doc_chunks
        doc_chunks: Chunks to select from (returned as given)
        top_k: Number of chunks to keep (default from config)

    Returns:
        RankedChunk list sorted by descending score; ties keep document order

    Raises:
        InvalidInput: On empty inputs or misaligned vectors/chunks
    """
    if query is None or len(query) == 0:
        raise InvalidInput("Invalid query embedding")
    if doc_vectors is None or len(doc_vectors) == 0:
        raise InvalidInput("Invalid document embeddings")
    if doc_chunks is None or len(doc_chunks) == 0:
        raise InvalidInput("Invalid document chunks")
    if len(doc_vectors) != len(doc_chunks):
        raise InvalidInput("Number of embeddings must match number of chunks")

    if top_k is None:
        top_k = config.RETRIEVAL_TOP_K
    if top_k <= 0 or top_k > len(doc_chunks):
        # at least one passage, even if RETRIEVAL_TOP_K is misconfigured
        clamped = min(max(config.RETRIEVAL_TOP_K, 1), len(doc_chunks))
        logger.debug("top_k_clamped", requested=top_k, clamped=clamped)
        top_k = clamped

    scored = [
        RankedChunk(chunk=chunk, index=index, score=cosine_similarity(query, vector))
        for index, (vector, chunk) in enumerate(zip(doc_vectors, doc_chunks))
    ]

    # sorted() is stable, so equal scores stay in document order
    ranked = sorted(scored, key=lambda r: r.score, reverse=True)[:top_k]

    logger.debug(
        "chunks_ranked",
        candidates=len(scored),
        selected=[r.index for r in ranked],
        top_score=ranked[0].score if ranked else None,
    )

    return ranked


def find_relevant_chunks(
    query: Sequence[float],
    doc_vectors: Sequence[Sequence[float]],
    doc_chunks: Sequence[Any],
    top_k: Optional[int] = None,
) -> List[Any]:
    """Return the ``top_k`` chunks most similar to the query, best first."""
    return [r.chunk for r in rank_chunks(query, doc_vectors, doc_chunks, top_k=top_k)]
