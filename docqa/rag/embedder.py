"""Batched embedding generation with request pacing.

Wraps an embedding service client:
- Splits inputs into fixed-size batches, one service call per batch
- Pauses between consecutive batches to stay under rate limits
- Normalizes every service failure to EmbeddingServiceError
"""
from typing import List, Optional, Sequence
import asyncio
import structlog

from docqa import config
from docqa.errors import EmbeddingServiceError, InvalidInput
from docqa.llm_client import EmbeddingClient, embedding_client

logger = structlog.get_logger()


class BatchEmbedder:
    """Embeds texts through the embedding service in paced batches."""

    def __init__(
        self,
        client: Optional[EmbeddingClient] = None,
        batch_size: int = None,
        batch_delay: float = None,
    ):
        """Initialize the embedder.

        Args:
            client: Object with an async ``embed_batch(texts)`` method
                (default: global embedding client)
            batch_size: Texts per service call (default from config)
            batch_delay: Seconds to wait between batches (default from config)

        Raises:
            InvalidInput: If batch_size is not a positive integer
        """
        self.client = client or embedding_client
        self.batch_size = (
            config.EMBEDDING_BATCH_SIZE if batch_size is None else batch_size
        )
        self.batch_delay = (
            config.EMBEDDING_BATCH_DELAY if batch_delay is None else batch_delay
        )

        if (
            isinstance(self.batch_size, bool)
            or not isinstance(self.batch_size, int)
            or self.batch_size <= 0
        ):
            raise InvalidInput(
                f"Invalid input: batch_size must be a positive integer, got {self.batch_size!r}"
            )

    async def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed texts, returning one vector per text in input order.

        Args:
            texts: Texts to embed

        Returns:
            List of embedding vectors aligned with ``texts``

        Raises:
            InvalidInput: If texts is empty
            EmbeddingServiceError: If any service call fails
        """
        if not texts or isinstance(texts, str):
            raise InvalidInput("Invalid input: texts must be a non-empty list of strings")

        texts = list(texts)
        embeddings: List[List[float]] = []
        dimension = None

        try:
            for start in range(0, len(texts), self.batch_size):
                batch = texts[start : start + self.batch_size]
                batch_embeddings = await self.client.embed_batch(batch)

                if batch_embeddings is None or len(batch_embeddings) != len(batch):
                    raise ValueError(
                        f"Expected {len(batch)} embeddings, got "
                        f"{0 if batch_embeddings is None else len(batch_embeddings)}"
                    )

                for embedding in batch_embeddings:
                    if not embedding:
                        raise ValueError("Empty embedding returned")
                    if dimension is None:
                        dimension = len(embedding)
                    elif len(embedding) != dimension:
                        raise ValueError(
                            f"Inconsistent embedding dimension: {len(embedding)} != {dimension}"
                        )

                embeddings.extend(batch_embeddings)

                logger.debug(
                    "embeddings_batch_generated",
                    batch_size=len(batch),
                    total_so_far=len(embeddings),
                )

                if start + self.batch_size < len(texts) and self.batch_delay > 0:
                    await asyncio.sleep(self.batch_delay)

        except Exception as e:
            logger.error(
                "embedding_service_failed",
                error=str(e),
                error_type=type(e).__name__,
                completed=len(embeddings),
                total=len(texts),
            )
            raise EmbeddingServiceError("Failed to generate embeddings") from None

        logger.info("texts_embedded", count=len(embeddings), dimension=dimension)

        return embeddings
