"""Question answering pipeline over a single remote PDF.

Orchestrates, once per request:
- Document download and text extraction
- Word-count chunking
- Corpus embedding
- Per-question retrieval and answer synthesis
"""
from typing import List, Optional, Sequence
from dataclasses import dataclass
import structlog

from docqa import config
from docqa.document.extractor import PDFTextExtractor
from docqa.errors import (
    DocumentFetchError,
    DocumentProcessingError,
    EmbeddingServiceError,
    InvalidInput,
    InvalidRequest,
)
from docqa.llm_client import AnswerClient, answer_client
from docqa.rag.chunker import TextChunk, WordChunker
from docqa.rag.embedder import BatchEmbedder
from docqa.rag.ranker import rank_chunks

logger = structlog.get_logger()

EMPTY_QUESTION_ERROR = "Error: Empty question provided"
QUESTION_FAILED_ERROR = "Error: Failed to process the question: {question}"


@dataclass
class QuestionResult:
    """Outcome for one question: an answer or an error placeholder."""

    question: str
    answer: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        """String placed in the response list for this question."""
        return self.answer if self.success else self.error


@dataclass
class DocumentIndex:
    """Chunks of one document and their embeddings, aligned by position."""

    chunks: List[TextChunk]
    vectors: List[List[float]]


class DocumentQAPipeline:
    """Answers a list of questions about one PDF document."""

    def __init__(
        self,
        extractor: Optional[PDFTextExtractor] = None,
        embedder: Optional[BatchEmbedder] = None,
        answerer: Optional[AnswerClient] = None,
        chunker: Optional[WordChunker] = None,
        top_k: int = None,
    ):
        """Initialize the pipeline.

        Args:
            extractor: Object with async ``extract(url) -> str``
            embedder: Object with async ``embed(texts) -> vectors``
            answerer: Object with async ``answer(question, passages) -> str``
            chunker: Word chunker (default from config)
            top_k: Chunks passed to the answer model per question (default from config)
        """
        self.extractor = extractor or PDFTextExtractor()
        self.embedder = embedder or BatchEmbedder()
        self.answerer = answerer or answer_client
        self.chunker = chunker or WordChunker()
        self.top_k = config.RETRIEVAL_TOP_K if top_k is None else top_k

    @staticmethod
    def validate(documents, questions) -> None:
        """Check the top-level request shape.

        Raises:
            InvalidRequest: If documents is not a non-empty string or
                questions is not a non-empty list
        """
        if (
            not isinstance(documents, str)
            or not documents.strip()
            or not isinstance(questions, (list, tuple))
            or len(questions) == 0
        ):
            raise InvalidRequest(
                "Invalid request. Please provide documents URL and questions array."
            )

    async def build_index(self, documents: str) -> DocumentIndex:
        """Extract, chunk and embed the document.

        Raises:
            DocumentFetchError: If the document cannot be fetched or parsed
            DocumentProcessingError: If the text cannot be chunked
            EmbeddingServiceError: If the chunks cannot be embedded
        """
        try:
            full_text = await self.extractor.extract(documents)
        except Exception as e:
            logger.error(
                "document_fetch_failed",
                url=documents,
                error=str(e),
                error_type=type(e).__name__,
            )
            detail = e.message if isinstance(e, DocumentFetchError) else str(e)
            raise DocumentFetchError(
                f"Failed to fetch or parse the PDF document: {detail}"
            ) from e

        try:
            chunks = self.chunker.chunk_text(full_text)
        except InvalidInput as e:
            logger.error("document_chunking_failed", error=str(e))
            raise DocumentProcessingError(
                "Failed to process the document content."
            ) from e

        logger.info("document_chunked", **self.chunker.get_chunk_stats(chunks))

        try:
            vectors = await self.embedder.embed([chunk.content for chunk in chunks])
        except Exception as e:
            logger.error(
                "corpus_embedding_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise EmbeddingServiceError(
                "Failed to generate document embeddings."
            ) from e

        logger.info("corpus_embedded", chunk_count=len(chunks))

        return DocumentIndex(chunks=chunks, vectors=vectors)

    async def answer_question(self, index: DocumentIndex, question) -> QuestionResult:
        """Answer one question; failures become an error placeholder."""
        if not isinstance(question, str) or not question.strip():
            logger.warning("empty_question_skipped")
            return QuestionResult(question=question, error=EMPTY_QUESTION_ERROR)

        logger.info("question_processing", question_preview=question[:100])

        try:
            [question_vector] = await self.embedder.embed([question])

            ranked = rank_chunks(
                question_vector, index.vectors, index.chunks, top_k=self.top_k
            )
            logger.debug(
                "relevant_chunks_found",
                chunk_indexes=[r.index for r in ranked],
                scores=[round(r.score, 4) for r in ranked],
            )

            passages = [r.chunk.content for r in ranked]
            answer = await self.answerer.answer(question, passages)

        except Exception as e:
            logger.error(
                "question_failed",
                question_preview=question[:100],
                error=str(e),
                error_type=type(e).__name__,
            )
            return QuestionResult(
                question=question,
                error=QUESTION_FAILED_ERROR.format(question=question),
            )

        return QuestionResult(question=question, answer=answer)

    async def run(self, documents: str, questions: Sequence[str]) -> List[QuestionResult]:
        """Answer every question about the document, in input order.

        Args:
            documents: URL of the PDF document
            questions: Questions to answer

        Returns:
            One QuestionResult per question, positionally aligned

        Raises:
            InvalidRequest: On a malformed request
            DocumentFetchError: If the document cannot be fetched or parsed
            DocumentProcessingError: If the text cannot be chunked
            EmbeddingServiceError: If the document cannot be embedded
        """
        self.validate(documents, questions)

        logger.info("qa_request_started", url=documents, question_count=len(questions))

        index = await self.build_index(documents)

        results = []
        for question in questions:
            results.append(await self.answer_question(index, question))

        logger.info(
            "qa_request_completed",
            question_count=len(results),
            failed=sum(1 for r in results if not r.success),
        )

        return results

    async def answer_questions(self, documents: str, questions: Sequence[str]) -> List[str]:
        """Answer questions and return the response strings (convenience method)."""
        results = await self.run(documents, questions)
        return [result.text for result in results]
