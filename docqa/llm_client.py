"""HTTP clients for the embedding and answer-synthesis services."""
import httpx
from typing import List, Optional
import structlog

from docqa import config
from docqa.errors import AnswerSynthesisError

logger = structlog.get_logger()


class EmbeddingClient:
    """Async client for an OpenAI-compatible embeddings endpoint."""

    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        model: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the embedding client.

        Args:
            base_url: API base URL (defaults to config.EMBEDDING_BASE_URL)
            api_key: Bearer token (defaults to config.EMBEDDING_API_KEY)
            model: Embedding model (defaults to config.EMBEDDING_MODEL)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (base_url or config.EMBEDDING_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else config.EMBEDDING_API_KEY
        self.model = model or config.EMBEDDING_MODEL
        self.timeout = timeout or config.HTTP_TIMEOUT
        self.transport = transport

    async def embed_batch(self, texts: List[str]) -> List[List[float]]:
        """Embed a batch of texts in one request.

        Args:
            texts: Texts to embed

        Returns:
            One embedding per text, in input order

        Raises:
            httpx.HTTPError: On API errors
            ValueError: If the response payload is malformed
        """
        payload = {"model": self.model, "input": list(texts)}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                logger.debug(
                    "embedding_request",
                    model=self.model,
                    batch_size=len(texts),
                )

                response = await client.post(
                    f"{self.base_url}/embeddings",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()

                data = response.json()

        except httpx.HTTPError as e:
            logger.error(
                "embedding_http_error",
                error=str(e),
                status_code=getattr(getattr(e, "response", None), "status_code", None),
            )
            raise

        items = data.get("data")
        if not isinstance(items, list):
            raise ValueError("Embedding response has no 'data' list")

        # The API tags each item with the position of its input
        items = sorted(items, key=lambda item: item.get("index", 0))
        embeddings = [item.get("embedding") for item in items]

        logger.debug(
            "embedding_response",
            model=self.model,
            count=len(embeddings),
            dimension=len(embeddings[0]) if embeddings and embeddings[0] else 0,
        )

        return embeddings


ANSWER_SYSTEM_PROMPT = """You answer questions about a document using only the excerpts below.

DOCUMENT EXCERPTS:
{context}

INSTRUCTIONS:
- Answer in one to three concise sentences
- Quote exact figures, dates and conditions from the excerpts when they apply
- If the excerpts do not contain the answer, say that the document does not specify it
"""


def format_context(passages: List[str]) -> str:
    """Number the passages for the system prompt."""
    return "\n\n".join(
        f"[Excerpt {i}]\n{str(passage).strip()}" for i, passage in enumerate(passages, 1)
    )


class AnswerClient:
    """Async client for an OpenRouter-compatible chat completions endpoint."""

    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        model: str = None,
        temperature: Optional[float] = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or config.ANSWER_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else config.ANSWER_API_KEY
        self.model = model or config.ANSWER_MODEL
        self.temperature = (
            config.ANSWER_TEMPERATURE if temperature is None else temperature
        )
        self.timeout = timeout or config.HTTP_TIMEOUT
        self.transport = transport

    async def answer(self, question: str, passages: List[str]) -> str:
        """Synthesize an answer to a question from supporting passages.

        Args:
            question: The user's question
            passages: Supporting passages, most relevant first

        Returns:
            The answer text

        Raises:
            httpx.HTTPError: On API errors
            AnswerSynthesisError: If the model returns no content
        """
        messages = [
            {
                "role": "system",
                "content": ANSWER_SYSTEM_PROMPT.format(context=format_context(passages)),
            },
            {"role": "user", "content": question},
        ]
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                logger.info(
                    "answer_request",
                    model=self.model,
                    passage_count=len(passages),
                )

                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()

                data = response.json()

        except httpx.HTTPError as e:
            logger.error(
                "answer_http_error",
                error=str(e),
                status_code=getattr(getattr(e, "response", None), "status_code", None),
            )
            raise

        choices = data.get("choices") or [{}]
        content = (choices[0].get("message") or {}).get("content") or ""
        content = content.strip()

        if not content:
            logger.error("empty_answer_response", model=self.model)
            raise AnswerSynthesisError("Empty response from answer model")

        logger.info("answer_response", model=self.model, answer_length=len(content))

        return content


# Global client instances
embedding_client = EmbeddingClient()
answer_client = AnswerClient()
