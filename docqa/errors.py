"""Error taxonomy for the document Q&A service.

Every error carries the HTTP status the API layer answers with, so request
handlers can turn any ``DocQAError`` into a JSON error object directly.
"""


class DocQAError(Exception):
    """Base class for all service errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "status": self.status_code}


class InvalidInput(DocQAError, ValueError):
    """Bad arguments passed to a core function (chunker, vector math, ranker)."""


class DegenerateVector(DocQAError, ValueError):
    """A vector with zero magnitude has no direction to compare."""


class InvalidRequest(DocQAError):
    """Malformed top-level request."""

    status_code = 400


class DocumentFetchError(DocQAError):
    """The PDF could not be downloaded or parsed."""


class DocumentProcessingError(DocQAError):
    """The extracted text could not be turned into chunks."""


class EmbeddingServiceError(DocQAError):
    """The embedding service failed; the underlying detail is only logged."""


class AnswerSynthesisError(DocQAError):
    """The answer-synthesis service returned no usable answer."""


class InternalError(DocQAError):
    """Catch-all for unexpected failures."""
