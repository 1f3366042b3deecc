"""Quart application exposing document question answering over HTTP."""
import logging
from typing import Any, List

from pydantic import BaseModel, Field, ValidationError
from quart import Quart, request, jsonify
import structlog

from docqa import config
from docqa.errors import DocQAError, InternalError, InvalidRequest
from docqa.pipeline import DocumentQAPipeline


def resolve_log_level(name: str) -> int:
    """Map a level name to its logging constant; unknown names give INFO."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else logging.INFO


# Configure structured logging
logging.basicConfig(level=resolve_log_level(config.LOG_LEVEL), format="%(message)s")

structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger()

app = Quart(__name__)


class RunRequest(BaseModel):
    """Body of a question answering request."""
    documents: str = Field(..., min_length=1, description="URL of the PDF document")
    questions: List[Any] = Field(..., min_length=1, description="Questions to answer")


class RunResponse(BaseModel):
    """Answers aligned with the request's questions."""
    answers: List[str]


def get_pipeline() -> DocumentQAPipeline:
    """Build the pipeline for one request."""
    return DocumentQAPipeline()


def error_response(error: DocQAError):
    return jsonify(error.to_dict()), error.status_code


@app.route("/api/v1/hackrx/run", methods=["POST"])
async def run_questions():
    """Answer questions about a PDF document.

    Expects JSON body:
    {
        "documents": "https://.../policy.pdf",
        "questions": ["question 1", "question 2"]  // bad entries fail individually
    }

    Returns JSON:
    {
        "answers": ["answer 1", "Error: ..."]  // one entry per question, same order
    }
    """
    try:
        data = await request.get_json(silent=True)

        try:
            body = RunRequest.model_validate(data if data is not None else {})
            DocumentQAPipeline.validate(body.documents, body.questions)
        except (ValidationError, InvalidRequest) as e:
            logger.warning(
                "invalid_request",
                error=str(e)[:300],
                error_type=type(e).__name__,
            )
            return error_response(InvalidRequest(
                "Invalid request. Please provide documents URL and questions array."
            ))

        logger.info(
            "run_request_received",
            url=body.documents,
            question_count=len(body.questions),
        )

        pipeline = get_pipeline()
        answers = await pipeline.answer_questions(body.documents, body.questions)

        return jsonify(RunResponse(answers=answers).model_dump())

    except DocQAError as e:
        logger.error(
            "run_request_failed",
            error=e.message,
            error_type=type(e).__name__,
            status_code=e.status_code,
        )
        return error_response(e)

    except Exception as e:
        logger.exception("run_request_internal_error", error=str(e))
        return error_response(InternalError("Internal server error"))


@app.route("/health/ready")
async def health_ready():
    """Readiness check - the external services are configured."""
    missing = []
    if not config.EMBEDDING_API_KEY:
        missing.append("EMBEDDING_API_KEY")
    if not config.ANSWER_API_KEY:
        missing.append("ANSWER_API_KEY")

    checks = {
        "status": "healthy" if not missing else "unhealthy",
        "embedding_model": config.EMBEDDING_MODEL,
        "answer_model": config.ANSWER_MODEL,
    }
    if missing:
        checks["error"] = f"Missing settings: {', '.join(missing)}"

    return jsonify(checks), 200 if not missing else 503


@app.route("/health/live")
async def health_live():
    """Liveness check - the app is running."""
    return jsonify({"status": "alive"}), 200


@app.errorhandler(404)
async def not_found(error):
    """Handle 404 errors."""
    return jsonify({"error": "Not found", "status": 404}), 404


@app.errorhandler(405)
async def method_not_allowed(error):
    """Handle 405 errors."""
    return jsonify({"error": "Method not allowed", "status": 405}), 405


@app.errorhandler(500)
async def internal_error(error):
    """Handle 500 errors."""
    logger.error("internal_server_error", error=str(error))
    return jsonify({"error": "Internal server error", "status": 500}), 500


if __name__ == "__main__":
    # For development - run under hypercorn in production
    app.run(host=config.HOST, port=config.PORT, debug=True)
