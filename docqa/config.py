"""Application configuration with sensible defaults."""
import os

# Embedding service (OpenAI-compatible)
EMBEDDING_BASE_URL = os.getenv("EMBEDDING_BASE_URL", "https://api.openai.com/v1")
EMBEDDING_API_KEY = os.getenv("EMBEDDING_API_KEY", os.getenv("OPENAI_API_KEY", ""))
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")

# Answer synthesis (OpenRouter chat completions)
ANSWER_BASE_URL = os.getenv("ANSWER_BASE_URL", "https://openrouter.ai/api/v1")
ANSWER_API_KEY = os.getenv("ANSWER_API_KEY", os.getenv("OPENROUTER_API_KEY", ""))
ANSWER_MODEL = os.getenv("ANSWER_MODEL", "openai/gpt-4o-mini")
ANSWER_TEMPERATURE = float(os.getenv("ANSWER_TEMPERATURE", "0.0"))

# RAG parameters (word-based chunks)
CHUNK_MAX_WORDS = int(os.getenv("CHUNK_MAX_WORDS", "500"))
RETRIEVAL_TOP_K = int(os.getenv("RETRIEVAL_TOP_K", "3"))

# Rate limiting towards the embedding service
EMBEDDING_BATCH_SIZE = int(os.getenv("EMBEDDING_BATCH_SIZE", "10"))
EMBEDDING_BATCH_DELAY = float(os.getenv("EMBEDDING_BATCH_DELAY", "0.2"))  # seconds

# HTTP timeouts (seconds)
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "60.0"))
DOCUMENT_FETCH_TIMEOUT = float(os.getenv("DOCUMENT_FETCH_TIMEOUT", "60.0"))

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "5000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
