"""Remote PDF download and text extraction."""
import asyncio
import io
from typing import Optional

import httpx
import structlog
from pypdf import PdfReader

from docqa import config
from docqa.errors import DocumentFetchError

logger = structlog.get_logger()

PDF_CONTENT_TYPE = "application/pdf"


def parse_pdf_text(pdf_bytes: bytes) -> str:
    """Extract the text of every page, joined with newlines."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    pages_text = []

    for page in reader.pages:
        text = page.extract_text() or ""
        pages_text.append(text)

    return "\n".join(pages_text)


class PDFTextExtractor:
    """Fetches a PDF over HTTP and returns its text."""

    def __init__(
        self,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout or config.DOCUMENT_FETCH_TIMEOUT
        self.transport = transport

    async def fetch(self, url: str) -> bytes:
        """Download the PDF bytes.

        Raises:
            DocumentFetchError: On network errors, non-success status,
                a non-PDF content type or an empty body
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(
                    url,
                    headers={
                        "Accept": PDF_CONTENT_TYPE,
                        "Cache-Control": "no-cache",
                    },
                )
        except httpx.HTTPError as e:
            raise DocumentFetchError(f"Failed to download document: {e}") from e

        if not response.is_success:
            details = response.text or "No error details available"
            raise DocumentFetchError(
                f"Failed to download document. Status: {response.status_code}, "
                f"Details: {details[:500]}"
            )

        content_type = response.headers.get("content-type")
        if not content_type or PDF_CONTENT_TYPE not in content_type:
            raise DocumentFetchError(
                f"Invalid content type: {content_type}. Expected PDF document."
            )

        pdf_bytes = response.content
        if not pdf_bytes:
            raise DocumentFetchError("Received empty PDF buffer")

        return pdf_bytes

    async def extract(self, url: str) -> str:
        """Download a PDF and return its full text.

        Args:
            url: Document URL

        Returns:
            Extracted text (never blank)

        Raises:
            DocumentFetchError: If downloading or parsing fails
        """
        logger.info("document_fetch_started", url=url)

        pdf_bytes = await self.fetch(url)

        try:
            # pypdf is CPU bound, keep it off the event loop
            text = await asyncio.to_thread(parse_pdf_text, pdf_bytes)
        except Exception as e:
            raise DocumentFetchError(f"Failed to parse PDF: {e}") from e

        if not text.strip():
            raise DocumentFetchError("PDF parsing succeeded but extracted text is empty")

        logger.info(
            "document_fetched",
            url=url,
            byte_count=len(pdf_bytes),
            char_count=len(text),
        )

        return text
