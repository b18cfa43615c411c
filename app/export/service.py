"""
Export service - Builds downloadable transcript documents.
PDF first, plain text when the PDF cannot be built.
"""

import logging
import re
from datetime import datetime
from urllib.parse import quote

from app.config import Settings, get_settings
from app.core.exceptions import BadRequestError
from app.export.pdf import build_pdf, build_plain_text
from app.export.schemas import ExportedDocument, ExportRequest

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "transcript"
INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')

PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


def sanitize_filename(filename: str | None) -> str:
    """Strip characters that are invalid in file names, defaulting when nothing is left."""
    cleaned = INVALID_FILENAME_CHARS.sub("", filename or DEFAULT_FILENAME).strip()
    return cleaned or DEFAULT_FILENAME


def content_disposition(document: ExportedDocument) -> str:
    """Attachment header with a percent-encoded file name."""
    encoded = quote(document.filename, safe="-_.!~*'()")
    return f'attachment; filename="{encoded}.{document.extension}"'


class ExportService:
    """Service for exporting transcripts as PDF or plain text."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def export(self, request: ExportRequest, generated_at: datetime | None = None) -> ExportedDocument:
        """
        Export a transcript.

        Any failure while building the PDF falls back to a plain-text document
        built from the same title and the raw transcript.

        Args:
            request: Transcript text and desired file name
            generated_at: Timestamp printed on the document (defaults to now)

        Returns:
            ExportedDocument, PDF or plain text

        Raises:
            BadRequestError: If the transcript is empty
        """
        if not request.text or not request.text.strip():
            raise BadRequestError("Empty transcript")

        title = request.filename if request.filename is not None else DEFAULT_FILENAME
        filename = sanitize_filename(request.filename)
        generated_at = generated_at or datetime.now()

        logger.info(f"[ExportService] Exporting '{filename}', length: {len(request.text)} chars")

        try:
            content = build_pdf(
                title,
                request.text,
                generated_at,
                self.settings.pdf_font_path,
                text_shaping=self.settings.pdf_text_shaping,
            )
            return ExportedDocument(
                content=content,
                filename=filename,
                media_type=PDF_MEDIA_TYPE,
                extension="pdf",
            )
        except Exception as e:
            logger.exception(f"[ExportService] PDF export failed, falling back to text: {e}")

        return ExportedDocument(
            content=build_plain_text(title, request.text, generated_at),
            filename=filename,
            media_type=TEXT_MEDIA_TYPE,
            extension="txt",
        )


def get_export_service() -> ExportService:
    """Dependency provider for ExportService."""
    return ExportService()
