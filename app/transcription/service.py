"""
Transcription service - Business logic for audio transcription.
Integrates with the Google Gemini generateContent API.
"""

import logging
import math
import re
from pathlib import Path
from typing import Any

from app.config import Settings, get_settings
from app.core.exceptions import (
    EmptyResultError,
    ProviderError,
    RateLimitedError,
    VoxScribeException,
)
from app.transcription.cleaner import clean_transcript, extract_transcript
from app.transcription.client import GeminiClient
from app.transcription.schemas import TranscriptionRequest, TranscriptionResult

logger = logging.getLogger(__name__)

RETRY_HINT = re.compile(r"Please retry in ([0-9]+(?:\.[0-9]+)?)s")
MAX_ERROR_MESSAGE_LENGTH = 200

PROMPT_TEMPLATE = """
Transcribe the following audio file.
Output the transcript in {language}.
Identify different speakers and label them as 'Speaker 1', 'Speaker 2', etc.
Format the transcript as a dialogue, with each speaker's turn on a new line starting with their label.

Example format:
Speaker 1: Hello, how are you?
Speaker 2: I'm doing well, thanks.

If there is only one speaker, just label as 'Speaker 1'.
Do not include timestamps. Output only the transcript text.
"""


def build_prompt(language: str) -> str:
    """Build the transcription instruction for the given output language."""
    return PROMPT_TEMPLATE.format(language=language)


def resolve_language(language: str | None, default: str = "English") -> str:
    """Trim the requested language, falling back to the default when blank."""
    if language and language.strip():
        return language.strip()
    return default


def parse_retry_after(message: str) -> int | None:
    """Extract the provider's retry hint, rounded up to whole seconds."""
    match = RETRY_HINT.search(message or "")
    if match is None:
        return None
    return math.ceil(float(match.group(1)))


def truncate_message(message: str, limit: int = MAX_ERROR_MESSAGE_LENGTH) -> str:
    if len(message) > limit:
        return message[:limit] + "..."
    return message


def classify_provider_error(status_code: int, error: Any) -> VoxScribeException:
    """
    Map a provider error to a domain exception.

    Args:
        status_code: HTTP status of the provider response
        error: The provider's error object (may be missing or malformed)

    Returns:
        RateLimitedError for throttling, ProviderError otherwise
    """
    error = error if isinstance(error, dict) else {}
    message = error.get("message") or ""
    if not isinstance(message, str):
        message = str(message)

    if status_code == 429 or error.get("code") == 429:
        retry_after = parse_retry_after(message)
        if retry_after is not None:
            user_message = f"Rate limit exceeded. Please wait {retry_after} seconds and try again."
        else:
            user_message = "Rate limit exceeded. Please wait a moment and try again."
        return RateLimitedError(user_message, retry_after=retry_after)

    return ProviderError(
        truncate_message(message or "Transcription API error"),
        upstream_status=status_code,
    )


class TranscriptionService:
    """Service for handling audio transcription via Gemini."""

    def __init__(
        self,
        settings: Settings | None = None,
        gemini_client: GeminiClient | None = None,
    ):
        self.settings = settings or get_settings()
        self._client = gemini_client

    @property
    def client(self) -> GeminiClient:
        """Lazy initialization of Gemini client."""
        if self._client is None:
            self._client = GeminiClient.from_settings(self.settings)
        return self._client

    async def transcribe(self, request: TranscriptionRequest) -> TranscriptionResult:
        """
        Transcribe an audio payload to a cleaned, speaker-labeled transcript.

        Args:
            request: Audio bytes, MIME type and target language

        Returns:
            TranscriptionResult with cleaned text

        Raises:
            RateLimitedError: If the provider throttled the request
            ProviderError: If the provider reported any other error
            EmptyResultError: If the provider returned no usable text
            ExternalAPIError: If the provider could not be reached
        """
        logger.info(
            f"[TranscriptionService] Starting transcription, "
            f"size: {len(request.audio_bytes)} bytes, language: {request.language}"
        )

        prompt = build_prompt(request.language)
        status_code, data = await self.client.generate_content(
            audio_bytes=request.audio_bytes,
            mime_type=request.mime_type,
            prompt=prompt,
        )

        if not 200 <= status_code < 300:
            logger.error(f"[TranscriptionService] Gemini API error, status: {status_code}")
            raise classify_provider_error(status_code, data.get("error"))

        # Gemini sometimes returns errors with a 200 status
        if data.get("error") is not None:
            logger.error("[TranscriptionService] Gemini API error in response body")
            raise classify_provider_error(500, data["error"])

        transcript = extract_transcript(data)
        if not transcript:
            logger.error(
                f"[TranscriptionService] Empty transcript from API, response keys: {list(data)}"
            )
            raise EmptyResultError(
                "Transcription returned empty result. Please check your audio file and try again."
            )

        cleaned = clean_transcript(transcript)
        logger.info(
            f"[TranscriptionService] Transcription successful, "
            f"length: {len(cleaned)} chars"
        )

        # TODO: derive the duration from the audio container instead of the placeholder
        return TranscriptionResult(
            text=cleaned,
            duration_seconds=self.settings.transcript_placeholder_duration,
        )


def guess_mime_type(filename: str | None, content_type: str | None) -> str:
    """Use the upload's content type, or map the file extension to a MIME type."""
    if content_type and content_type != "application/octet-stream":
        return content_type

    content_types = {
        ".m4a": "audio/m4a",
        ".mp3": "audio/mpeg",
        ".mp4": "audio/mp4",
        ".wav": "audio/wav",
        ".webm": "audio/webm",
        ".ogg": "audio/ogg",
        ".flac": "audio/flac",
    }
    extension = Path(filename or "").suffix.lower()
    return content_types.get(extension, content_type or "audio/mpeg")


# Singleton instance for dependency injection
_transcription_service: TranscriptionService | None = None


async def get_transcription_service() -> TranscriptionService:
    """Dependency provider for TranscriptionService."""
    global _transcription_service
    if _transcription_service is None:
        _transcription_service = TranscriptionService()
    return _transcription_service
