"""
Transcription router - API endpoints for audio transcription.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.core.exceptions import (
    EmptyResultError,
    ExternalAPIError,
    ProviderError,
    RateLimitedError,
)
from app.rate_limit import limiter
from app.transcription.schemas import (
    TranscriptionError as TranscriptionErrorSchema,
    TranscriptionRequest,
    TranscriptionResponse,
)
from app.transcription.service import (
    TranscriptionService,
    get_transcription_service,
    guess_mime_type,
    resolve_language,
)

logger = logging.getLogger(__name__)

settings = get_settings()

router = APIRouter(prefix="/transcribe", tags=["Transcription"])


@router.post(
    "",
    response_model=TranscriptionResponse,
    status_code=status.HTTP_200_OK,
    summary="Transcribe audio file",
    description="Upload an audio file and get a speaker-labeled transcript using Google Gemini.",
    responses={
        200: {"model": TranscriptionResponse, "description": "Successful transcription"},
        400: {"model": TranscriptionErrorSchema, "description": "No file uploaded"},
        429: {"model": TranscriptionErrorSchema, "description": "Rate limit exceeded"},
        500: {"model": TranscriptionErrorSchema, "description": "Transcription failed"},
    },
)
@limiter.limit(settings.transcribe_rate_limit)
async def transcribe_audio(
        request: Request,
        file: Annotated[UploadFile | None, File(description="Audio file to transcribe")] = None,
        language: Annotated[str | None, Form(description="Transcript language (default: English)")] = None,
        service: TranscriptionService = Depends(get_transcription_service),
) -> TranscriptionResponse:
    """
    Transcribe an uploaded audio file to a speaker-labeled dialogue.

    The transcript is labeled `Speaker 1:`, `Speaker 2:`, ... and cleaned of
    any timestamp markers the model emits.

    Args:
        file: Audio file to transcribe
        language: Language the transcript should be written in

    Returns:
        TranscriptionResponse with the cleaned transcript
    """
    if file is None:
        logger.warning("[TranscriptionRouter] Request without file")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "No file uploaded", "code": "MISSING_FILE"},
        )

    logger.info(f"[TranscriptionRouter] Received file: {file.filename}, size: {file.size}")

    try:
        audio_bytes = await file.read()

        result = await service.transcribe(
            TranscriptionRequest(
                audio_bytes=audio_bytes,
                mime_type=guess_mime_type(file.filename, file.content_type),
                language=resolve_language(language, service.settings.default_language),
            )
        )

        logger.info(f"[TranscriptionRouter] Transcription successful for: {file.filename}")
        return TranscriptionResponse(transcript=result.text, duration=result.duration_seconds)

    except RateLimitedError as e:
        logger.warning(f"[TranscriptionRouter] Rate limited: {e.message}")
        headers = {"Retry-After": str(e.retry_after)} if e.retry_after is not None else None
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message, "code": e.code},
            headers=headers,
        )

    except (ProviderError, EmptyResultError) as e:
        logger.error(f"[TranscriptionRouter] Transcription error: {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.message, "code": e.code},
        )

    except ExternalAPIError as e:
        logger.error(f"[TranscriptionRouter] External API error: {e.message}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Transcription failed", "code": e.code},
        )

    except Exception as e:
        logger.exception(f"[TranscriptionRouter] Unexpected error: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Transcription failed", "code": "INTERNAL_ERROR"},
        )

    finally:
        await file.close()
