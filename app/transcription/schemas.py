"""
Pydantic schemas for transcription module.
DTOs for API input/output validation.
"""

from pydantic import BaseModel, Field


class TranscriptionRequest(BaseModel):
    """Internal DTO describing one uploaded audio file."""

    audio_bytes: bytes = Field(..., description="Raw audio payload", repr=False)
    mime_type: str = Field(..., description="MIME type of the audio payload")
    language: str = Field("English", description="Language the transcript is written in")


class TranscriptionResult(BaseModel):
    """Cleaned transcript returned by the transcription service."""

    text: str = Field(..., description="Speaker-labeled transcript")
    duration_seconds: float = Field(..., description="Audio duration in seconds")


class TranscriptionResponse(BaseModel):
    """Response DTO for transcription endpoint."""

    transcript: str = Field(..., description="Speaker-labeled transcript")
    duration: float = Field(..., description="Audio duration in seconds")

    model_config = {
        "json_schema_extra": {
            "example": {
                "transcript": "Speaker 1: Hello, how are you? Speaker 2: I'm doing well, thanks.",
                "duration": 120,
            }
        }
    }


class TranscriptionError(BaseModel):
    """Error response for transcription failures."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Rate limit exceeded. Please wait 13 seconds and try again.",
                "code": "RATE_LIMITED",
            }
        }
    }
