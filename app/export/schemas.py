"""
Pydantic schemas for export module.
DTOs for API input/output validation.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field


class ExportRequest(BaseModel):
    """Request DTO for transcript export."""

    text: str | None = Field(None, description="Transcript text to export")
    filename: str | None = Field("transcript", description="Download name, without extension")

    model_config = {
        "json_schema_extra": {
            "example": {
                "text": "Speaker 1: नमस्ते, आप कैसे हैं? Speaker 2: मैं ठीक हूँ।",
                "filename": "interview",
            }
        }
    }


class ExportError(BaseModel):
    """Error response for export failures."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Empty transcript",
                "code": "BAD_REQUEST",
            }
        }
    }


@dataclass(frozen=True)
class ExportedDocument:
    """A downloadable document: PDF or the plain-text fallback."""

    content: bytes
    filename: str
    media_type: str
    extension: str

    @property
    def download_name(self) -> str:
        return f"{self.filename}.{self.extension}"
