"""
Pydantic schemas for files module.
DTOs for API input/output validation.
"""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field, computed_field


class FileStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"


def format_duration(seconds: float) -> str:
    """Format seconds as 'Xm Ys', or 'Ys' under a minute."""
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}m {secs}s" if minutes > 0 else f"{secs}s"


class FileCreate(BaseModel):
    """DTO for saving a transcript."""

    name: str = Field(..., min_length=1, max_length=255, description="Original audio file name")
    size: int = Field(0, ge=0, description="Audio size in bytes")
    duration: float = Field(0, ge=0, description="Audio duration in seconds")
    language: str = Field("English", description="Transcript language")
    transcript: str = Field("", description="Speaker-labeled transcript")
    status: FileStatus = Field(FileStatus.COMPLETED, description="Processing status")

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "interview.mp3",
                "size": 1048576,
                "duration": 120,
                "language": "Hindi",
                "transcript": "Speaker 1: नमस्ते Speaker 2: नमस्ते",
                "status": "completed",
            }
        }
    }


class FileRead(BaseModel):
    """DTO for reading a transcript record."""

    id: str = Field(..., description="File ID")
    name: str = Field(..., description="Original audio file name")
    size: int = Field(0, description="Audio size in bytes")
    duration: float = Field(0, description="Audio duration in seconds")
    language: str | None = Field(None, description="Transcript language")
    transcript: str | None = Field(None, description="Speaker-labeled transcript")
    status: FileStatus = Field(FileStatus.COMPLETED, description="Processing status")
    created_at: datetime = Field(..., description="Creation timestamp")

    @computed_field
    @property
    def duration_display(self) -> str:
        return format_duration(self.duration or 0)


class FileList(BaseModel):
    """DTO for listing transcript records."""

    files: List[FileRead] = Field(..., description="Records, newest first")
    total: int = Field(..., description="Number of records")


class FilesDeleted(BaseModel):
    """DTO for bulk deletion result."""

    deleted: int = Field(..., description="Number of records deleted")


class FileError(BaseModel):
    """Error response for file operations."""

    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code")
