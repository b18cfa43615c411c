"""
Transcription module - Audio to speaker-labeled text using Google Gemini.
"""

from app.transcription.router import router as transcription_router

__all__ = ["transcription_router"]
