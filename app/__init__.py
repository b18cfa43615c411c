"""
VoxScribe Backend Application.

A FastAPI backend for the VoxScribe transcription application.
Provides speaker-labeled audio transcription using Google Gemini and
transcript export as PDF.
"""

__version__ = "0.1.0"
