"""
Export module - Transcript download as PDF with plain-text fallback.
"""

from app.export.router import router as export_router

__all__ = ["export_router"]
