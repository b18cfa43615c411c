"""
Files module - Per-user transcript records kept in Supabase.
"""

from app.files.router import router as files_router

__all__ = ["files_router"]
