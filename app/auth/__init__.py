"""
Auth module - Supabase access token verification.
"""
