import os
from pathlib import Path

os.environ.setdefault("GOOGLE_API_KEY", "test-google-key")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from app.auth.schemas import AuthenticatedUser
from app.config import DEFAULT_PDF_FONT, Settings
from app.main import app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_api_key="test-google-key",
        gemini_base_url="https://generativelanguage.googleapis.com/v1",
        gemini_model="gemini-2.5-flash",
        supabase_url="https://test.supabase.co",
        supabase_anon_key="test-anon-key",
    )


@pytest.fixture
def font_path() -> Path:
    return DEFAULT_PDF_FONT


@pytest.fixture
def user() -> AuthenticatedUser:
    return AuthenticatedUser(
        id="user-1",
        email="asha@example.com",
        username="asha",
        access_token="user-token",
    )


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
