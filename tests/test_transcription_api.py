from app.core.exceptions import (
    EmptyResultError,
    ExternalAPIError,
    ProviderError,
    RateLimitedError,
)
from app.main import app
from app.transcription.schemas import TranscriptionResult
from app.transcription.service import get_transcription_service


class FakeTranscriptionService:
    def __init__(self, settings, result=None, error=None):
        self.settings = settings
        self.result = result
        self.error = error
        self.requests = []

    async def transcribe(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


def _install(service) -> None:
    app.dependency_overrides[get_transcription_service] = lambda: service


def _upload(client, data=None):
    return client.post(
        "/api/transcribe",
        files={"file": ("interview.mp3", b"ID3-audio-bytes", "audio/mpeg")},
        data=data or {},
    )


def test_transcribe_returns_transcript_and_duration(client, settings) -> None:
    service = FakeTranscriptionService(
        settings,
        result=TranscriptionResult(text="Speaker 1: Hello. Speaker 2: Hi.", duration_seconds=120),
    )
    _install(service)

    response = _upload(client, data={"language": "  Hindi "})

    assert response.status_code == 200
    assert response.json() == {"transcript": "Speaker 1: Hello. Speaker 2: Hi.", "duration": 120}
    request = service.requests[0]
    assert request.audio_bytes == b"ID3-audio-bytes"
    assert request.mime_type == "audio/mpeg"
    assert request.language == "Hindi"


def test_transcribe_defaults_language(client, settings) -> None:
    service = FakeTranscriptionService(settings, result=TranscriptionResult(text="Speaker 1: Hi.", duration_seconds=120))
    _install(service)

    assert _upload(client, data={"language": "   "}).status_code == 200
    assert _upload(client).status_code == 200

    assert [r.language for r in service.requests] == ["English", "English"]


def test_transcribe_without_file_is_rejected(client, settings) -> None:
    service = FakeTranscriptionService(settings)
    _install(service)

    response = client.post("/api/transcribe", data={"language": "English"})

    assert response.status_code == 400
    assert response.json()["error"] == "No file uploaded"
    assert service.requests == []


def test_transcribe_rate_limited(client, settings) -> None:
    error = RateLimitedError("Rate limit exceeded. Please wait 13 seconds and try again.", retry_after=13)
    _install(FakeTranscriptionService(settings, error=error))

    response = _upload(client)

    assert response.status_code == 429
    assert "wait 13 seconds" in response.json()["error"]
    assert response.json()["code"] == "RATE_LIMITED"
    assert response.headers["retry-after"] == "13"


def test_transcribe_rate_limited_without_hint(client, settings) -> None:
    error = RateLimitedError("Rate limit exceeded. Please wait a moment and try again.")
    _install(FakeTranscriptionService(settings, error=error))

    response = _upload(client)

    assert response.status_code == 429
    assert "retry-after" not in response.headers


def test_transcribe_provider_error(client, settings) -> None:
    _install(FakeTranscriptionService(settings, error=ProviderError("Unsupported audio", upstream_status=400)))

    response = _upload(client)

    assert response.status_code == 500
    assert response.json() == {"error": "Unsupported audio", "code": "PROVIDER_ERROR"}


def test_transcribe_empty_result(client, settings) -> None:
    error = EmptyResultError("Transcription returned empty result. Please check your audio file and try again.")
    _install(FakeTranscriptionService(settings, error=error))

    response = _upload(client)

    assert response.status_code == 500
    assert response.json()["code"] == "EMPTY_RESULT"


def test_transcribe_transport_and_unexpected_failures(client, settings) -> None:
    _install(FakeTranscriptionService(settings, error=ExternalAPIError("Gemini request failed: timeout")))
    response = _upload(client)
    assert response.status_code == 500
    assert response.json()["error"] == "Transcription failed"

    _install(FakeTranscriptionService(settings, error=RuntimeError("boom")))
    response = _upload(client)
    assert response.status_code == 500
    assert response.json() == {"error": "Transcription failed", "code": "INTERNAL_ERROR"}


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "healthy"}
