import io
from datetime import datetime
from pathlib import Path

import pytest
from pypdf import PdfReader

from app import export as export_package
from app.config import DEFAULT_PDF_FONT, Settings
from app.core.exceptions import BadRequestError
from app.export.schemas import ExportedDocument, ExportRequest
from app.export.service import ExportService, content_disposition, get_export_service, sanitize_filename
from app.main import app

GENERATED_AT = datetime(2026, 10, 18, 9, 5, 30)


def _use_font(settings, font_path) -> None:
    settings.pdf_font_path = str(font_path)
    app.dependency_overrides[get_export_service] = lambda: ExportService(settings)


def test_sanitize_filename() -> None:
    assert sanitize_filename('a/b:c"d') == "abcd"
    assert sanitize_filename("  <meeting> notes?*  ") == "meeting notes"
    assert sanitize_filename('<>:"/\\|?*') == "transcript"
    assert sanitize_filename(None) == "transcript"
    assert sanitize_filename("साक्षात्कार") == "साक्षात्कार"


def test_content_disposition_percent_encodes() -> None:
    document = ExportedDocument(content=b"", filename="my notes (1)", media_type="application/pdf", extension="pdf")
    assert content_disposition(document) == 'attachment; filename="my%20notes%20(1).pdf"'

    document = ExportedDocument(content=b"", filename="नमस्ते", media_type="text/plain", extension="txt")
    assert content_disposition(document) == 'attachment; filename="%E0%A4%A8%E0%A4%AE%E0%A4%B8%E0%A5%8D%E0%A4%A4%E0%A5%87.txt"'


@pytest.mark.parametrize("text", [None, "", "   \n\t "])
def test_export_rejects_blank_text(settings, text) -> None:
    with pytest.raises(BadRequestError):
        ExportService(settings).export(ExportRequest(text=text, filename="x"))


def test_export_builds_pdf(settings) -> None:
    document = ExportService(settings).export(
        ExportRequest(text="Speaker 1: Hello.", filename='a/b:c"d'),
        generated_at=GENERATED_AT,
    )

    assert document.media_type == "application/pdf"
    assert document.extension == "pdf"
    assert document.filename == "abcd"
    assert document.content.startswith(b"%PDF")


def test_default_font_ships_with_package() -> None:
    assert DEFAULT_PDF_FONT.is_absolute()
    assert DEFAULT_PDF_FONT.is_file()
    assert DEFAULT_PDF_FONT.parent == Path(export_package.__file__).parent / "fonts"


def test_export_devanagari_with_default_settings(monkeypatch) -> None:
    monkeypatch.delenv("PDF_FONT_PATH", raising=False)
    settings = Settings()

    document = ExportService(settings).export(
        ExportRequest(text="Speaker 1: नमस्ते", filename="हिंदी"),
        generated_at=GENERATED_AT,
    )

    assert settings.pdf_font_path == str(DEFAULT_PDF_FONT)
    assert document.media_type == "application/pdf"
    assert document.extension == "pdf"
    reader = PdfReader(io.BytesIO(document.content))
    assert len(reader.pages) == 1
    assert "Page 1 of 1" in reader.pages[0].extract_text()


def test_export_falls_back_to_plain_text_when_pdf_fails(settings, monkeypatch) -> None:
    def broken_pdf(*args, **kwargs):
        raise RuntimeError("font table corrupted")

    monkeypatch.setattr("app.export.service.build_pdf", broken_pdf)
    raw = "0:06 Speaker 1: नमस्ते [0m5s100ms-0m10s200ms]"

    document = ExportService(settings).export(
        ExportRequest(text=raw, filename="meeting: day 1"),
        generated_at=GENERATED_AT,
    )

    assert document.media_type == "text/plain; charset=utf-8"
    assert document.extension == "txt"
    assert document.filename == "meeting day 1"
    content = document.content.decode("utf-8")
    assert content.startswith("meeting: day 1\n\nGenerated on 2026-10-18 09:05:30\n\n" + "=" * 50)
    assert content.endswith(raw)


def test_export_endpoint_returns_pdf_attachment(client, settings, font_path) -> None:
    _use_font(settings, font_path)

    response = client.post("/api/export/pdf", json={"text": "Speaker 1: Hello.", "filename": 'a/b:c"d'})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="abcd.pdf"'
    assert response.content.startswith(b"%PDF")
    assert response.headers["content-length"] == str(len(response.content))


def test_export_endpoint_default_filename(client, settings, font_path) -> None:
    _use_font(settings, font_path)

    response = client.post("/api/export/pdf", json={"text": "Speaker 1: Hello."})

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="transcript.pdf"'


@pytest.mark.parametrize("payload", [{"text": ""}, {"text": "   "}, {"filename": "x"}])
def test_export_endpoint_rejects_empty_transcript(client, settings, font_path, payload) -> None:
    _use_font(settings, font_path)

    response = client.post("/api/export/pdf", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Empty transcript"


def test_export_endpoint_falls_back_to_text(client, settings, tmp_path) -> None:
    _use_font(settings, tmp_path / "missing-font.ttf")

    response = client.post("/api/export/pdf", json={"text": "Speaker 1: नमस्ते", "filename": "हिंदी"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/plain; charset=utf-8"
    assert response.headers["content-disposition"] == (
        'attachment; filename="%E0%A4%B9%E0%A4%BF%E0%A4%82%E0%A4%A6%E0%A5%80.txt"'
    )
    body = response.content.decode("utf-8")
    assert body.startswith("हिंदी\n\nGenerated on ")
    assert body.endswith("Speaker 1: नमस्ते")


def test_export_endpoint_fallback_failure_returns_json_error(client, settings, font_path, monkeypatch) -> None:
    _use_font(settings, font_path)

    def broken(*args, **kwargs):
        raise RuntimeError("broken")

    monkeypatch.setattr("app.export.service.build_pdf", broken)
    monkeypatch.setattr("app.export.service.build_plain_text", broken)

    response = client.post("/api/export/pdf", json={"text": "Speaker 1: Hi."})

    assert response.status_code == 500
    assert response.json()["error"] == "Export failed. Please try again."


def test_export_endpoint_malformed_body(client) -> None:
    response = client.post(
        "/api/export/pdf",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"
