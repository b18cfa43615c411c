import io
from datetime import datetime

import pytest
from pypdf import PdfReader

from app.core.exceptions import ExportError
from app.export.pdf import (
    BODY_SIZE,
    FOOTER_SIZE,
    TITLE_SIZE,
    TranscriptPDF,
    build_pdf,
    build_plain_text,
    format_generated_at,
    wrap_text,
)

GENERATED_AT = datetime(2026, 10, 18, 9, 5, 30)


class RecordingPDF(TranscriptPDF):
    """Records every explicit font selection as (page, size)."""

    def __init__(self, font_path):
        self.font_applications = []
        super().__init__(font_path)

    def apply_font(self, size):
        self.font_applications.append((self.page, size))
        super().apply_font(size)


def _long_transcript(lines: int = 100) -> str:
    return "\n".join(f"Speaker {i % 2 + 1}: line {i}" for i in range(lines))


def test_wrap_text_breaks_on_words() -> None:
    assert wrap_text("aaa bbb ccc", 7, len) == ["aaa bbb", "ccc"]


def test_wrap_text_keeps_explicit_newlines() -> None:
    assert wrap_text("a\n\nb", 10, len) == ["a", "", "b"]
    assert wrap_text("", 10, len) == [""]


def test_wrap_text_splits_overlong_words() -> None:
    assert wrap_text("abcdefghij", 4, len) == ["abcd", "efgh", "ij"]
    assert wrap_text("xy abcdefghij", 4, len) == ["xy", "abcd", "efgh", "ij"]


def test_layout_paginates_body(font_path) -> None:
    pdf = TranscriptPDF(font_path)

    pages = pdf.layout("interview", _long_transcript(), GENERATED_AT)

    assert len(pages) == 3
    body_counts = [sum(1 for line in page if line.size == BODY_SIZE) for page in pages]
    assert body_counts == [33, 37, 30]
    assert pages[0][0].text == "interview"
    assert pages[0][0].size == TITLE_SIZE
    assert pages[0][1].text == "Generated on 2026-10-18 at 09:05"
    assert pages[1][0].y == 20
    assert all(line.y <= 297 - 25 for page in pages for line in page)


def test_layout_wraps_long_title(font_path) -> None:
    pdf = TranscriptPDF(font_path)
    title = " ".join(["conversation"] * 30)

    pages = pdf.layout(title, "Speaker 1: Hi.", GENERATED_AT)

    title_lines = [line for line in pages[0] if line.size == TITLE_SIZE]
    assert len(title_lines) > 1
    assert [line.y for line in title_lines] == [20 + 8 * i for i in range(len(title_lines))]
    assert all(line.x is None for line in title_lines)


def test_font_is_reapplied_on_every_page(font_path) -> None:
    pdf = RecordingPDF(font_path)

    pdf.render("interview", _long_transcript(), GENERATED_AT)

    total = pdf.page_no()
    assert total == 3
    for page in range(1, total + 1):
        assert (page, BODY_SIZE) in pdf.font_applications
        assert (page, FOOTER_SIZE) in pdf.font_applications


def test_every_page_has_numbered_footer(font_path) -> None:
    content = build_pdf("interview", _long_transcript(), GENERATED_AT, font_path)

    assert content.startswith(b"%PDF")
    reader = PdfReader(io.BytesIO(content))
    assert len(reader.pages) == 3
    for number, page in enumerate(reader.pages, start=1):
        assert f"Page {number} of 3" in page.extract_text()


def test_single_page_document(font_path) -> None:
    content = build_pdf("short", "Speaker 1: Hello.", GENERATED_AT, font_path)

    reader = PdfReader(io.BytesIO(content))
    assert len(reader.pages) == 1
    text = reader.pages[0].extract_text()
    assert "Speaker 1: Hello." in text
    assert "Page 1 of 1" in text


def test_text_shaping_is_on_by_default(font_path) -> None:
    assert TranscriptPDF(font_path).text_shaping
    assert TranscriptPDF(font_path, text_shaping=False).text_shaping is None


@pytest.mark.parametrize("text_shaping", [True, False])
def test_devanagari_body_renders(font_path, text_shaping) -> None:
    content = build_pdf("साक्षात्कार", "Speaker 1: नमस्ते\nSpeaker 2: क्षमा कीजिए", GENERATED_AT, font_path, text_shaping)

    reader = PdfReader(io.BytesIO(content))
    assert len(reader.pages) == 1
    assert "Page 1 of 1" in reader.pages[0].extract_text()


def test_missing_font_raises(tmp_path) -> None:
    with pytest.raises(ExportError):
        build_pdf("t", "Speaker 1: Hi.", GENERATED_AT, tmp_path / "missing.ttf")


def test_plain_text_layout() -> None:
    content = build_plain_text("साक्षात्कार", "Speaker 1: नमस्ते 0:06", GENERATED_AT).decode("utf-8")

    assert content == (
        "साक्षात्कार\n\n"
        "Generated on 2026-10-18 09:05:30\n\n"
        + "=" * 50
        + "\n\nSpeaker 1: नमस्ते 0:06"
    )


def test_format_generated_at() -> None:
    assert format_generated_at(GENERATED_AT) == "Generated on 2026-10-18 at 09:05"
