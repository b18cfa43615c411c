"""
PDF rendering for transcripts using fpdf2.

Layout is A4 portrait in millimetres with a single embedded TTF font (so
scripts such as Devanagari render), applied to every element. Text is shaped
with HarfBuzz (uharfbuzz) when enabled so conjuncts and vowel signs are
placed correctly. Pagination is explicit: automatic page breaks are off and
the body is laid out line by line before anything is drawn, so the total
page count is known when the footers are stamped.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from fpdf import FPDF

from app.core.exceptions import ExportError

logger = logging.getLogger(__name__)

FONT_FAMILY = "TranscriptFont"

PAGE_WIDTH = 210
PAGE_HEIGHT = 297
CONTENT_WIDTH = 170
LEFT_MARGIN = 20
TOP_Y = 20
BOTTOM_MARGIN = 25

TITLE_SIZE = 18
TITLE_LINE_HEIGHT = 8
TIMESTAMP_SIZE = 10
BODY_SIZE = 11
BODY_LINE_HEIGHT = 7
FOOTER_SIZE = 9
FOOTER_OFFSET = 10

# fpdf2 puts a cell baseline at top + 0.5 * h + 0.3 * font_size; with h equal
# to the font size that is 0.8 font sizes below the top edge.
BASELINE_DROP = 0.8


def format_generated_at(generated_at: datetime) -> str:
    return f"Generated on {generated_at:%Y-%m-%d} at {generated_at:%H:%M}"


def wrap_text(text: str, max_width: float, measure: Callable[[str], float]) -> List[str]:
    """
    Greedy word wrap.

    Explicit newlines start a new line; words wider than max_width are split
    by character.
    """
    lines: List[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split(" "):
            candidate = f"{current} {word}" if current else word
            if not current or measure(candidate) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word

            while len(current) > 1 and measure(current) > max_width:
                cut = _longest_fitting_prefix(current, max_width, measure)
                lines.append(current[:cut])
                current = current[cut:]
        lines.append(current)
    return lines


def _longest_fitting_prefix(text: str, max_width: float, measure: Callable[[str], float]) -> int:
    cut = 1
    while cut < len(text) and measure(text[: cut + 1]) <= max_width:
        cut += 1
    return cut


@dataclass
class PlacedLine:
    """A line of text positioned on a page. x=None means centred."""

    text: str
    y: float
    size: float
    x: Optional[float] = None


class TranscriptPDF(FPDF):
    """A4 transcript document with one embedded font."""

    def __init__(self, font_path: Path, text_shaping: bool = True):
        super().__init__(orientation="portrait", unit="mm", format="A4")
        self.set_auto_page_break(False)
        self.c_margin = 0
        self.add_font(FONT_FAMILY, "", str(font_path))
        if text_shaping:
            self.set_text_shaping(True)

    def apply_font(self, size: float) -> None:
        """Select the embedded font. Font state is not trusted across pages."""
        self.set_font(FONT_FAMILY, size=size)

    def start_page(self) -> None:
        self.add_page()
        self.apply_font(BODY_SIZE)

    def wrap(self, text: str, size: float, width: float = CONTENT_WIDTH) -> List[str]:
        self.apply_font(size)
        return wrap_text(text, width, self.get_string_width)

    def layout(self, title: str, text: str, generated_at: datetime) -> List[List[PlacedLine]]:
        """Split the title block and body into pages of positioned lines."""
        page: List[PlacedLine] = []
        pages = [page]

        y = TOP_Y
        for line in self.wrap(title, TITLE_SIZE):
            page.append(PlacedLine(line, y, TITLE_SIZE))
            y += TITLE_LINE_HEIGHT

        page.append(PlacedLine(format_generated_at(generated_at), y + 5, TIMESTAMP_SIZE))
        y += 15

        for line in self.wrap(text, BODY_SIZE):
            if y > PAGE_HEIGHT - BOTTOM_MARGIN:
                page = []
                pages.append(page)
                y = TOP_Y
            page.append(PlacedLine(line, y, BODY_SIZE, x=LEFT_MARGIN))
            y += BODY_LINE_HEIGHT

        return pages

    def draw(self, line: PlacedLine) -> None:
        if self.font_size_pt != line.size:
            self.apply_font(line.size)
        if not line.text:
            return
        self.write_at(line.text, line.y, line.x)

    def write_at(self, text: str, baseline: float, x: Optional[float] = None) -> None:
        """Write one line on the given baseline, centred on the page when x is None."""
        top = baseline - BASELINE_DROP * self.font_size
        if x is None:
            self.set_xy(0, top)
            self.cell(w=PAGE_WIDTH, h=self.font_size, text=text, align="C")
        else:
            self.set_xy(x, top)
            self.cell(h=self.font_size, text=text)

    def stamp_footer(self, number: int, total: int) -> None:
        self.apply_font(FOOTER_SIZE)
        self.write_at(f"Page {number} of {total}", PAGE_HEIGHT - FOOTER_OFFSET)

    def render(self, title: str, text: str, generated_at: datetime) -> None:
        pages = self.layout(title, text, generated_at)
        total = len(pages)

        for number, lines in enumerate(pages, start=1):
            self.start_page()
            for line in lines:
                self.draw(line)
            self.stamp_footer(number, total)

        logger.debug(f"[TranscriptPDF] Rendered {total} page(s)")


def build_pdf(
    title: str,
    text: str,
    generated_at: datetime,
    font_path: str | Path,
    text_shaping: bool = True,
) -> bytes:
    """
    Render a transcript to PDF bytes.

    Raises:
        ExportError: If the embedded font file is missing
    """
    font = Path(font_path)
    if not font.is_file():
        raise ExportError(f"PDF font not found: {font}")

    pdf = TranscriptPDF(font, text_shaping=text_shaping)
    pdf.render(title, text, generated_at)
    return bytes(pdf.output())


def build_plain_text(title: str, text: str, generated_at: datetime) -> bytes:
    """Plain-text rendition used when the PDF cannot be built."""
    content = (
        f"{title}\n\n"
        f"Generated on {generated_at:%Y-%m-%d %H:%M:%S}\n\n"
        f"{'=' * 50}\n\n"
        f"{text}"
    )
    return content.encode("utf-8")
