"""Lay out a trip as a paginated A4 document and draw it with fpdf2.

Layout and drawing are separate steps. ``DocumentRenderer.layout`` is pure: it
walks the trip with a vertical cursor and produces positioned text blocks, so
page breaks can be asserted without opening a PDF. ``draw_pdf`` then writes
those blocks verbatim.

Coordinates are millimetres on a 210x297 page with a 15 mm margin. Before a
block is placed its height (lines x line height) is checked against a bottom
threshold; day headers use a tighter threshold and are measured together with
their detail lines so a day starts on a fresh page when it will not fit. A
block is never split across pages.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from fpdf import FPDF

from tripmind.core.schemas import DayPlan, Trip

logger = logging.getLogger(__name__)

PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0
MARGIN = 15.0
CONTENT_WIDTH = 180.0
LINE_HEIGHT = 6.0
DETAIL_INDENT = 5.0
DAY_HEADER_LIMIT = 270.0
BLOCK_LIMIT = 280.0

DOCUMENT_TITLE = "TripMind Itinerary"
DEFAULT_FILENAME_STEM = "TripMind"
FILENAME_SUFFIX = "_Itinerary.pdf"

_TYPOGRAPHIC = str.maketrans({"\u2018": "'", "\u2019": "'", "\u201c": '"', "\u201d": '"', "\u2013": "-", "\u2014": "-", "\u2026": "..."})


@dataclass(frozen=True, slots=True)
class TextStyle:
    weight: str = ""
    size: float = 12
    family: str = "helvetica"


TITLE = TextStyle("B", 20)
SUBTITLE = TextStyle("", 14)
HEADING = TextStyle("B", 16)
BODY = TextStyle("", 12)
DAY_HEADER = TextStyle("B", 12)

Measure = Callable[[str, TextStyle], float]


@dataclass(slots=True)
class TextBlock:
    """Lines drawn top-down from baseline ``y`` at horizontal offset ``x``."""

    kind: str
    lines: List[str]
    x: float
    y: float
    style: TextStyle
    line_height: float = LINE_HEIGHT

    @property
    def height(self) -> float:
        return len(self.lines) * self.line_height


@dataclass(slots=True)
class Page:
    blocks: List[TextBlock] = field(default_factory=list)


@dataclass(slots=True)
class DocumentLayout:
    filename: str
    pages: List[Page] = field(default_factory=lambda: [Page()])

    def blocks(self, kind: Optional[str] = None) -> List[TextBlock]:
        return [b for page in self.pages for b in page.blocks if kind is None or b.kind == kind]


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


def to_latin1(text: str) -> str:
    """Make text drawable with the built-in Helvetica font."""

    return text.translate(_TYPOGRAPHIC).encode("latin-1", errors="replace").decode("latin-1")


class FpdfMetrics:
    """String widths from fpdf2's core font metrics."""

    def __init__(self) -> None:
        self._pdf = FPDF(orientation="P", unit="mm", format="A4")

    def __call__(self, text: str, style: TextStyle) -> float:
        self._pdf.set_font(style.family, style.weight, style.size)
        return self._pdf.get_string_width(to_latin1(text))


def wrap_text(text: str, width: float, measure: Callable[[str], float]) -> List[str]:
    """Greedy word wrap; words wider than ``width`` are split by character."""

    if not text or not text.strip():
        return [""]

    lines: List[str] = []
    for paragraph in text.splitlines() or [text]:
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if measure(candidate) <= width:
                current = candidate
                continue
            if current:
                lines.append(current)
            while len(word) > 1 and measure(word) > width:
                cut = len(word) - 1
                while cut > 1 and measure(word[:cut]) > width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        lines.append(current)
    return lines


def format_amount(value: float) -> str:
    """``300.0`` -> ``"300"``, ``12.5`` -> ``"12.5"``."""

    return f"{float(value):.2f}".rstrip("0").rstrip(".")


def document_filename(trip: Trip) -> str:
    stem = (trip.destination or "").strip() or DEFAULT_FILENAME_STEM
    return f"{stem}{FILENAME_SUFFIX}"


class _Cursor:
    """Mutable layout state: current page and vertical position."""

    def __init__(self, layout: DocumentLayout) -> None:
        self.layout = layout
        self.y = MARGIN

    @property
    def page(self) -> Page:
        return self.layout.pages[-1]

    def break_page(self) -> None:
        self.layout.pages.append(Page())
        self.y = MARGIN

    def place(
        self,
        kind: str,
        lines: Sequence[str],
        style: TextStyle,
        *,
        x: float = MARGIN,
        limit: float = BLOCK_LIMIT,
        gap: float = 0.0,
        extent: Optional[float] = None,
    ) -> TextBlock:
        """Place a block, starting a new page first if it would cross ``limit``."""

        needed = len(lines) * LINE_HEIGHT if extent is None else extent
        if self.y + needed > limit and self.y > MARGIN:
            logger.debug("Page break before %s at y=%.1f (needs %.1f)", kind, self.y, needed)
            self.break_page()
        block = TextBlock(kind=kind, lines=list(lines), x=x, y=self.y, style=style)
        self.page.blocks.append(block)
        self.y += block.height + gap
        return block

    def skip(self, amount: float) -> None:
        self.y += amount


class DocumentRenderer:
    """Turns a ``Trip`` into a ``DocumentLayout`` and then into PDF bytes."""

    def __init__(self, *, measure: Optional[Measure] = None, currency_symbol: str = "£") -> None:
        self._measure = measure
        self.currency_symbol = currency_symbol

    @property
    def measure(self) -> Measure:
        if self._measure is None:
            self._measure = FpdfMetrics()
        return self._measure

    def wrap(self, text: str, style: TextStyle, width: float = CONTENT_WIDTH) -> List[str]:
        return wrap_text(text, width, lambda s: self.measure(s, style))

    def money(self, value: float) -> str:
        return f"{self.currency_symbol}{format_amount(value)}"

    def layout(self, trip: Trip) -> DocumentLayout:
        layout = DocumentLayout(filename=document_filename(trip))
        cursor = _Cursor(layout)

        cursor.place("title", [DOCUMENT_TITLE], TITLE, gap=4)
        if trip.destination:
            cursor.place("destination", [f"Destination: {trip.destination}"], SUBTITLE, gap=4)

        summary = self.wrap(trip.summary, BODY)
        cursor.place("heading", ["Summary"], HEADING, gap=2, extent=LINE_HEIGHT * 2)
        cursor.place("summary", summary, BODY, gap=6)

        cursor.place("heading", ["Budget Breakdown"], HEADING, gap=2, extent=LINE_HEIGHT * 2)
        for category, amount in trip.budget_breakdown.items():
            cursor.place("budget", self.wrap(f"{category}: {self.money(amount)}", BODY), BODY)
        cursor.skip(8)

        self._layout_accommodation(cursor, trip)

        cursor.place("heading", ["Itinerary"], HEADING, gap=2, extent=LINE_HEIGHT * 2)
        for day in trip.itinerary:
            self._layout_day(cursor, day)

        logger.debug("Laid out %s on %s page(s)", layout.filename, len(layout.pages))
        return layout

    def _layout_accommodation(self, cursor: _Cursor, trip: Trip) -> None:
        stay = trip.accommodation
        if not stay.name:
            return
        cursor.place("heading", ["Recommended Accommodation"], HEADING, gap=2, extent=LINE_HEIGHT * 2)
        cursor.place("accommodation", self.wrap(stay.name, BODY), BODY)
        cursor.place("accommodation", [f"{self.money(stay.price_per_night)} per night"], BODY)
        if stay.description:
            cursor.place("accommodation", self.wrap(stay.description, BODY), BODY)
        cursor.skip(8)

    def _layout_day(self, cursor: _Cursor, day: DayPlan) -> None:
        detail_width = CONTENT_WIDTH - DETAIL_INDENT
        header = self.wrap(f"Day {day.day}: {day.summary}".rstrip(": "), DAY_HEADER)
        details = [
            self.wrap(f"{entry.time}: {entry.activity}" if entry.time else entry.activity, BODY, detail_width)
            for entry in day.details
        ]
        day_extent = (len(header) + sum(len(lines) for lines in details)) * LINE_HEIGHT

        cursor.place("day_header", header, DAY_HEADER, limit=DAY_HEADER_LIMIT, gap=4, extent=day_extent)
        for lines in details:
            cursor.place("detail", lines, BODY, x=MARGIN + DETAIL_INDENT, gap=2)
        cursor.place("day_cost", [f"Est. {self.money(day.estimated_cost)}"], BODY, x=MARGIN + DETAIL_INDENT, gap=4)

    def render(self, trip: Trip) -> RenderedDocument:
        layout = self.layout(trip)
        return RenderedDocument(filename=layout.filename, content=draw_pdf(layout))


def draw_pdf(layout: DocumentLayout) -> bytes:
    """Write a laid-out document to PDF bytes."""

    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(MARGIN, MARGIN, MARGIN)
    pdf.set_title(DOCUMENT_TITLE)
    pdf.set_creator("TripMind")

    for page in layout.pages:
        pdf.add_page()
        for block in page.blocks:
            pdf.set_font(block.style.family, block.style.weight, block.style.size)
            for idx, line in enumerate(block.lines):
                if line:
                    pdf.text(block.x, block.y + idx * block.line_height, to_latin1(line))

    return bytes(pdf.output())


__all__ = [
    "BLOCK_LIMIT",
    "CONTENT_WIDTH",
    "DAY_HEADER_LIMIT",
    "DocumentLayout",
    "DocumentRenderer",
    "FpdfMetrics",
    "LINE_HEIGHT",
    "MARGIN",
    "Page",
    "RenderedDocument",
    "TextBlock",
    "TextStyle",
    "document_filename",
    "draw_pdf",
    "format_amount",
    "to_latin1",
    "wrap_text",
]
