"""PDF invoice renderer (reportlab).

Geometry is expressed in millimetres from the top-left corner of an A4 page
and flipped to reportlab's bottom-left origin when drawing.
"""

from io import BytesIO

from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from paydesk.domain.invoice_view import InvoiceView, Section, Style, ViewEntry
from paydesk.rendering.base import InvoiceRenderer

PAGE_W, PAGE_H = A4
PAGE_W_MM = PAGE_W / mm
MARGIN = 20

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


def _rgb(r: int, g: int, b: int, alpha: float = 1) -> Color:
    return Color(r / 255, g / 255, b / 255, alpha=alpha)


BLACK = _rgb(0, 0, 0)
WHITE = _rgb(255, 255, 255)
SLATE_900 = _rgb(30, 41, 59)
SLATE_600 = _rgb(71, 85, 105)
SLATE_500 = _rgb(100, 116, 139)
SLATE_200 = _rgb(226, 232, 240)
SLATE_50 = _rgb(248, 250, 252)
CYAN = _rgb(6, 182, 212)
INDIGO = _rgb(99, 102, 241)
GREEN = _rgb(0, 128, 0)
RED = _rgb(220, 38, 38)
WATERMARK = _rgb(240, 240, 240, 0.5)

WATERMARK_POSITIONS = ((40, 80), (150, 120), (50, 180), (140, 220))
WATERMARK_ANGLE = -45
WATERMARK_SIZE = 40

HEADER_HEIGHT = 35
TOP_BLOCK_Y = 50
DETAILS_BOX_Y = 105
DETAILS_BOX_HEIGHT = 38
TABLE_Y = 148
ROW_HEIGHT = 12
PAYOUT_BAND_HEIGHT = 16

VALUE_COLORS = {
    Style.POSITIVE: GREEN,
    Style.NEGATIVE: RED,
    Style.TOTAL: BLACK,
    Style.CONVERSION: SLATE_900,
}


class PdfInvoiceRenderer(InvoiceRenderer):
    """Renders an invoice as a single A4 PDF page."""

    file_extension = "pdf"

    def _draw(self, view: InvoiceView) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
        pdf.setTitle(f"Invoice {view.invoice_number}")
        pdf.setAuthor(self.branding.name)

        self._draw_watermarks(pdf, view.watermark)

        y_bottom = 0.0
        for section in Section:
            entries = view.section(section)
            if section is Section.HEADER:
                self._draw_header(pdf, entries)
            elif section is Section.META:
                self._draw_meta(pdf, entries)
            elif section is Section.BILL_TO:
                self._draw_bill_to(pdf, entries)
            elif section is Section.DETAILS:
                self._draw_details(pdf, entries)
            elif section is Section.LINE_ITEMS:
                y_bottom = self._draw_line_items(pdf, entries)
            elif section is Section.PAYOUT:
                y_bottom = self._draw_payout(pdf, entries, y_bottom + 15)
            elif section is Section.FOOTER:
                self._draw_footer(pdf, entries, y_bottom + 10)

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    # Drawing helpers; x and y are millimetres from the top-left corner
    def _text(self, pdf, text, x, y, size, color=BLACK, font=FONT, align="left"):
        pdf.setFont(font, size)
        pdf.setFillColor(color)
        px, py = x * mm, PAGE_H - y * mm
        if align == "right":
            pdf.drawRightString(px, py, text)
        elif align == "center":
            pdf.drawCentredString(px, py, text)
        else:
            pdf.drawString(px, py, text)
        self._record(text)

    def _rect(self, pdf, x, y, width, height, fill):
        pdf.setFillColor(fill)
        pdf.rect(x * mm, PAGE_H - (y + height) * mm, width * mm, height * mm, stroke=0, fill=1)

    def _rule(self, pdf, y, color=SLATE_200, width=0.3):
        pdf.setStrokeColor(color)
        pdf.setLineWidth(width)
        pdf.line(MARGIN * mm, PAGE_H - y * mm, (PAGE_W_MM - MARGIN) * mm, PAGE_H - y * mm)

    def _draw_watermarks(self, pdf, text: str) -> None:
        pdf.saveState()
        pdf.setFont(FONT, WATERMARK_SIZE)
        pdf.setFillColor(WATERMARK)
        for x, y in WATERMARK_POSITIONS:
            pdf.saveState()
            pdf.translate(x * mm, PAGE_H - y * mm)
            pdf.rotate(WATERMARK_ANGLE)
            pdf.drawString(0, 0, text)
            pdf.restoreState()
        pdf.restoreState()

    def _draw_header(self, pdf, entries: list[ViewEntry]) -> None:
        self._rect(pdf, 0, 0, PAGE_W_MM, HEADER_HEIGHT, CYAN)
        for entry in entries:
            self._text(pdf, entry.text, PAGE_W_MM / 2, 23, 32, WHITE, FONT_BOLD, "center")

    def _draw_meta(self, pdf, entries: list[ViewEntry]) -> None:
        right = PAGE_W_MM - MARGIN
        y = TOP_BLOCK_Y
        for entry in entries:
            if entry.style is Style.TITLE:
                self._text(pdf, entry.text, right, y, 20, BLACK, FONT_BOLD, "right")
                y += 8
            elif entry.key == "invoice_date":
                self._text(pdf, entry.text, right, y, 10, SLATE_900, align="right")
                y += 10
            elif entry.style is Style.STRONG:
                self._text(pdf, entry.text, right, y, 10, SLATE_900, FONT_BOLD, "right")
                y += 6
            else:
                self._text(pdf, entry.text, right, y, 9, SLATE_900, align="right")
                y += 5

    def _draw_bill_to(self, pdf, entries: list[ViewEntry]) -> None:
        y = TOP_BLOCK_Y
        for entry in entries:
            if entry.style is Style.CAPTION:
                self._text(pdf, entry.text, MARGIN, y, 9, SLATE_600, FONT_BOLD)
                y += 8
            elif entry.style is Style.HEADING:
                self._text(pdf, entry.text, MARGIN, y, 13, BLACK, FONT_BOLD)
                y += 8
            elif entry.style is Style.MUTED:
                size = 8 if entry.key == "account_name" else 9
                self._text(pdf, entry.text, MARGIN, y, size, SLATE_500)
                y += 6
            else:
                self._text(pdf, entry.text, MARGIN, y, 9, SLATE_900)
                y += 6

    def _draw_details(self, pdf, entries: list[ViewEntry]) -> None:
        self._rect(pdf, MARGIN, DETAILS_BOX_Y, PAGE_W_MM - 2 * MARGIN, DETAILS_BOX_HEIGHT, SLATE_50)
        y = DETAILS_BOX_Y + 8
        for entry in entries:
            if entry.style is Style.HEADING:
                self._text(pdf, entry.text, MARGIN + 5, y, 11, BLACK, FONT_BOLD)
                y += 8
            else:
                self._text(pdf, entry.text, MARGIN + 5, y, 9, SLATE_900)
                y += 5

    def _draw_line_items(self, pdf, entries: list[ViewEntry]) -> float:
        left = MARGIN + 5
        right = PAGE_W_MM - MARGIN - 5
        y = TABLE_Y
        for entry in entries:
            if entry.style is Style.TABLE_HEADER:
                self._rect(pdf, MARGIN, y, PAGE_W_MM - 2 * MARGIN, 10, SLATE_900)
                self._text(pdf, entry.label, left, y + 7, 10, WHITE, FONT_BOLD)
                self._text(pdf, entry.value, right, y + 7, 10, WHITE, FONT_BOLD, "right")
                y += 10
                continue

            label_color = SLATE_500 if entry.style is Style.CONVERSION else BLACK
            self._text(pdf, entry.label, left, y + 8, 9, label_color)
            self._text(pdf, entry.value, right, y + 8, 9, VALUE_COLORS.get(entry.style, BLACK), align="right")
            y += ROW_HEIGHT
            if entry.style is Style.TOTAL:
                self._rule(pdf, y, SLATE_900, 1)
            else:
                self._rule(pdf, y)
        return y

    def _draw_payout(self, pdf, entries: list[ViewEntry], y: float) -> float:
        for entry in entries:
            self._rect(pdf, MARGIN, y, PAGE_W_MM - 2 * MARGIN, PAYOUT_BAND_HEIGHT, INDIGO)
            self._text(pdf, entry.label, MARGIN + 5, y + 11, 13, WHITE, FONT_BOLD)
            self._text(pdf, entry.value, PAGE_W_MM - MARGIN - 5, y + 11, 14, WHITE, FONT_BOLD, "right")
            y += PAYOUT_BAND_HEIGHT
        return y

    def _draw_footer(self, pdf, entries: list[ViewEntry], y: float) -> None:
        for entry in entries:
            self._text(pdf, entry.text, PAGE_W_MM / 2, y, 10, INDIGO, align="center")
