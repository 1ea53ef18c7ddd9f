"""JPEG invoice renderer (Pillow).

The invoice is laid out on an 1800 x 2545 logical-pixel page (A4 proportions)
and every coordinate is multiplied by ``scale`` before drawing, so the final
bitmap is larger than the layout and stays sharp after JPEG compression.
"""

from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from paydesk.domain.invoice_view import (
    DEFAULT_BRANDING,
    Branding,
    InvoiceView,
    Section,
    Style,
    ViewEntry,
)
from paydesk.rendering.base import InvoiceRenderer

PAGE_WIDTH = 1800
PAGE_HEIGHT = 2545
PADDING = 80
CONTENT_RIGHT = PAGE_WIDTH - PADDING
CONTENT_WIDTH = PAGE_WIDTH - 2 * PADDING

JPEG_QUALITY = 95
DEFAULT_SCALE = 2

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
SLATE_900 = (30, 41, 59)
SLATE_600 = (71, 85, 105)
SLATE_500 = (100, 116, 139)
SLATE_200 = (226, 232, 240)
SLATE_50 = (248, 250, 252)
GREEN = (22, 163, 74)
RED = (220, 38, 38)
INDIGO = (99, 102, 241)
HEADER_GRADIENT = ((6, 182, 212), (16, 185, 129))
PAYOUT_GRADIENT = ((99, 102, 241), (139, 92, 246))
WATERMARK_FILL = (6, 182, 212, 51)

# (top fraction, side, side fraction) for each watermark label
WATERMARK_POSITIONS = (
    (0.15, "left", 0.10),
    (0.30, "right", 0.15),
    (0.50, "left", 0.20),
    (0.65, "right", 0.10),
    (0.80, "left", 0.15),
)
WATERMARK_SIZE = 64

VALUE_COLORS = {
    Style.POSITIVE: GREEN,
    Style.NEGATIVE: RED,
    Style.TOTAL: BLACK,
    Style.CONVERSION: SLATE_900,
}


class _RasterPage:
    """A scaled drawing surface; all public coordinates are logical pixels."""

    def __init__(self, scale: int):
        self.scale = scale
        self.image = Image.new("RGBA", (self.px(PAGE_WIDTH), self.px(PAGE_HEIGHT)), WHITE + (255,))
        self.draw = ImageDraw.Draw(self.image)
        self._fonts: dict[int, ImageFont.ImageFont] = {}

    def px(self, value: float) -> int:
        return int(round(value * self.scale))

    def font(self, size: int):
        scaled = self.px(size)
        if scaled not in self._fonts:
            self._fonts[scaled] = ImageFont.load_default(size=scaled)
        return self._fonts[scaled]

    def text_width(self, text: str, size: int) -> float:
        return self.draw.textlength(text, font=self.font(size)) / self.scale

    def text(self, text, x, y, size, color=BLACK, bold=False, align="left"):
        if align == "right":
            x -= self.text_width(text, size)
        elif align == "center":
            x -= self.text_width(text, size) / 2
        stroke = max(1, self.px(size) // 36) if bold else 0
        self.draw.text(
            (self.px(x), self.px(y)),
            text,
            font=self.font(size),
            fill=color,
            stroke_width=stroke,
            stroke_fill=color,
        )

    def rect(self, x, y, width, height, fill, radius=0):
        box = (self.px(x), self.px(y), self.px(x + width), self.px(y + height))
        if radius:
            self.draw.rounded_rectangle(box, radius=self.px(radius), fill=fill)
        else:
            self.draw.rectangle(box, fill=fill)

    def gradient(self, x, y, width, height, colors, radius=0):
        """Fill a rounded box with a left-to-right gradient."""
        size = (self.px(width), self.px(height))
        start = Image.new("RGBA", size, colors[0] + (255,))
        end = Image.new("RGBA", size, colors[1] + (255,))
        ramp = Image.linear_gradient("L").rotate(90, expand=True).resize(size)
        band = Image.composite(end, start, ramp)

        mask = Image.new("L", size, 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            (0, 0, size[0] - 1, size[1] - 1), radius=self.px(radius), fill=255
        )
        self.image.paste(band, (self.px(x), self.px(y)), mask)

    def line(self, y, color, width=1):
        self.draw.line(
            (self.px(PADDING), self.px(y), self.px(CONTENT_RIGHT), self.px(y)),
            fill=color,
            width=max(1, self.px(width)),
        )

    def watermark(self, text: str) -> None:
        font = self.font(WATERMARK_SIZE)
        left, top, right, bottom = font.getbbox(text)
        label = Image.new("RGBA", (right + 4, bottom + 4), (0, 0, 0, 0))
        ImageDraw.Draw(label).text((0, 0), text, font=font, fill=WATERMARK_FILL)
        rotated = label.rotate(45, expand=True, resample=Image.Resampling.BICUBIC)

        width, height = self.image.size
        for top_fraction, side, side_fraction in WATERMARK_POSITIONS:
            y = int(height * top_fraction)
            if side == "left":
                x = int(width * side_fraction)
            else:
                x = width - int(width * side_fraction) - rotated.width
            self.image.alpha_composite(rotated, dest=(max(0, x), max(0, y)))

    def encode(self, quality: int) -> bytes:
        buffer = BytesIO()
        self.image.convert("RGB").save(buffer, format="JPEG", quality=quality)
        return buffer.getvalue()


class ImageInvoiceRenderer(InvoiceRenderer):
    """Renders an invoice as a JPEG image."""

    file_extension = "jpg"

    def __init__(self, branding: Branding = DEFAULT_BRANDING, scale: int = DEFAULT_SCALE):
        super().__init__(branding)
        if scale < 1:
            raise ValueError(f"scale must be at least 1, got {scale}")
        self.scale = scale

    def _draw(self, view: InvoiceView) -> bytes:
        page = _RasterPage(self.scale)
        page.watermark(view.watermark)

        y = PADDING
        top_block_y = 0.0
        left_bottom = right_bottom = 0.0
        for section in Section:
            entries = view.section(section)
            if section is Section.HEADER:
                y = self._draw_header(page, entries, y)
                top_block_y = y
            elif section is Section.META:
                right_bottom = self._draw_meta(page, entries, top_block_y)
            elif section is Section.BILL_TO:
                left_bottom = self._draw_bill_to(page, entries, top_block_y)
                y = max(left_bottom, right_bottom) + 100
            elif section is Section.DETAILS:
                y = self._draw_details(page, entries, y) + 80
            elif section is Section.LINE_ITEMS:
                y = self._draw_line_items(page, entries, y) + 80
            elif section is Section.PAYOUT:
                y = self._draw_payout(page, entries, y) + 100
            elif section is Section.FOOTER:
                self._draw_footer(page, entries, y + 60)

        return page.encode(JPEG_QUALITY)

    def _text(self, page: _RasterPage, text: str, *args, **kwargs) -> None:
        page.text(self._record(text), *args, **kwargs)

    def _draw_header(self, page, entries: list[ViewEntry], y: float) -> float:
        height = 260
        page.gradient(PADDING, y, CONTENT_WIDTH, height, HEADER_GRADIENT, radius=12)
        for entry in entries:
            self._text(page, entry.text, PAGE_WIDTH / 2, y + 70, 120, WHITE, bold=True, align="center")
        return y + height + 100

    def _draw_meta(self, page, entries: list[ViewEntry], y: float) -> float:
        for entry in entries:
            if entry.style is Style.TITLE:
                self._text(page, entry.text, CONTENT_RIGHT, y, 72, BLACK, bold=True, align="right")
                y += 96
            elif entry.style is Style.STRONG:
                self._text(page, entry.text, CONTENT_RIGHT, y, 32, SLATE_900, bold=True, align="right")
                y += 48
            elif entry.key == "invoice_date":
                self._text(page, entry.text, CONTENT_RIGHT, y, 28, SLATE_900, align="right")
                y += 64
            else:
                self._text(page, entry.text, CONTENT_RIGHT, y, 28, SLATE_900, align="right")
                y += 50
        return y

    def _draw_bill_to(self, page, entries: list[ViewEntry], y: float) -> float:
        for entry in entries:
            if entry.style is Style.CAPTION:
                self._text(page, entry.text, PADDING, y, 32, SLATE_600, bold=True)
                y += 50
            elif entry.style is Style.HEADING:
                self._text(page, entry.text, PADDING, y, 40, BLACK, bold=True)
                y += 64
            elif entry.style is Style.STRONG:
                self._text(page, entry.text, PADDING, y, 28, SLATE_900, bold=True)
                y += 42
            elif entry.style is Style.MUTED:
                size = 26 if entry.key == "account_name" else 28
                self._text(page, entry.text, PADDING, y, size, SLATE_500)
                y += 42
            else:
                self._text(page, entry.text, PADDING, y, 28, SLATE_900)
                y += 42
        return y

    def _draw_details(self, page, entries: list[ViewEntry], y: float) -> float:
        padding = 28
        lines = [e for e in entries if e.style is not Style.HEADING]
        height = padding * 2 + 52 + len(lines) * 50
        page.rect(PADDING, y, CONTENT_WIDTH, height, SLATE_50, radius=8)

        line_y = y + padding
        x = PADDING + padding
        for entry in entries:
            if entry.style is Style.HEADING:
                self._text(page, entry.text, x, line_y, 34, BLACK, bold=True)
                line_y += 52
                continue
            # Bold label followed by the plain value, recorded as one string
            label = f"{entry.label}:"
            page.text(label, x, line_y, 28, SLATE_900, bold=True)
            page.text(entry.value, x + page.text_width(label + " ", 28), line_y, 28, SLATE_900)
            self._record(entry.text)
            line_y += 50
        return y + height

    def _draw_line_items(self, page, entries: list[ViewEntry], y: float) -> float:
        left = PADDING + 20
        right = CONTENT_RIGHT - 20
        for entry in entries:
            if entry.style is Style.TABLE_HEADER:
                page.rect(PADDING, y, CONTENT_WIDTH, 86, SLATE_900)
                self._text(page, entry.label, PADDING + 24, y + 24, 32, WHITE, bold=True)
                self._text(page, entry.value, CONTENT_RIGHT - 24, y + 24, 32, WHITE, bold=True, align="right")
                y += 86
                continue

            row_height = 96
            label_color = SLATE_500 if entry.style is Style.CONVERSION else BLACK
            self._text(page, entry.label, left, y + 34, 28, label_color, bold=True)
            self._text(
                page,
                entry.value,
                right,
                y + 22,
                46,
                VALUE_COLORS.get(entry.style, BLACK),
                bold=True,
                align="right",
            )
            y += row_height
            if entry.style is Style.TOTAL:
                page.line(y, SLATE_900, 2)
            else:
                page.line(y, SLATE_200, 1)
        return y

    def _draw_payout(self, page, entries: list[ViewEntry], y: float) -> float:
        height = 130
        for entry in entries:
            page.gradient(PADDING, y, CONTENT_WIDTH, height, PAYOUT_GRADIENT, radius=8)
            self._text(page, entry.label, PADDING + 36, y + 38, 50, WHITE, bold=True)
            self._text(page, entry.value, CONTENT_RIGHT - 36, y + 34, 58, WHITE, bold=True, align="right")
            y += height
        return y

    def _draw_footer(self, page, entries: list[ViewEntry], y: float) -> None:
        for entry in entries:
            self._text(page, entry.text, PAGE_WIDTH / 2, y, 34, INDIGO, bold=True, align="center")
