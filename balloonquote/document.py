"""Quotation document export rendered with Pillow and saved as PDF."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path

from balloonquote.config import (
    DOCUMENT_DPI,
    DOCUMENT_FONT_PATH,
    DOCUMENT_HEIGHT_PX,
    DOCUMENT_MARGIN_PX,
    DOCUMENT_WIDTH_PX,
    EXPORT_DIR,
    QUOTATION_VALID_DAYS,
)
from balloonquote.constant import DOCUMENT_NOTES
from balloonquote.models import SavedQuotation, VendorInfo
from balloonquote.pricing import discount_amount, format_money

_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)

_BODY_FONT_SIZE = 22
_SMALL_FONT_SIZE = 18
_TITLE_FONT_SIZE = 48
_LINE_GAP_PX = 8
_FOOTER_HEIGHT_PX = 110
_ACCENT = (30, 58, 138)
_MUTED = (90, 90, 90)

# Column x offsets relative to the left margin.
_COL_INDEX = 0
_COL_NAME = 50
_COL_PRICE = 700
_COL_QTY = 860
_COL_TOTAL = 1100


@dataclass(frozen=True)
class DocumentLine:
    """One numbered item row of the quotation table."""

    index: int
    name: str
    description_lines: tuple[str, ...]
    unit_price: str
    quantity: str
    total: str


def resolve_document_font_path() -> str | None:
    """First usable TrueType font, or None to fall back to Pillow's built-in font."""
    seen: set[str] = set()
    for candidate in (DOCUMENT_FONT_PATH, *_LINUX_FONT_FALLBACKS):
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate
    return None


def check_document_dependencies() -> tuple[bool, str]:
    """Check whether PDF export can run."""
    try:
        from PIL import Image, ImageFont  # noqa: F401
    except Exception as exc:
        return (False, f"Export unavailable: {exc}")
    if resolve_document_font_path() is None:
        return (True, "Export ready (built-in font)")
    return (True, "Export ready")


def _load_font(size: int) -> object:
    from PIL import ImageFont

    font_path = resolve_document_font_path()
    if font_path is not None:
        return ImageFont.truetype(font_path, size)
    try:
        return ImageFont.load_default(size)
    except TypeError:
        # Pillow < 10.1 only ships the fixed-size bitmap font.
        return ImageFont.load_default()


def _printable(text: str, font: object) -> str:
    """Bitmap fonts only cover latin-1; spell out the symbols they lack."""
    from PIL import ImageFont

    if isinstance(font, ImageFont.FreeTypeFont):
        return text
    text = text.replace("€", "EUR ").replace("•", "-")
    return text.encode("latin-1", "replace").decode("latin-1")


def document_lines(quotation: SavedQuotation) -> list[DocumentLine]:
    """Table rows with bulleted descriptions and formatted money columns."""
    rows: list[DocumentLine] = []
    for idx, line in enumerate(quotation.items, start=1):
        price = line.custom_price if line.custom_price is not None else line.price
        description = line.custom_description or line.description
        bullets = tuple(f"• {part.strip()}" for part in description.split("\n") if part.strip())
        rows.append(
            DocumentLine(
                index=idx,
                name=line.item_name,
                description_lines=bullets,
                unit_price=format_money(price),
                quantity=str(line.quantity),
                total=format_money(price * line.quantity),
            )
        )
    return rows


def document_subtotal(quotation: SavedQuotation) -> float:
    return sum(
        (line.custom_price if line.custom_price is not None else line.price) * line.quantity
        for line in quotation.items
    )


def default_export_path(quotation: SavedQuotation, export_dir: str | Path = EXPORT_DIR) -> Path:
    return Path(export_dir) / f"Quotation_{quotation.quotation_number}.pdf"


class _PageWriter:
    """Draws text top-down and starts a new page when the body area is full."""

    def __init__(self, fonts: dict[str, object]) -> None:
        self.fonts = fonts
        self.pages: list[object] = []
        self.draw: object = None
        self.y = 0
        self.new_page()

    def new_page(self) -> None:
        from PIL import Image, ImageDraw

        page = Image.new("RGB", (DOCUMENT_WIDTH_PX, DOCUMENT_HEIGHT_PX), color=(255, 255, 255))
        self.pages.append(page)
        self.draw = ImageDraw.Draw(page)
        self.y = DOCUMENT_MARGIN_PX

    def ensure_room(self, height: int) -> None:
        if self.y + height > DOCUMENT_HEIGHT_PX - DOCUMENT_MARGIN_PX - _FOOTER_HEIGHT_PX:
            self.new_page()

    def line_height(self, font_key: str) -> int:
        bbox = self.draw.textbbox((0, 0), "Ag", font=self.fonts[font_key])
        return (bbox[3] - bbox[1]) + _LINE_GAP_PX

    def text(self, x: int, text: str, font_key: str = "body", fill: tuple[int, int, int] = (0, 0, 0),
             right_align: bool = False) -> None:
        font = self.fonts[font_key]
        text = _printable(text, font)
        if right_align:
            width = self.draw.textbbox((0, 0), text, font=font)[2]
            x = x - width
        self.draw.text((x, self.y), text, font=font, fill=fill)

    def advance(self, font_key: str = "body", lines: int = 1) -> None:
        self.y += self.line_height(font_key) * lines

    def rule(self, x0: int, x1: int, fill: tuple[int, int, int] = (200, 200, 200), width: int = 2) -> None:
        self.draw.line((x0, self.y, x1, self.y), fill=fill, width=width)
        self.y += _LINE_GAP_PX


def _draw_footer(writer: _PageWriter, quotation: SavedQuotation, vendor: VendorInfo, issued: datetime) -> None:
    from PIL import ImageDraw

    left = DOCUMENT_MARGIN_PX
    right = DOCUMENT_WIDTH_PX - DOCUMENT_MARGIN_PX
    total_pages = len(writer.pages)
    for page_no, page in enumerate(writer.pages, start=1):
        draw = ImageDraw.Draw(page)
        font = writer.fonts["small"]
        y = DOCUMENT_HEIGHT_PX - DOCUMENT_MARGIN_PX - _FOOTER_HEIGHT_PX + 20
        draw.line((left, y - 10, right, y - 10), fill=(200, 200, 200), width=1)
        draw.text((left, y), _printable(f"Payment Terms: {quotation.payment_terms}", font), font=font, fill=_MUTED)
        draw.text((left, y + 26), _printable(f"Bank Details: Contact {vendor.email} for payment information", font), font=font, fill=_MUTED)
        for offset, label in (
            (0, f"Quotation #{quotation.quotation_number}"),
            (26, f"Issued: {issued.strftime('%d/%m/%Y')}"),
            (52, f"Page {page_no} of {total_pages}"),
        ):
            width = draw.textbbox((0, 0), label, font=font)[2]
            draw.text((right - width, y + offset), label, font=font, fill=_MUTED)


def export_quotation_document(
    quotation: SavedQuotation,
    vendor: VendorInfo,
    path: str | Path | None = None,
    issued: datetime | None = None,
) -> Path:
    """Render the quotation to a PDF file and return its path."""
    issued = issued or datetime.now()
    output = Path(path) if path is not None else default_export_path(quotation)
    output.parent.mkdir(parents=True, exist_ok=True)

    fonts = {
        "title": _load_font(_TITLE_FONT_SIZE),
        "body": _load_font(_BODY_FONT_SIZE),
        "small": _load_font(_SMALL_FONT_SIZE),
    }
    writer = _PageWriter(fonts)
    left = DOCUMENT_MARGIN_PX
    right = DOCUMENT_WIDTH_PX - DOCUMENT_MARGIN_PX
    to_x = left + 620

    # Header
    writer.text(left, vendor.name.upper(), "body", fill=_ACCENT)
    writer.text(right, "QUOTATION", "title", fill=(40, 40, 40), right_align=True)
    writer.advance("title")
    valid_until = issued + timedelta(days=QUOTATION_VALID_DAYS)
    for label in (
        f"Ref No: {quotation.quotation_number}",
        f"Date: {issued.strftime('%d/%m/%Y')}",
        f"Valid until: {valid_until.strftime('%d/%m/%Y')}",
    ):
        writer.text(right, label, "small", fill=_MUTED, right_align=True)
        writer.advance("small")
    writer.advance("body")

    # Sender / receiver
    client = quotation.client
    from_lines = ["FROM:", vendor.name, vendor.address, vendor.city, f"Tel: {vendor.phone}", f"Email: {vendor.email}"]
    to_lines = ["TO:", client.name or "[Customer Name]", client.country or "[Country]"]
    if client.phone:
        to_lines.append(f"Tel: {client.phone}")
    if client.email:
        to_lines.append(f"Email: {client.email}")
    for idx in range(max(len(from_lines), len(to_lines))):
        if idx < len(from_lines):
            writer.text(left, from_lines[idx])
        if idx < len(to_lines):
            writer.text(to_x, to_lines[idx])
        writer.advance()
    writer.advance()

    # Items table
    def table_header() -> None:
        for x, label, align_right in (
            (_COL_INDEX, "#", False),
            (_COL_NAME, "ITEM", False),
            (_COL_PRICE, "PRICE", True),
            (_COL_QTY, "QTY", True),
            (_COL_TOTAL, "TOTAL", True),
        ):
            writer.text(left + x, label, fill=_ACCENT, right_align=align_right)
        writer.advance()
        writer.rule(left, right, fill=_ACCENT)

    table_header()
    for row in document_lines(quotation):
        needed = writer.line_height("body") + writer.line_height("small") * len(row.description_lines)
        if writer.y + needed > DOCUMENT_HEIGHT_PX - DOCUMENT_MARGIN_PX - _FOOTER_HEIGHT_PX:
            writer.new_page()
            table_header()
        writer.text(left + _COL_INDEX, str(row.index))
        writer.text(left + _COL_NAME, row.name)
        writer.text(left + _COL_PRICE, row.unit_price, right_align=True)
        writer.text(left + _COL_QTY, row.quantity, right_align=True)
        writer.text(left + _COL_TOTAL, row.total, right_align=True)
        writer.advance()
        for bullet in row.description_lines:
            writer.text(left + _COL_NAME + 10, bullet, "small", fill=_MUTED)
            writer.advance("small")
        writer.rule(left, right)

    # Totals
    subtotal = document_subtotal(quotation)
    writer.ensure_room(writer.line_height("body") * 4)
    writer.advance()
    writer.text(left + _COL_QTY - 200, "Subtotal:")
    writer.text(left + _COL_TOTAL, format_money(subtotal), right_align=True)
    writer.advance()
    if quotation.discount > 0:
        writer.text(left + _COL_QTY - 200, f"Discount ({quotation.discount:g}%):", fill=(220, 38, 38))
        writer.text(
            left + _COL_TOTAL,
            f"-{format_money(discount_amount(subtotal, quotation.discount))}",
            fill=(220, 38, 38),
            right_align=True,
        )
        writer.advance()
    writer.rule(left + _COL_QTY - 200, left + _COL_TOTAL)
    writer.text(left + _COL_QTY - 200, "TOTAL:", fill=_ACCENT)
    writer.text(left + _COL_TOTAL, format_money(quotation.total), fill=_ACCENT, right_align=True)
    writer.advance()
    writer.advance()

    # Notes
    writer.ensure_room(writer.line_height("small") * (len(DOCUMENT_NOTES) + 2))
    writer.text(left, "IMPORTANT NOTES")
    writer.advance()
    for note in DOCUMENT_NOTES:
        writer.text(left, f"• {note}", "small", fill=_MUTED)
        writer.advance("small")

    _draw_footer(writer, quotation, vendor, issued)

    first, *rest = writer.pages
    first.save(output, "PDF", resolution=float(DOCUMENT_DPI), save_all=True, append_images=rest)
    return output
