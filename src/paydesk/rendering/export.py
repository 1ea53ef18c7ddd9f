"""Render invoices and save them as named files."""

import logging
from pathlib import Path

from paydesk.domain.entities import InvoiceDocument
from paydesk.domain.errors import ValidationError
from paydesk.domain.invoice_view import DEFAULT_BRANDING, Branding
from paydesk.rendering.base import InvoiceRenderer
from paydesk.rendering.image import DEFAULT_SCALE, ImageInvoiceRenderer
from paydesk.rendering.pdf import PdfInvoiceRenderer

logger = logging.getLogger(__name__)

FORMATS = ("pdf", "jpg")


def document_filename(invoice_number: str, fmt: str) -> str:
    """Return the download name for an invoice, e.g. 'INV-000001.pdf'."""
    if fmt not in FORMATS:
        raise ValidationError(f"Unsupported invoice format '{fmt}' (expected one of: {', '.join(FORMATS)})")
    return f"{invoice_number}.{fmt}"


def create_renderer(
    fmt: str, branding: Branding = DEFAULT_BRANDING, scale: int = DEFAULT_SCALE
) -> InvoiceRenderer:
    """Return the renderer for an output format."""
    if fmt == "pdf":
        return PdfInvoiceRenderer(branding)
    if fmt == "jpg":
        return ImageInvoiceRenderer(branding, scale=scale)
    raise ValidationError(f"Unsupported invoice format '{fmt}' (expected one of: {', '.join(FORMATS)})")


def save_document(data: bytes, filename: str, output_dir: str | Path) -> Path:
    """Write rendered bytes to output_dir/filename, creating the directory."""
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_bytes(data)
    logger.info("Saved %s (%d bytes)", path, len(data))
    return path


def export_invoice(
    document: InvoiceDocument,
    fmt: str,
    output_dir: str | Path,
    branding: Branding = DEFAULT_BRANDING,
    scale: int = DEFAULT_SCALE,
) -> Path:
    """Render an invoice in one format and save it.

    Returns:
        Path of the written file

    Raises:
        ValidationError: If the format is unknown
        RenderError: If rendering fails; nothing is written in that case
    """
    filename = document_filename(document.invoice.invoice_number, fmt)
    data = create_renderer(fmt, branding, scale).render(document)
    return save_document(data, filename, output_dir)
