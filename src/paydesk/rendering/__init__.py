"""Invoice document renderers."""

from paydesk.rendering.pdf import PdfInvoiceRenderer
from paydesk.rendering.image import ImageInvoiceRenderer
from paydesk.rendering.export import export_invoice, document_filename, save_document

__all__ = [
    "PdfInvoiceRenderer",
    "ImageInvoiceRenderer",
    "export_invoice",
    "document_filename",
    "save_document",
]
