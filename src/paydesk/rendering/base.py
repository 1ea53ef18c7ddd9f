"""Common renderer interface."""

import logging
from abc import ABC, abstractmethod

from paydesk.domain.entities import InvoiceDocument
from paydesk.domain.errors import RenderError
from paydesk.domain.invoice_view import DEFAULT_BRANDING, Branding, InvoiceView, build_invoice_view

logger = logging.getLogger(__name__)


class InvoiceRenderer(ABC):
    """Draws an invoice view with one backend and returns the encoded bytes.

    drawn_text holds every string drawn by the last render call, in drawing
    order and without the watermark.
    """

    file_extension: str = ""

    def __init__(self, branding: Branding = DEFAULT_BRANDING):
        self.branding = branding
        self.drawn_text: list[str] = []

    def render(self, document: InvoiceDocument) -> bytes:
        """Render a document.

        Rendering reads the snapshot only, so calling it again is always safe.

        Raises:
            RenderError: If drawing or encoding fails
        """
        view = build_invoice_view(document, self.branding)
        self.drawn_text = []
        try:
            return self._draw(view)
        except RenderError:
            raise
        except Exception as exc:
            logger.error(
                "Failed to render %s for invoice %s: %s",
                self.file_extension,
                view.invoice_number,
                exc,
            )
            raise RenderError(
                f"Could not render invoice {view.invoice_number} as {self.file_extension}: {exc}"
            ) from exc

    def _record(self, text: str) -> str:
        self.drawn_text.append(text)
        return text

    @abstractmethod
    def _draw(self, view: InvoiceView) -> bytes:
        """Draw the view and return encoded bytes."""
        pass
