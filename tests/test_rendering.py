"""Tests for PDF and JPEG invoice rendering and export."""

import pytest
from datetime import date
from decimal import Decimal

from paydesk.domain.errors import RenderError, ValidationError
from paydesk.domain.invoice_view import build_invoice_view
from paydesk.rendering import (
    ImageInvoiceRenderer,
    PdfInvoiceRenderer,
    document_filename,
    export_invoice,
)
from paydesk.rendering.export import create_renderer


@pytest.fixture
def invoice_document(invoice_service, sample_transaction):
    """A stored THB invoice with its transaction and client."""
    invoice_id = invoice_service.generate_invoice(sample_transaction.id)
    return invoice_service.get_document(invoice_id)


@pytest.fixture
def mmk_document(invoice_service, transaction_service, mmk_client):
    """A stored MMK invoice with conversion rows."""
    transaction_id = transaction_service.create_transaction(
        client_id=mmk_client.id,
        incoming_amount_thb=Decimal("1000.00"),
        transaction_date=date(2024, 3, 15),
        exchange_rate_mmk=Decimal("120"),
        original_amount_usd=Decimal("28.50"),
        bank_account=0,
        platform="Other",
    )
    invoice_id = invoice_service.generate_invoice(transaction_id)
    return invoice_service.get_document(invoice_id)


class TestPdfRenderer:
    """Tests for the PDF backend."""

    def test_renders_pdf(self, invoice_document):
        data = PdfInvoiceRenderer().render(invoice_document)
        assert data.startswith(b"%PDF")

    def test_draws_view_in_order(self, mmk_document):
        renderer = PdfInvoiceRenderer()
        renderer.render(mmk_document)
        assert renderer.drawn_text == build_invoice_view(mmk_document).texts()

    def test_rendering_is_repeatable(self, invoice_document):
        renderer = PdfInvoiceRenderer()
        first = renderer.render(invoice_document)
        first_text = list(renderer.drawn_text)
        second = renderer.render(invoice_document)

        assert first == second
        assert renderer.drawn_text == first_text

    def test_line_items_drawn_before_payout(self, invoice_document):
        renderer = PdfInvoiceRenderer()
        renderer.render(invoice_document)
        texts = renderer.drawn_text

        assert texts.index("Incoming Amount (THB)") < texts.index("Net in THB")
        assert texts.index("Net in THB") < texts.index("PAYOUT AMOUNT")

    def test_draw_failure_becomes_render_error(self, invoice_document, monkeypatch):
        def broken(self, view):
            raise OSError("disk full")

        monkeypatch.setattr(PdfInvoiceRenderer, "_draw", broken)
        with pytest.raises(RenderError, match="disk full"):
            PdfInvoiceRenderer().render(invoice_document)


class TestImageRenderer:
    """Tests for the JPEG backend."""

    def test_renders_jpeg(self, invoice_document):
        data = ImageInvoiceRenderer(scale=1).render(invoice_document)
        assert data[:2] == b"\xff\xd8"

    def test_image_size_follows_scale(self, invoice_document):
        from io import BytesIO
        from PIL import Image

        data = ImageInvoiceRenderer(scale=1).render(invoice_document)
        with Image.open(BytesIO(data)) as image:
            assert image.size == (1800, 2545)
            assert image.format == "JPEG"

    def test_draws_view_in_order(self, mmk_document):
        renderer = ImageInvoiceRenderer(scale=1)
        renderer.render(mmk_document)
        assert renderer.drawn_text == build_invoice_view(mmk_document).texts()

    def test_same_text_as_pdf(self, mmk_document):
        pdf = PdfInvoiceRenderer()
        image = ImageInvoiceRenderer(scale=1)
        pdf.render(mmk_document)
        image.render(mmk_document)
        assert pdf.drawn_text == image.drawn_text

    def test_invalid_scale(self):
        with pytest.raises(ValueError, match="scale"):
            ImageInvoiceRenderer(scale=0)


class TestExport:
    """Tests for file export."""

    def test_document_filename(self):
        assert document_filename("INV-000001", "pdf") == "INV-000001.pdf"
        assert document_filename("INV-000001", "jpg") == "INV-000001.jpg"
        with pytest.raises(ValidationError):
            document_filename("INV-000001", "png")

    def test_unknown_renderer(self):
        with pytest.raises(ValidationError, match="Unsupported invoice format"):
            create_renderer("gif")

    def test_export_pdf(self, invoice_document, tmp_path):
        path = export_invoice(invoice_document, "pdf", tmp_path / "out")

        assert path == tmp_path / "out" / "INV-000001.pdf"
        assert path.read_bytes().startswith(b"%PDF")

    def test_export_jpg(self, invoice_document, tmp_path):
        path = export_invoice(invoice_document, "jpg", tmp_path, scale=1)

        assert path.name == "INV-000001.jpg"
        assert path.read_bytes()[:2] == b"\xff\xd8"

    def test_failed_render_writes_nothing(self, invoice_document, tmp_path, monkeypatch):
        def broken(self, view):
            raise OSError("encoder crashed")

        monkeypatch.setattr(ImageInvoiceRenderer, "_draw", broken)
        with pytest.raises(RenderError):
            export_invoice(invoice_document, "jpg", tmp_path)
        assert list(tmp_path.iterdir()) == []
