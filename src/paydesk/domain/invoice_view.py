"""Invoice view model shared by the PDF and image renderers.

build_invoice_view turns one InvoiceDocument into an ordered list of labelled
entries. Every number and string that appears on an invoice is decided here;
the renderers only decide where and how to draw each entry. Entry order is
the drawing order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from paydesk.domain.calculator import ZERO, conversion_amount
from paydesk.domain.entities import InvoiceDocument, PayoutCurrency
from paydesk.utils.formatting import (
    PLACEHOLDER,
    format_long_date,
    format_money,
    format_percentage,
    format_rate,
)

NOT_AVAILABLE = "N/A"
BANK_NOT_SPECIFIED = "Bank Not Specified"


@dataclass(frozen=True)
class Branding:
    """Brand details printed on every invoice."""

    name: str = "PAING THU"
    domain: str = "paingthu.com"
    contact_lines: tuple[str, ...] = (
        "+6691 333 7003",
        "https://www.paingthu.com",
        "Nakhon Pathom, Thailand",
    )
    thank_you: str = "Thank you for your business!"


DEFAULT_BRANDING = Branding()


class Section(str, Enum):
    """Invoice regions, in drawing order."""

    HEADER = "header"
    META = "meta"
    BILL_TO = "bill_to"
    DETAILS = "details"
    LINE_ITEMS = "line_items"
    PAYOUT = "payout"
    FOOTER = "footer"


class Style(str, Enum):
    """Visual role of an entry; each renderer maps these to fonts and colors."""

    BRAND = "brand"
    TITLE = "title"
    CAPTION = "caption"
    HEADING = "heading"
    STRONG = "strong"
    NORMAL = "normal"
    MUTED = "muted"
    TABLE_HEADER = "table_header"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    TOTAL = "total"
    CONVERSION = "conversion"
    BAND = "band"
    ACCENT = "accent"


@dataclass(frozen=True)
class ViewEntry:
    """One piece of invoice content.

    Entries with both a label and a value are drawn either as "label: value"
    (details, bill-to) or as a two-column row (line items, payout band).
    """

    section: Section
    key: str
    label: Optional[str]
    value: Optional[str]
    style: Style

    @property
    def text(self) -> str:
        if self.label and self.value is not None:
            return f"{self.label}: {self.value}"
        return self.label or self.value or ""


@dataclass(frozen=True)
class InvoiceView:
    """Ordered invoice content plus the watermark text."""

    invoice_number: str
    entries: tuple[ViewEntry, ...]
    watermark: str

    def section(self, section: Section) -> list[ViewEntry]:
        return [entry for entry in self.entries if entry.section is section]

    def get(self, key: str) -> Optional[ViewEntry]:
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    def texts(self) -> list[str]:
        """All strings a renderer draws, in order, excluding the watermark."""
        strings = []
        for entry in self.entries:
            if entry.section in (Section.LINE_ITEMS, Section.PAYOUT):
                strings.extend(s for s in (entry.label, entry.value) if s)
            else:
                strings.append(entry.text)
        return strings


def resolve_payout_id(document: InvoiceDocument) -> str:
    """Payout ID for the transaction's source platform.

    Uses the ID stored on the transaction, then the client's platform entry
    with the same name, and finally "N/A".
    """
    transaction = document.transaction
    if transaction.source_platform_payout_id:
        return transaction.source_platform_payout_id

    for platform in document.client.platform_details:
        if platform.platform_name == transaction.source_platform and platform.payout_id:
            return platform.payout_id
    return NOT_AVAILABLE


def shows_conversion(document: InvoiceDocument) -> bool:
    """Whether the MMK rate and conversion rows are printed."""
    transaction = document.transaction
    return (
        transaction.payout_currency is PayoutCurrency.MMK
        and transaction.exchange_rate_mmk is not None
        and transaction.exchange_rate_mmk > ZERO
    )


def _entry(section, key, label=None, value=None, style=Style.NORMAL) -> ViewEntry:
    return ViewEntry(section=section, key=key, label=label, value=value, style=style)


def build_invoice_view(
    document: InvoiceDocument, branding: Branding = DEFAULT_BRANDING
) -> InvoiceView:
    """Build the ordered invoice content for a document.

    Args:
        document: Invoice with its transaction and client
        branding: Brand name, domain and contact lines

    Returns:
        InvoiceView whose entries follow the fixed invoice order
    """
    invoice = document.invoice
    transaction = document.transaction
    client = document.client
    currency = transaction.payout_currency.value
    converted = shows_conversion(document)

    entries = [_entry(Section.HEADER, "brand", value=branding.name, style=Style.BRAND)]

    # Invoice metadata, right-aligned
    entries.append(_entry(Section.META, "title", value="INVOICE", style=Style.TITLE))
    entries.append(
        _entry(Section.META, "invoice_number", value=invoice.invoice_number, style=Style.STRONG)
    )
    entries.append(
        _entry(Section.META, "invoice_date", value=format_long_date(invoice.created_at))
    )
    for position, line in enumerate(branding.contact_lines):
        entries.append(_entry(Section.META, f"contact_{position}", value=line))

    # Bill-to block, left-aligned
    entries.append(_entry(Section.BILL_TO, "bill_to", value="BILL TO", style=Style.CAPTION))
    entries.append(_entry(Section.BILL_TO, "client_name", value=client.name, style=Style.HEADING))
    if client.phone:
        entries.append(_entry(Section.BILL_TO, "phone", "Phone", client.phone))
    destination = transaction.payment_destination
    if destination is not None:
        entries.append(
            _entry(
                Section.BILL_TO,
                "bank",
                destination.bank_name,
                destination.account_number,
                Style.STRONG,
            )
        )
        if destination.account_name:
            entries.append(
                _entry(Section.BILL_TO, "account_name", value=destination.account_name, style=Style.MUTED)
            )
    else:
        entries.append(
            _entry(Section.BILL_TO, "bank_missing", value=BANK_NOT_SPECIFIED, style=Style.MUTED)
        )

    # Transaction details box
    entries.append(
        _entry(Section.DETAILS, "details", value="TRANSACTION DETAILS", style=Style.HEADING)
    )
    entries.append(
        _entry(
            Section.DETAILS,
            "transaction_date",
            "Transaction Date",
            format_long_date(transaction.transaction_date),
        )
    )
    if transaction.source_platform:
        entries.append(
            _entry(Section.DETAILS, "source_platform", "Source Platform", transaction.source_platform)
        )
        entries.append(_entry(Section.DETAILS, "payout_id", "Payout ID", resolve_payout_id(document)))
    entries.append(_entry(Section.DETAILS, "payout_currency", "Payout Currency", currency))
    if converted:
        entries.append(
            _entry(
                Section.DETAILS,
                "exchange_rate",
                "Exchange Rate",
                f"1 THB = {format_rate(transaction.exchange_rate_mmk)} MMK",
            )
        )

    # Amounts table
    entries.append(
        _entry(Section.LINE_ITEMS, "table_header", "Description", "Amount", Style.TABLE_HEADER)
    )
    if transaction.original_amount_usd:
        entries.append(
            _entry(
                Section.LINE_ITEMS,
                "original_amount_usd",
                "Original Amount (USD)",
                f"${format_money(transaction.original_amount_usd)}",
                Style.POSITIVE,
            )
        )
    entries.append(
        _entry(
            Section.LINE_ITEMS,
            "incoming_amount",
            "Incoming Amount (THB)",
            f"{format_money(invoice.total_amount)} THB",
            Style.POSITIVE,
        )
    )
    entries.append(
        _entry(
            Section.LINE_ITEMS,
            "commission",
            f"Commission ({format_percentage(client.commission_percentage)}%)",
            f"-{format_money(invoice.commission_amount)} THB",
            Style.NEGATIVE,
        )
    )
    entries.append(
        _entry(
            Section.LINE_ITEMS,
            "net_amount",
            "Net in THB",
            f"{format_money(invoice.net_amount)} THB",
            Style.TOTAL,
        )
    )
    if converted:
        entries.append(
            _entry(
                Section.LINE_ITEMS,
                "conversion",
                f"Conversion ({format_money(invoice.net_amount)} THB x "
                f"{format_rate(transaction.exchange_rate_mmk)})",
                f"{format_money(conversion_amount(invoice.net_amount, transaction.exchange_rate_mmk))} MMK",
                Style.CONVERSION,
            )
        )

    # Payout band
    payout_value = (
        f"{format_money(transaction.payout_amount)} {currency}"
        if transaction.payout_amount is not None
        else PLACEHOLDER
    )
    entries.append(_entry(Section.PAYOUT, "payout", "PAYOUT AMOUNT", payout_value, Style.BAND))

    entries.append(_entry(Section.FOOTER, "thank_you", value=branding.thank_you, style=Style.ACCENT))

    return InvoiceView(
        invoice_number=invoice.invoice_number,
        entries=tuple(entries),
        watermark=branding.domain,
    )
