"""Financial calculator.

Pure Decimal arithmetic for commission, net and payout amounts. Money is not
rounded between steps; quantize_money is applied by callers when a value is
persisted or displayed. Rates and percentages are rounded to four places on
the way in, matching their stored precision, so the payout computed here is
the one the stored rate reproduces.

Two computations share the same base amount but are deliberately separate:

* calculate_payout runs when a transaction is recorded and uses the client's
  commission rate at that moment.
* calculate_invoice_amounts runs when an invoice is generated and uses the
  client's commission rate at that later moment, plus the transaction fees.

If the client's rate changes in between, the invoice's net amount differs
from the transaction's net payable. That is the observed behavior and is kept.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from paydesk.domain.entities import PayoutCurrency
from paydesk.domain.errors import ValidationError

CENT = Decimal("0.01")
RATE_QUANTUM = Decimal("0.0001")
HUNDRED = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class PayoutSplit:
    """Transaction-time split of an incoming amount."""

    commission: Decimal
    net_payable_thb: Decimal
    payout_amount: Decimal
    payout_currency: PayoutCurrency


@dataclass(frozen=True)
class InvoiceAmounts:
    """Invoice-time amounts derived from the client's current rate."""

    total_amount: Decimal
    commission_amount: Decimal
    net_amount: Decimal


def to_decimal(value, field_name: str = "amount") -> Decimal:
    """Convert an int, str, float or Decimal to Decimal.

    Floats are converted through str() so 0.1 becomes Decimal("0.1") rather
    than its binary expansion.

    Raises:
        ValidationError: If the value is not numeric
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(f"Invalid {field_name}: {value!r}") from None
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        raise ValidationError(f"Invalid {field_name}: {value!r}")

    if not result.is_finite():
        raise ValidationError(f"Invalid {field_name}: {value!r}")
    return result


def quantize_money(value: Decimal) -> Decimal:
    """Round a money value to cents, half up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_rate(value: Decimal) -> Decimal:
    """Round an exchange rate or percentage to four places, half up."""
    return value.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


def validate_percentage(percentage) -> Decimal:
    """Return the percentage as Decimal, checking it lies in [0, 100].

    The result is rounded to four decimal places.

    Raises:
        ValidationError: If the percentage is out of range
    """
    pct = to_decimal(percentage, "commission percentage")
    if pct < ZERO or pct > HUNDRED:
        raise ValidationError(
            f"Commission percentage must be between 0 and 100, got {pct}"
        )
    return quantize_rate(pct)


def _non_negative(value, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < ZERO:
        raise ValidationError(f"{field_name.capitalize()} cannot be negative, got {amount}")
    return amount


def calculate_commission(amount, percentage) -> Decimal:
    """Return amount * percentage / 100."""
    return _non_negative(amount, "amount") * validate_percentage(percentage) / HUNDRED


def calculate_payout(
    incoming_amount_thb,
    commission_percentage,
    currency: PayoutCurrency | str,
    exchange_rate_mmk=ZERO,
) -> PayoutSplit:
    """Split an incoming THB amount into commission, net and payout.

    For MMK payouts the net is multiplied by the exchange rate. A zero rate
    means the rate is not known yet and yields a zero payout, not an error.

    Args:
        incoming_amount_thb: Gross amount received in THB
        commission_percentage: Client commission rate, 0-100
        currency: Client's preferred payout currency
        exchange_rate_mmk: THB to MMK rate (ignored for THB payouts), rounded
            to four places before use

    Returns:
        PayoutSplit with unrounded Decimal values

    Raises:
        ValidationError: If an amount or rate is negative or the percentage
            is out of range
    """
    incoming = _non_negative(incoming_amount_thb, "incoming amount")
    rate = quantize_rate(
        _non_negative(
            exchange_rate_mmk if exchange_rate_mmk is not None else ZERO, "exchange rate"
        )
    )
    payout_currency = PayoutCurrency.parse(currency)

    commission = calculate_commission(incoming, commission_percentage)
    net_payable = incoming - commission
    if payout_currency is PayoutCurrency.MMK:
        payout_amount = net_payable * rate
    else:
        payout_amount = net_payable

    return PayoutSplit(
        commission=commission,
        net_payable_thb=net_payable,
        payout_amount=payout_amount,
        payout_currency=payout_currency,
    )


def calculate_invoice_amounts(total_amount, commission_percentage, fees=ZERO) -> InvoiceAmounts:
    """Compute invoice commission and net from the client's current rate.

    net_amount = total_amount - commission_amount - fees
    """
    total = _non_negative(total_amount, "total amount")
    fee_amount = _non_negative(fees if fees is not None else ZERO, "fees")
    commission = calculate_commission(total, commission_percentage)
    return InvoiceAmounts(
        total_amount=total,
        commission_amount=commission,
        net_amount=total - commission - fee_amount,
    )


def conversion_amount(net_amount: Decimal, exchange_rate_mmk: Decimal) -> Decimal:
    """Return the MMK equivalent of a THB net amount."""
    return to_decimal(net_amount) * to_decimal(exchange_rate_mmk, "exchange rate")
