"""Bill totals: subtotal, GST, discount, balance and payment status.

All money is integer paise. Tax and percentage discounts are rounded half-up
to whole paise, so recomputing the same inputs always yields the same totals.
Tax is applied before the discount.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from couture.errors import ValidationError
from couture.models.bill import BillTotals, ChargeBreakdown, DiscountKind, DiscountSpec, LineItem, PaymentStatus

MAX_TAX_PERCENT = Decimal("100")

_HUNDRED = Decimal("100")


def _percent_of(paise: int, percent: Decimal) -> int:
    """Return ``percent`` % of ``paise``, rounded half-up to whole paise."""
    value = Decimal(paise) * percent / _HUNDRED
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _validate(
    line_items: Sequence[LineItem],
    breakdown: ChargeBreakdown,
    tax_percent: Decimal,
    discount: DiscountSpec,
    paid_amount: int,
) -> None:
    if not tax_percent.is_finite():
        raise ValidationError("tax_percent", f"must be a finite number, got {tax_percent}")
    if not (Decimal("0") <= tax_percent <= MAX_TAX_PERCENT):
        raise ValidationError("tax_percent", f"must be between 0 and {MAX_TAX_PERCENT}, got {tax_percent}")

    for i, item in enumerate(line_items):
        if item.quantity < 1:
            raise ValidationError(f"items[{i}].quantity", f"must be a positive integer, got {item.quantity}")
        if item.unit_rate < 0:
            raise ValidationError(f"items[{i}].unit_rate", f"must not be negative, got {item.unit_rate}")

    for name, value in breakdown.model_dump().items():
        if value < 0:
            raise ValidationError(f"breakdown.{name}", f"must not be negative, got {value}")

    if not discount.amount.is_finite():
        raise ValidationError("discount.amount", f"must be a finite number, got {discount.amount}")
    if discount.amount < 0:
        raise ValidationError("discount.amount", f"must not be negative, got {discount.amount}")

    if paid_amount < 0:
        raise ValidationError("paid_amount", f"must not be negative, got {paid_amount}")


def classify_payment(grand_total: int, paid_amount: int) -> PaymentStatus:
    """Classify a bill. An empty bill (nothing owed) counts as paid."""
    if grand_total == 0:
        return PaymentStatus.PAID
    if grand_total - paid_amount <= 0:
        return PaymentStatus.PAID
    if paid_amount == 0:
        return PaymentStatus.UNPAID
    return PaymentStatus.PARTIAL


def compute_totals(
    line_items: Sequence[LineItem],
    breakdown: ChargeBreakdown | None = None,
    tax_percent: Decimal | int | str = Decimal("0"),
    discount: DiscountSpec | None = None,
    paid_amount: int = 0,
) -> BillTotals:
    """Compute the derived totals of a bill from its current inputs.

    Raises:
        ValidationError: naming the first offending field.
    """
    breakdown = breakdown or ChargeBreakdown()
    discount = discount or DiscountSpec()
    try:
        tax_percent = Decimal(str(tax_percent))
    except InvalidOperation:
        raise ValidationError("tax_percent", f"must be a number, got {tax_percent!r}") from None

    _validate(line_items, breakdown, tax_percent, discount, paid_amount)

    subtotal = sum(item.line_amount for item in line_items) + breakdown.total
    tax_amount = _percent_of(subtotal, tax_percent)

    if discount.kind == DiscountKind.PERCENTAGE:
        discount_amount = _percent_of(subtotal, discount.amount)
    else:
        discount_amount = int(discount.amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    discount_amount = min(max(discount_amount, 0), subtotal + tax_amount)

    grand_total = max(0, subtotal + tax_amount - discount_amount)
    balance = grand_total - paid_amount

    return BillTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        discount_amount=discount_amount,
        grand_total=grand_total,
        paid_amount=paid_amount,
        balance=balance,
        status=classify_payment(grand_total, paid_amount),
    )
