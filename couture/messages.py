from __future__ import annotations

import re
from urllib.parse import quote

from couture.models import format_inr

DEFAULT_COUNTRY_CODE = "91"


def whatsapp_link(phone: str, message: str, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Build a wa.me click-to-chat link, prefixing the country code when missing."""
    digits = re.sub(r"\D", "", phone)
    if not digits.startswith(country_code):
        digits = f"{country_code}{digits}"
    return f"https://wa.me/{digits}?text={quote(message, safe='')}"


def whatsapp_templates(
    *,
    business_name: str,
    customer_name: str,
    bill_id: str,
    total_amount: int,
    balance: int,
    upi_link: str,
    due_date: str | None = None,
) -> dict[str, str]:
    shop = business_name or "us"
    pay_line = f"Pay conveniently via UPI: {upi_link}\n\n" if upi_link else ""
    due_line = f"Due date: {due_date}\n\n" if due_date else ""
    pickup_pay = f" Pay via: {upi_link}" if upi_link else ""
    design_pay = f" Secure payment: {upi_link}" if upi_link else ""

    return {
        "bill_delivery": (
            f"Hello {customer_name}!\n\n"
            f"Your bill {bill_id} for {format_inr(total_amount)} is ready from {shop}.\n\n"
            f"{pay_line}"
            "Thank you for choosing us!"
        ),
        "payment_reminder": (
            f"Dear {customer_name},\n\n"
            f"Friendly reminder: your pending balance for bill {bill_id} is {format_inr(balance)}.\n\n"
            f"{due_line}"
            f"{pay_line}"
            "Thank you for your understanding!"
        ),
        "thank_you": (
            f"Dear {customer_name},\n\n"
            f"Thank you for your payment! We've received your settlement for bill {bill_id}.\n\n"
            f"We truly appreciate your business and look forward to serving you again at {shop}!"
        ),
        "order_ready": (
            f"Hi {customer_name}! Your custom order is ready for pickup. "
            f"Bill {bill_id} - {format_inr(total_amount)}.{pickup_pay}"
        ),
        "alteration_complete": (
            f"Dear {customer_name}, your alteration work is complete! "
            f"Please review bill {bill_id} and make payment. Thanks!"
        ),
        "exclusive_design": (
            f"{customer_name}, your exclusive design is ready! "
            f"Bill {bill_id} for {format_inr(total_amount)}.{design_pay}"
        ),
    }
