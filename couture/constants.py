from zoneinfo import ZoneInfo

from couture.models.bill import DiscountKind, PaymentStatus

IST_TZ = ZoneInfo("Asia/Kolkata")

STATUS_LABELS = {
    PaymentStatus.PAID: "Paid",
    PaymentStatus.PARTIAL: "Partial",
    PaymentStatus.UNPAID: "Unpaid",
}

DISCOUNT_LABELS = {DiscountKind.FLAT: "Amount", DiscountKind.PERCENTAGE: "Percentage (%)"}

BREAKDOWN_LABELS = {
    "fabric": "Fabric",
    "stitching": "Stitching",
    "accessories": "Accessories",
    "customization": "Customization",
    "other_charges": "Other Charges",
}


def format_percent(value) -> str:
    """Render a Decimal percent without trailing zeros: 18.00 -> '18'."""
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
