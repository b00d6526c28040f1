from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def _group_indian(rupees: int) -> str:
    digits = str(rupees)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(paise: int, symbol: str = "₹") -> str:
    """Format paise as an INR string with Indian grouping: 12345650 -> '₹1,23,456.50'"""
    sign = "-" if paise < 0 else ""
    rupees, fraction = divmod(abs(paise), 100)
    return f"{sign}{symbol}{_group_indian(rupees)}.{fraction:02d}"


def parse_inr(text: str) -> int | None:
    """Parse an INR amount string into paise. Returns None on invalid input.

    Accepts formats like '1200', '1200.50', '1,200.50', '₹ 99', 'Rs. 99'.
    """
    text = text.strip()
    for token in ("₹", "Rs.", "Rs", "INR"):
        text = text.replace(token, "")
    text = text.replace(",", "").strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
