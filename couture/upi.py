"""UPI deep-link builder and QR code renderer.

Builds the ``upi://pay`` URI that wallet apps open to pre-fill a payment and
renders it as a PNG QR code. The URI is the authoritative artifact; the image
can be regenerated from it at any time.
"""

from __future__ import annotations

import asyncio
import logging
from io import BytesIO
from urllib.parse import quote

import qrcode
from pydantic import BaseModel
from qrcode.image.pil import PilImage

from couture.errors import EncodingError, ValidationError

logger = logging.getLogger(__name__)

UPI_SCHEME = "upi"


def _encode(value: str) -> str:
    """Percent-encode a query value; spaces become %20, not '+'."""
    return quote(value, safe="")


def _format_amount(paise: int) -> str:
    rupees, fraction = divmod(paise, 100)
    return f"{rupees}.{fraction:02d}"


def build_payment_uri(
    *,
    payee_handle: str,
    payer_name: str,
    amount: int,
    reference: str,
    currency: str = "INR",
) -> str:
    """Build a UPI payment deep link.

    Args:
        payee_handle: The payee's UPI id (VPA), e.g. ``shop@okbank``.
        payer_name: Name shown in the payment app.
        amount: Amount in paise. Must be positive.
        reference: Transaction note, usually the bill id.
        currency: ISO currency code (UPI only settles INR).

    Returns:
        ``upi://pay?pa=...&pn=...&am=...&cu=...&tn=...``
    """
    if not payee_handle.strip():
        raise ValidationError("payee_handle", "must not be empty")
    if amount <= 0:
        raise ValidationError("amount", f"must be greater than 0, got {amount}")

    return (
        f"{UPI_SCHEME}://pay"
        f"?pa={payee_handle.strip()}"
        f"&pn={_encode(payer_name)}"
        f"&am={_format_amount(amount)}"
        f"&cu={currency}"
        f"&tn={_encode(reference)}"
    )


def generate_qrcode_png(uri: str, box_size: int = 10, border: int = 2) -> bytes:
    """Render ``uri`` as a QR code and return PNG bytes.

    Raises:
        EncodingError: if the QR library fails for any reason.
    """
    if not uri:
        raise EncodingError("Cannot encode an empty URI")
    try:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=box_size,
            border=border,
        )
        qr.add_data(uri)
        qr.make(fit=True)

        img: PilImage = qr.make_image(fill_color="black", back_color="white")

        buf = BytesIO()
        img.save(buf, format="PNG")
    except Exception as exc:
        raise EncodingError(f"QR rendering failed: {exc}") from exc
    return buf.getvalue()


async def render_as_scannable_image(uri: str, box_size: int = 10, border: int = 2) -> bytes:
    """Async variant of :func:`generate_qrcode_png`. One attempt, no retry."""
    return await asyncio.to_thread(generate_qrcode_png, uri, box_size, border)


class UpiConfig(BaseModel):
    payee_handle: str
    currency: str = "INR"
    qr_box_size: int = 10
    qr_border: int = 2

    @classmethod
    def from_settings(cls) -> UpiConfig:
        from couture.settings import settings

        return cls(
            payee_handle=settings.upi_id,
            qr_box_size=settings.qr_box_size,
            qr_border=settings.qr_border,
        )


class PaymentLinkEncoder:
    def __init__(self, config: UpiConfig) -> None:
        self.config = config

    @property
    def is_configured(self) -> bool:
        return bool(self.config.payee_handle.strip())

    def build_uri(self, payer_name: str, amount: int, reference: str) -> str:
        uri = build_payment_uri(
            payee_handle=self.config.payee_handle,
            payer_name=payer_name,
            amount=amount,
            reference=reference,
            currency=self.config.currency,
        )
        logger.debug("UPI link built for reference=%s amount=%d", reference, amount)
        return uri

    def render_png(self, uri: str) -> bytes:
        return generate_qrcode_png(uri, box_size=self.config.qr_box_size, border=self.config.qr_border)

    async def render(self, uri: str) -> bytes:
        return await render_as_scannable_image(uri, box_size=self.config.qr_box_size, border=self.config.qr_border)
