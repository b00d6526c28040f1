from __future__ import annotations

import logging
from datetime import datetime

from couture.calculator import compute_totals
from couture.constants import IST_TZ
from couture.errors import EncodingError, ValidationError
from couture.messages import whatsapp_templates
from couture.models.bill import BankDetails, Bill, BillDraft, BillTotals
from couture.pdf.invoice import InvoicePDF
from couture.repositories.base import BillRepository
from couture.settings import settings
from couture.storage.base import StorageBackend
from couture.upi import PaymentLinkEncoder

logger = logging.getLogger(__name__)

BILL_ID_SPACE = 1_000_000


def generate_bill_id(now: datetime) -> str:
    """``BILL`` followed by the last six digits of the epoch-millisecond timestamp."""
    millis = int(now.timestamp() * 1000)
    return f"BILL{millis % BILL_ID_SPACE:06d}"


def _storage_key(bill_id: str) -> str:
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{bill_id}.pdf"
    return f"{bill_id}.pdf"


class BillService:
    def __init__(
        self,
        bill_repo: BillRepository,
        storage: StorageBackend,
        encoder: PaymentLinkEncoder,
        business_name: str = "",
        bank_details: BankDetails | None = None,
    ) -> None:
        self.bill_repo = bill_repo
        self.storage = storage
        self.encoder = encoder
        self.business_name = business_name
        self.bank_details = bank_details
        self.pdf_generator = InvoicePDF()

    @staticmethod
    def preview(draft: BillDraft) -> BillTotals:
        """Recompute totals for the current form state without saving anything."""
        return compute_totals(draft.items, draft.breakdown, draft.tax_percent, draft.discount, draft.paid_amount)

    def _payment_link(self, bill: Bill) -> tuple[str, bytes | None]:
        """Return (upi_link, qrcode_png). The link survives a QR rendering failure."""
        if not self.encoder.is_configured:
            return "", None

        amount = bill.qr_amount if bill.qr_amount is not None else bill.balance
        if amount <= 0:
            return "", None

        link = self.encoder.build_uri(bill.customer_name, amount, bill.bill_id)
        try:
            png = self.encoder.render_png(link)
        except EncodingError:
            logger.warning("QR rendering failed for bill %s, falling back to the link", bill.bill_id, exc_info=True)
            png = None
        return link, png

    def _apply(self, bill: Bill, draft: BillDraft) -> Bill:
        """Copy draft inputs and freshly computed totals onto ``bill``."""
        totals = self.preview(draft)
        if draft.qr_amount is not None and draft.qr_amount < 0:
            raise ValidationError("qr_amount", f"must not be negative, got {draft.qr_amount}")

        return bill.model_copy(
            update={
                "customer_id": draft.customer_id,
                "customer_name": draft.customer_name,
                "customer_phone": draft.customer_phone,
                "customer_email": draft.customer_email,
                "customer_address": draft.customer_address,
                "order_id": draft.order_id,
                "items": list(draft.items),
                "breakdown": draft.breakdown,
                "tax_percent": draft.tax_percent,
                "discount": draft.discount,
                "qr_amount": draft.qr_amount,
                "notes": draft.notes,
                "due_date": draft.due_date or None,
                "subtotal": totals.subtotal,
                "tax_amount": totals.tax_amount,
                "discount_amount": totals.discount_amount,
                "total_amount": totals.grand_total,
                "paid_amount": totals.paid_amount,
                "balance": totals.balance,
                "status": totals.status,
            }
        )

    def _finalize(self, bill: Bill) -> Bill:
        """Build the payment link, render and store the PDF, then upsert once."""
        link, png = self._payment_link(bill)
        bill.upi_id = self.encoder.config.payee_handle if link else ""
        bill.upi_link = link
        bill.bank_details = self.bank_details

        pdf_bytes = self.pdf_generator.generate(bill, self.business_name, qrcode_png=png)
        key = _storage_key(bill.bill_id)
        bill.pdf_path = self.storage.save(key, pdf_bytes)
        logger.info("PDF stored at %s for bill %s", key, bill.bill_id)

        if bill.balance < 0:
            logger.warning("Bill %s is overpaid by %d paise", bill.bill_id, -bill.balance)

        return self.bill_repo.upsert(bill)

    def _free_bill_id(self, now: datetime) -> str:
        """Timestamp-based id, stepped forward past ids already in the store."""
        bill_id = generate_bill_id(now)
        seq = int(bill_id[4:])
        for _ in range(BILL_ID_SPACE):
            if self.bill_repo.get_by_bill_id(bill_id) is None:
                return bill_id
            logger.warning("Bill id %s already taken, trying the next one", bill_id)
            seq = (seq + 1) % BILL_ID_SPACE
            bill_id = f"BILL{seq:06d}"
        raise RuntimeError("No free bill id left")

    def create_bill(self, draft: BillDraft, now: datetime | None = None) -> Bill:
        now = now or datetime.now(IST_TZ)
        bill = Bill(bill_id=self._free_bill_id(now), customer_name=draft.customer_name, date=now)
        bill = self._apply(bill, draft)
        bill = self._finalize(bill)
        logger.info(
            "Bill created: bill_id=%s, customer=%s, total=%d, status=%s",
            bill.bill_id,
            bill.customer_name,
            bill.total_amount,
            bill.status.value,
        )
        return bill

    def update_bill(self, bill: Bill, draft: BillDraft) -> Bill:
        bill = self._apply(bill, draft)
        bill = self._finalize(bill)
        logger.info("Bill updated: bill_id=%s, total=%d, status=%s", bill.bill_id, bill.total_amount, bill.status.value)
        return bill

    def record_payment(self, bill: Bill, amount: int) -> Bill:
        """Add a payment to the bill and recompute its balance and status."""
        if amount <= 0:
            raise ValidationError("amount", f"must be greater than 0, got {amount}")

        draft = bill.to_draft()
        draft.paid_amount = bill.paid_amount + amount
        # The QR should ask for what is still owed, not a stale amount.
        draft.qr_amount = None
        bill = self.update_bill(bill, draft)
        logger.info("Payment of %d recorded on bill %s", amount, bill.bill_id)
        return bill

    def get_invoice_url(self, pdf_path: str | None) -> str:
        if not pdf_path:
            return ""
        logger.debug("get_invoice_url key=%s", pdf_path)
        return self.storage.get_url(pdf_path)

    def list_bills(self) -> list[Bill]:
        result = self.bill_repo.list_all()
        logger.debug("Listed %d bills", len(result))
        return result

    def get_bill(self, bill_id: str) -> Bill | None:
        result = self.bill_repo.get_by_bill_id(bill_id)
        logger.debug("get_bill bill_id=%s found=%s", bill_id, result is not None)
        return result

    def delete_bill(self, bill_id: str) -> None:
        self.bill_repo.delete(bill_id)
        logger.info("Bill %s deleted", bill_id)

    def notification_templates(self, bill: Bill) -> dict[str, str]:
        return whatsapp_templates(
            business_name=self.business_name,
            customer_name=bill.customer_name,
            bill_id=bill.bill_id,
            total_amount=bill.total_amount,
            balance=bill.balance,
            upi_link=bill.upi_link,
            due_date=bill.due_date,
        )
