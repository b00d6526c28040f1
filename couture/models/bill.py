from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class DiscountKind(str, Enum):
    FLAT = "flat"
    PERCENTAGE = "percentage"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class LineItem(BaseModel):
    id: str
    description: str
    quantity: int = 1
    unit_rate: int = 0  # paise

    @computed_field  # type: ignore[prop-decorator]
    @property
    def line_amount(self) -> int:
        return self.quantity * self.unit_rate


class ChargeBreakdown(BaseModel):
    model_config = ConfigDict(extra="forbid")

    fabric: int = 0  # paise
    stitching: int = 0
    accessories: int = 0
    customization: int = 0
    other_charges: int = 0

    @property
    def total(self) -> int:
        return self.fabric + self.stitching + self.accessories + self.customization + self.other_charges


class DiscountSpec(BaseModel):
    # paise for FLAT, percent of the subtotal for PERCENTAGE
    amount: Decimal = Decimal("0")
    kind: DiscountKind = DiscountKind.FLAT


class BillTotals(BaseModel):
    subtotal: int
    tax_amount: int
    discount_amount: int
    grand_total: int
    paid_amount: int
    balance: int
    status: PaymentStatus

    @property
    def is_overpaid(self) -> bool:
        return self.balance < 0


class BankDetails(BaseModel):
    account_name: str = ""
    account_number: str = ""
    ifsc: str = ""
    bank_name: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.account_number and self.ifsc)


class BillDraft(BaseModel):
    """Form state of a bill while it is being edited."""

    customer_id: str = ""
    customer_name: str
    customer_phone: str = ""
    customer_email: str = ""
    customer_address: str = ""
    order_id: str = ""
    items: list[LineItem] = []
    breakdown: ChargeBreakdown = Field(default_factory=ChargeBreakdown)
    tax_percent: Decimal = Decimal("0")
    discount: DiscountSpec = Field(default_factory=DiscountSpec)
    paid_amount: int = 0  # paise
    qr_amount: int | None = None  # paise; None means "the balance"
    notes: str = ""
    due_date: str | None = None


class Bill(BaseModel):
    bill_id: str
    customer_id: str = ""
    customer_name: str
    customer_phone: str = ""
    customer_email: str = ""
    customer_address: str = ""
    order_id: str = ""
    items: list[LineItem] = []
    breakdown: ChargeBreakdown = Field(default_factory=ChargeBreakdown)
    tax_percent: Decimal = Decimal("0")
    discount: DiscountSpec = Field(default_factory=DiscountSpec)
    subtotal: int = 0  # paise
    tax_amount: int = 0
    discount_amount: int = 0
    total_amount: int = 0
    paid_amount: int = 0
    balance: int = 0
    status: PaymentStatus = PaymentStatus.UNPAID
    qr_amount: int | None = None
    bank_details: BankDetails | None = None
    upi_id: str = ""
    upi_link: str = ""
    pdf_path: str | None = None
    notes: str = ""
    due_date: str | None = None
    date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def totals(self) -> BillTotals:
        return BillTotals(
            subtotal=self.subtotal,
            tax_amount=self.tax_amount,
            discount_amount=self.discount_amount,
            grand_total=self.total_amount,
            paid_amount=self.paid_amount,
            balance=self.balance,
            status=self.status,
        )

    def to_draft(self) -> BillDraft:
        return BillDraft(
            customer_id=self.customer_id,
            customer_name=self.customer_name,
            customer_phone=self.customer_phone,
            customer_email=self.customer_email,
            customer_address=self.customer_address,
            order_id=self.order_id,
            items=[item.model_copy() for item in self.items],
            breakdown=self.breakdown.model_copy(),
            tax_percent=self.tax_percent,
            discount=self.discount.model_copy(),
            paid_amount=self.paid_amount,
            qr_amount=self.qr_amount,
            notes=self.notes,
            due_date=self.due_date,
        )
