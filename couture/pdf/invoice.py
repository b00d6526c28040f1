from __future__ import annotations

import logging
from io import BytesIO

from fpdf import FPDF

from couture.constants import BREAKDOWN_LABELS, IST_TZ, STATUS_LABELS, format_percent
from couture.models import format_inr
from couture.models.bill import Bill, DiscountKind

logger = logging.getLogger(__name__)

FONT = "Helvetica"

PRIMARY = (124, 58, 237)
PRIMARY_LIGHT = (243, 238, 255)
TEXT = (31, 41, 55)
MUTED = (107, 114, 128)
WHITE = (255, 255, 255)
ROW_ALT = (249, 247, 255)
BORDER = (209, 213, 219)
DANGER = (220, 38, 38)
SUCCESS = (22, 163, 74)


def _money(paise: int) -> str:
    # Core PDF fonts are latin-1 only, so no rupee sign.
    return format_inr(paise, symbol="Rs. ")


def _safe(text: str) -> str:
    return text.encode("latin-1", "replace").decode("latin-1")


class InvoicePDF:
    def generate(self, bill: Bill, business_name: str, qrcode_png: bytes | None = None) -> bytes:
        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=20)

        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_header(pdf, page_w, business_name)
        self._draw_info(pdf, page_w, bill)
        self._draw_table(pdf, page_w, bill)
        self._draw_totals(pdf, page_w, bill)

        if bill.notes:
            self._draw_notes(pdf, page_w, bill.notes)

        self._draw_footer(pdf, page_w, business_name)

        if bill.upi_link:
            pdf.add_page()
            self._draw_upi_page(pdf, page_w, bill, qrcode_png)
            self._draw_footer(pdf, page_w, business_name)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: bill=%s items=%d qr=%s size=%d bytes",
            bill.bill_id,
            len(bill.items),
            bool(qrcode_png),
            len(output),
        )
        return output

    def _draw_header(self, pdf: FPDF, page_w: float, business_name: str) -> None:
        x = pdf.l_margin
        y = pdf.get_y()

        pdf.set_fill_color(*PRIMARY)
        pdf.rect(x, y, page_w, 32, "F")

        pdf.set_y(y + 7)
        pdf.set_text_color(*WHITE)
        pdf.set_font(FONT, "B", 22)
        pdf.cell(0, 10, _safe(business_name or "INVOICE"), align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(FONT, "", 9)
        pdf.cell(0, 7, "Tax Invoice", align="C", new_x="LMARGIN", new_y="NEXT")

        pdf.set_y(y + 40)

    def _draw_info(self, pdf: FPDF, page_w: float, bill: Bill) -> None:
        col_w = page_w / 2
        x = pdf.l_margin
        y = pdf.get_y()

        bill_lines = [f"Bill No: {bill.bill_id}"]
        if bill.date is not None:
            bill_lines.append(f"Date: {bill.date.astimezone(IST_TZ):%d/%m/%Y}")
        if bill.due_date:
            bill_lines.append(f"Due: {bill.due_date}")
        if bill.order_id:
            bill_lines.append(f"Order: {bill.order_id}")

        customer_lines = [f"Name: {bill.customer_name}"]
        if bill.customer_phone:
            customer_lines.append(f"Phone: {bill.customer_phone}")
        if bill.customer_email:
            customer_lines.append(f"Email: {bill.customer_email}")
        if bill.customer_address:
            customer_lines.append(f"Address: {bill.customer_address}")

        for col, (title, lines) in enumerate((("BILL DETAILS", bill_lines), ("CUSTOMER", customer_lines))):
            pdf.set_xy(x + col * col_w, y)
            pdf.set_font(FONT, "B", 8)
            pdf.set_text_color(*MUTED)
            pdf.cell(col_w, 6, title, new_x="LEFT", new_y="NEXT")
            pdf.set_font(FONT, "", 10)
            pdf.set_text_color(*TEXT)
            for line in lines:
                pdf.cell(col_w, 6, _safe(line), new_x="LEFT", new_y="NEXT")

        rows = max(len(bill_lines), len(customer_lines))
        pdf.set_y(y + 6 + rows * 6 + 8)

    def _draw_table(self, pdf: FPDF, page_w: float, bill: Bill) -> None:
        col_desc = page_w * 0.46
        col_qty = page_w * 0.12
        col_rate = page_w * 0.21
        col_amount = page_w * 0.21
        line_h = 9

        pdf.set_fill_color(*PRIMARY)
        pdf.set_text_color(*WHITE)
        pdf.set_font(FONT, "B", 9)
        pdf.cell(col_desc, line_h, "  Description", fill=True)
        pdf.cell(col_qty, line_h, "Qty", fill=True, align="R")
        pdf.cell(col_rate, line_h, "Rate", fill=True, align="R")
        pdf.cell(col_amount, line_h, "Amount  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        rows: list[tuple[str, str, str, int]] = [
            (item.description, str(item.quantity), _money(item.unit_rate), item.line_amount) for item in bill.items
        ]
        for name, label in BREAKDOWN_LABELS.items():
            value = getattr(bill.breakdown, name)
            if value:
                rows.append((label, "", "", value))

        pdf.set_text_color(*TEXT)
        pdf.set_font(FONT, "", 10)
        for i, (desc, qty, rate, amount) in enumerate(rows):
            pdf.set_fill_color(*(ROW_ALT if i % 2 == 0 else WHITE))
            pdf.cell(col_desc, line_h, _safe(f"  {desc}"), fill=True)
            pdf.cell(col_qty, line_h, qty, fill=True, align="R")
            pdf.cell(col_rate, line_h, rate, fill=True, align="R")
            pdf.cell(col_amount, line_h, f"{_money(amount)}  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_draw_color(*BORDER)
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)

    def _draw_totals(self, pdf: FPDF, page_w: float, bill: Bill) -> None:
        col_label = page_w * 0.72
        col_amount = page_w * 0.28
        pdf.ln(4)

        if bill.discount.kind == DiscountKind.PERCENTAGE:
            discount_label = f"Discount ({format_percent(bill.discount.amount)}%)"
        else:
            discount_label = "Discount"

        lines = [
            ("Subtotal", _money(bill.subtotal)),
            (f"GST ({format_percent(bill.tax_percent)}%)", _money(bill.tax_amount)),
            (discount_label, f"-{_money(bill.discount_amount)}"),
        ]
        pdf.set_font(FONT, "", 10)
        pdf.set_text_color(*TEXT)
        for label, value in lines:
            pdf.cell(col_label, 7, f"{label}  ", align="R")
            pdf.cell(col_amount, 7, f"{value}  ", align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.ln(2)
        pdf.set_fill_color(*PRIMARY)
        pdf.set_text_color(*WHITE)
        pdf.set_font(FONT, "B", 12)
        pdf.cell(col_label, 12, "TOTAL  ", fill=True, align="R")
        pdf.cell(col_amount, 12, f"{_money(bill.total_amount)}  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.ln(2)
        pdf.set_font(FONT, "", 10)
        pdf.set_text_color(*SUCCESS)
        pdf.cell(col_label, 7, "Paid  ", align="R")
        pdf.cell(col_amount, 7, f"{_money(bill.paid_amount)}  ", align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_font(FONT, "B", 11)
        pdf.set_text_color(*(DANGER if bill.balance > 0 else SUCCESS))
        pdf.cell(col_label, 8, f"Balance ({STATUS_LABELS[bill.status]})  ", align="R")
        pdf.cell(col_amount, 8, f"{_money(bill.balance)}  ", align="R", new_x="LMARGIN", new_y="NEXT")

    def _draw_notes(self, pdf: FPDF, page_w: float, notes: str) -> None:
        pdf.ln(10)
        pdf.set_font(FONT, "B", 8)
        pdf.set_text_color(*MUTED)
        pdf.cell(0, 6, "NOTES", new_x="LMARGIN", new_y="NEXT")

        pdf.set_fill_color(*PRIMARY_LIGHT)
        pdf.set_text_color(*TEXT)
        pdf.set_font(FONT, "", 10)
        pdf.multi_cell(page_w, 6, _safe(notes), fill=True)

    def _draw_upi_page(self, pdf: FPDF, page_w: float, bill: Bill, qrcode_png: bytes | None) -> None:
        x = pdf.l_margin
        y = pdf.get_y()

        pdf.set_fill_color(*PRIMARY)
        pdf.rect(x, y, page_w, 26, "F")
        pdf.set_y(y + 7)
        pdf.set_text_color(*WHITE)
        pdf.set_font(FONT, "B", 18)
        pdf.cell(0, 12, "PAY VIA UPI", align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(12)

        if qrcode_png:
            qr_size = 55
            qr_y = pdf.get_y()
            pdf.image(BytesIO(qrcode_png), x=x + (page_w - qr_size) / 2, y=qr_y, w=qr_size, h=qr_size)
            pdf.set_y(qr_y + qr_size + 4)
            pdf.set_font(FONT, "", 10)
            pdf.set_text_color(*MUTED)
            pdf.cell(0, 6, "Scan with any UPI app", align="C", new_x="LMARGIN", new_y="NEXT")
            pdf.ln(6)

        amount = bill.qr_amount if bill.qr_amount is not None else bill.balance
        pdf.set_font(FONT, "B", 14)
        pdf.set_text_color(*TEXT)
        pdf.cell(0, 10, f"Amount: {_money(amount)}", align="C", new_x="LMARGIN", new_y="NEXT")
        if bill.upi_id:
            pdf.set_font(FONT, "", 11)
            pdf.cell(0, 7, _safe(f"UPI ID: {bill.upi_id}"), align="C", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

        pdf.set_font(FONT, "B", 8)
        pdf.set_text_color(*MUTED)
        pdf.cell(0, 5, "PAYMENT LINK", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font(FONT, "", 8)
        pdf.set_text_color(*TEXT)
        pdf.set_fill_color(*ROW_ALT)
        pdf.multi_cell(page_w, 5, _safe(bill.upi_link), fill=True)

        bank = bill.bank_details
        if bank is not None and bank.is_configured:
            pdf.ln(8)
            pdf.set_font(FONT, "B", 8)
            pdf.set_text_color(*MUTED)
            pdf.cell(0, 5, "BANK TRANSFER", new_x="LMARGIN", new_y="NEXT")
            pdf.set_font(FONT, "", 10)
            pdf.set_text_color(*TEXT)
            for line in (
                f"Account Name: {bank.account_name}",
                f"Account No: {bank.account_number}",
                f"IFSC: {bank.ifsc}",
                f"Bank: {bank.bank_name}",
            ):
                pdf.cell(0, 6, _safe(line), new_x="LMARGIN", new_y="NEXT")

    def _draw_footer(self, pdf: FPDF, page_w: float, business_name: str) -> None:
        pdf.set_y(-30)
        pdf.set_draw_color(*BORDER)
        pdf.set_line_width(0.3)
        y = pdf.get_y()
        pdf.line(pdf.l_margin, y, pdf.l_margin + page_w, y)
        pdf.ln(5)
        pdf.set_font(FONT, "", 7)
        pdf.set_text_color(*MUTED)
        thanks = f"Thank you for choosing {business_name}!" if business_name else "Thank you for your business!"
        pdf.cell(0, 5, _safe(thanks), align="C")
