from __future__ import annotations

from decimal import Decimal, InvalidOperation

import questionary
from rich.console import Console
from rich.table import Table

from couture.constants import BREAKDOWN_LABELS, DISCOUNT_LABELS, STATUS_LABELS, format_percent
from couture.errors import ValidationError
from couture.messages import whatsapp_link
from couture.models import format_inr, parse_inr
from couture.models.bill import Bill, BillDraft, ChargeBreakdown, DiscountKind, DiscountSpec, LineItem
from couture.services.bill_service import BillService
from couture.settings import settings

console = Console()

STATUS_STYLES = {"paid": "green", "partial": "yellow", "unpaid": "red"}


def _format_amount_input(paise: int) -> str:
    """Format paise for use as default input value: 8550 -> '85.50'"""
    return f"{paise / 100:.2f}"


def _ask_amount(label: str, default: str = "", allow_zero: bool = True) -> int:
    while True:
        val = questionary.text(label, default=default).ask()
        parsed = parse_inr(val or "")
        if parsed is not None and (parsed > 0 or (allow_zero and parsed == 0)):
            return parsed
        console.print("[red]Invalid amount. Try again.[/red]")


def _ask_decimal(label: str, default: str = "0") -> Decimal:
    while True:
        val = (questionary.text(label, default=default).ask() or "").strip()
        try:
            value = Decimal(val or "0")
        except InvalidOperation:
            value = None
        if value is not None and value.is_finite():
            return value
        console.print("[red]Invalid number. Try again.[/red]")


def _ask_quantity(label: str) -> int:
    while True:
        val = (questionary.text(label, default="1").ask() or "").strip()
        if val.isdigit() and int(val) > 0:
            return int(val)
        console.print("[red]Quantity must be a positive whole number.[/red]")


def _show_bill_detail(bill: Bill, bill_service: BillService) -> None:
    """Display a bill's items, charges and totals."""
    detail_table = Table()
    detail_table.add_column("Description")
    detail_table.add_column("Qty", justify="right")
    detail_table.add_column("Rate", justify="right")
    detail_table.add_column("Amount", justify="right")

    for item in bill.items:
        detail_table.add_row(
            item.description,
            str(item.quantity),
            format_inr(item.unit_rate),
            format_inr(item.line_amount),
        )
    for name, label in BREAKDOWN_LABELS.items():
        value = getattr(bill.breakdown, name)
        if value:
            detail_table.add_row(label, "", "", format_inr(value))

    console.print(detail_table)
    console.print(f"  Subtotal: {format_inr(bill.subtotal)}")
    console.print(f"  GST ({format_percent(bill.tax_percent)}%): {format_inr(bill.tax_amount)}")
    console.print(f"  Discount: -{format_inr(bill.discount_amount)}")
    console.print(f"  [bold]Total: {format_inr(bill.total_amount)}[/bold]")
    console.print(f"  Paid: {format_inr(bill.paid_amount)}")
    style = STATUS_STYLES[bill.status.value]
    console.print(f"  Balance: {format_inr(bill.balance)} [{style}]{STATUS_LABELS[bill.status]}[/{style}]")
    if bill.totals.is_overpaid:
        console.print("  [yellow]Overpaid: the customer has paid more than the total.[/yellow]")

    if bill.due_date:
        console.print(f"  Due: {bill.due_date}")
    if bill.notes:
        console.print(f"  Notes: {bill.notes}")
    if bill.upi_link:
        console.print(f"  UPI: {bill.upi_link}")
    if bill.pdf_path:
        console.print(f"  Invoice: {bill_service.get_invoice_url(bill.pdf_path)}")


def _prompt_draft() -> BillDraft | None:
    customer_name = questionary.text("Customer name:").ask()
    if not customer_name:
        console.print("[red]Customer name is required.[/red]")
        return None
    customer_phone = questionary.text("Customer phone (optional):").ask() or ""

    items: list[LineItem] = []
    console.print()
    while True:
        add = questionary.confirm("Add a line item?", default=not items).ask()
        if not add:
            break
        desc = questionary.text("  Description:").ask()
        if not desc:
            continue
        quantity = _ask_quantity("  Quantity:")
        rate = _ask_amount("  Rate (e.g. 500.00):")
        items.append(LineItem(id=str(len(items) + 1), description=desc, quantity=quantity, unit_rate=rate))
        console.print(f"  [green]Added: {desc} = {format_inr(quantity * rate)}[/green]")

    console.print()
    charges = {name: _ask_amount(f"{label} charges:", default="0") for name, label in BREAKDOWN_LABELS.items()}

    tax_percent = _ask_decimal("GST %:", default=format_percent(settings.default_tax_percent))

    kind_label = questionary.select("Discount type:", choices=list(DISCOUNT_LABELS.values())).ask()
    kind = DiscountKind.PERCENTAGE if kind_label == DISCOUNT_LABELS[DiscountKind.PERCENTAGE] else DiscountKind.FLAT
    if kind == DiscountKind.PERCENTAGE:
        discount = DiscountSpec(amount=_ask_decimal("Discount %:"), kind=kind)
    else:
        discount = DiscountSpec(amount=Decimal(_ask_amount("Discount amount:", default="0")), kind=kind)

    paid_amount = _ask_amount("Amount paid now:", default="0")
    due_date = questionary.text("Due date (e.g. 10/03/2026, optional):").ask() or ""
    notes = questionary.text("Notes (optional):").ask() or ""

    return BillDraft(
        customer_name=customer_name,
        customer_phone=customer_phone,
        items=items,
        breakdown=ChargeBreakdown(**charges),
        tax_percent=tax_percent,
        discount=discount,
        paid_amount=paid_amount,
        due_date=due_date or None,
        notes=notes,
    )


def create_bill_menu(bill_service: BillService) -> None:
    console.print()
    console.print("[bold]New Bill[/bold]", style="cyan")

    draft = _prompt_draft()
    if draft is None:
        return

    try:
        totals = bill_service.preview(draft)
        console.print()
        console.print(
            f"  Total: [bold]{format_inr(totals.grand_total)}[/bold]  "
            f"Balance: {format_inr(totals.balance)}  Status: {STATUS_LABELS[totals.status]}"
        )
        if not questionary.confirm("Save this bill?", default=True).ask():
            return
        bill = bill_service.create_bill(draft)
    except ValidationError as exc:
        console.print(f"[red]Invalid {exc.field}: {exc.message}[/red]")
        return

    console.print()
    console.print(f"[green bold]Bill {bill.bill_id} created![/green bold]")
    _show_bill_detail(bill, bill_service)


def list_bills_menu(bill_service: BillService) -> None:
    bills = bill_service.list_bills()

    if not bills:
        console.print("[yellow]No bills yet.[/yellow]")
        return

    table = Table(title="Bills")
    table.add_column("Bill No", style="dim")
    table.add_column("Customer")
    table.add_column("Total", justify="right")
    table.add_column("Balance", justify="right")
    table.add_column("Status")

    for b in bills:
        style = STATUS_STYLES[b.status.value]
        table.add_row(
            b.bill_id,
            b.customer_name,
            format_inr(b.total_amount),
            format_inr(b.balance),
            f"[{style}]{STATUS_LABELS[b.status]}[/{style}]",
        )

    console.print()
    console.print(table)

    bill_choices = {f"{b.bill_id} - {b.customer_name}": b for b in bills}
    choices = list(bill_choices.keys()) + ["Back"]
    choice = questionary.select("Select a bill:", choices=choices).ask()

    if choice is None or choice == "Back":
        return

    selected = bill_choices[choice]
    bill = bill_service.get_bill(selected.bill_id)
    if not bill:
        console.print("[red]Bill not found.[/red]")
        return

    _bill_detail_menu(bill, bill_service)


def _whatsapp_menu(bill: Bill, bill_service: BillService) -> None:
    templates = bill_service.notification_templates(bill)
    choice = questionary.select("Message:", choices=list(templates.keys()) + ["Back"]).ask()
    if choice is None or choice == "Back":
        return
    message = templates[choice]
    console.print()
    console.print(message)
    if bill.customer_phone:
        console.print()
        console.print(f"  Send: {whatsapp_link(bill.customer_phone, message)}")


def _bill_detail_menu(bill: Bill, bill_service: BillService) -> None:
    while True:
        console.print()
        console.print(f"[bold cyan]Bill {bill.bill_id}[/bold cyan]")
        _show_bill_detail(bill, bill_service)
        console.print()

        action = questionary.select(
            "Actions:",
            choices=[
                "Record Payment",
                "WhatsApp Message",
                "Delete Bill",
                "Back",
            ],
        ).ask()

        if action is None or action == "Back":
            break
        elif action == "Record Payment":
            default = _format_amount_input(max(bill.balance, 0))
            amount = _ask_amount("Payment amount:", default=default, allow_zero=False)
            try:
                bill = bill_service.record_payment(bill, amount)
            except ValidationError as exc:
                console.print(f"[red]Invalid {exc.field}: {exc.message}[/red]")
                continue
            console.print(f"[green]Payment recorded. Status: {STATUS_LABELS[bill.status]}[/green]")
        elif action == "WhatsApp Message":
            _whatsapp_menu(bill, bill_service)
        elif action == "Delete Bill":
            confirm = questionary.confirm("Delete this bill?", default=False).ask()
            if confirm:
                bill_service.delete_bill(bill.bill_id)
                console.print("[yellow]Bill deleted.[/yellow]")
                break
