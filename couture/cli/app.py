import questionary
from rich.console import Console

from couture.cli.bill_menu import create_bill_menu, list_bills_menu
from couture.models.bill import BankDetails
from couture.repositories.factory import get_bill_repository
from couture.services.bill_service import BillService
from couture.settings import settings
from couture.storage.factory import get_storage
from couture.upi import PaymentLinkEncoder, UpiConfig

console = Console()


def _build_services() -> BillService:
    bank_details = BankDetails(
        account_name=settings.bank_account_name,
        account_number=settings.bank_account_number,
        ifsc=settings.bank_ifsc,
        bank_name=settings.bank_name,
    )
    return BillService(
        get_bill_repository(),
        get_storage(),
        PaymentLinkEncoder(UpiConfig.from_settings()),
        business_name=settings.business_name,
        bank_details=bank_details if bank_details.is_configured else None,
    )


def main_menu() -> None:
    bill_service = _build_services()

    console.print()
    console.print(f"[bold]{settings.business_name or 'Billing'}[/bold]", style="cyan")
    if not bill_service.encoder.is_configured:
        console.print("[yellow]COUTURE_UPI_ID is not set; bills will not carry a UPI link.[/yellow]")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "List Bills",
                "New Bill",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "List Bills":
            list_bills_menu(bill_service)
        elif choice == "New Bill":
            create_bill_menu(bill_service)
