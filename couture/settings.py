from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="COUTURE_", extra="ignore")

    db_url: str = "sqlite:///couture.db"

    storage_backend: str = "local"
    storage_local_path: str = "./invoices"
    storage_prefix: str = "bills"

    business_name: str = ""
    upi_id: str = ""
    qr_box_size: int = 10
    qr_border: int = 2

    bank_account_name: str = ""
    bank_account_number: str = ""
    bank_ifsc: str = ""
    bank_name: str = ""

    default_tax_percent: Decimal = Decimal("0")

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
