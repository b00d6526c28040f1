"""Root conftest — in-memory SQLite engine and bill fixtures."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import Connection, create_engine, text
from sqlalchemy.engine import Engine

from couture.models.bill import Bill, BillDraft, ChargeBreakdown, DiscountSpec, LineItem, PaymentStatus

# Matches Alembic head: 3f1c9a7d2b60 (create bills document table)
SCHEMA_DDL = """
CREATE TABLE bills (
    bill_id VARCHAR(32) PRIMARY KEY,
    customer_name TEXT NOT NULL DEFAULT '',
    status VARCHAR(10) NOT NULL,
    total_amount INTEGER NOT NULL DEFAULT 0,
    document TEXT NOT NULL,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE INDEX ix_bills_created_at ON bills (created_at);
"""


@pytest.fixture()
def db_engine() -> Engine:
    return create_engine("sqlite:///:memory:")


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_draft(**overrides) -> BillDraft:
    defaults = dict(
        customer_name="Anita Rao",
        customer_phone="98450 12345",
        items=[LineItem(id="1", description="Blouse stitching", quantity=2, unit_rate=50000)],
        breakdown=ChargeBreakdown(fabric=20000),
        tax_percent=Decimal("10"),
        discount=DiscountSpec(),
        paid_amount=60000,
    )
    defaults.update(overrides)
    return BillDraft(**defaults)


def _sample_bill(**overrides) -> Bill:
    defaults = dict(
        bill_id="BILL123456",
        customer_name="Anita Rao",
        customer_phone="98450 12345",
        items=[LineItem(id="1", description="Blouse stitching", quantity=2, unit_rate=50000)],
        breakdown=ChargeBreakdown(fabric=20000),
        tax_percent=Decimal("10"),
        subtotal=120000,
        tax_amount=12000,
        total_amount=132000,
        paid_amount=60000,
        balance=72000,
        status=PaymentStatus.PARTIAL,
        notes="Deliver by Friday",
        due_date="10/04/2026",
    )
    defaults.update(overrides)
    return Bill(**defaults)


@pytest.fixture()
def sample_draft():
    return _sample_draft


@pytest.fixture()
def sample_bill():
    return _sample_bill
