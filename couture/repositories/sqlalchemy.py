from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping

from couture.constants import IST_TZ
from couture.models.bill import Bill
from couture.repositories.base import BillRepository

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(IST_TZ)


class SQLAlchemyBillRepository(BillRepository):
    """Bills stored as JSON documents keyed by ``bill_id``.

    ``customer_name``, ``status`` and ``total_amount`` are copied out of the
    document so listings don't need to parse every row.
    """

    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_bill(row: RowMapping) -> Bill:
        return Bill.model_validate_json(row["document"])

    def _exists(self, bill_id: str) -> bool:
        row = self.conn.execute(
            text("SELECT 1 FROM bills WHERE bill_id = :bill_id"),
            {"bill_id": bill_id},
        ).fetchone()
        return row is not None

    def upsert(self, bill: Bill) -> Bill:
        now = _now()
        if bill.created_at is None:
            bill.created_at = now
        bill.updated_at = now

        params = {
            "bill_id": bill.bill_id,
            "customer_name": bill.customer_name,
            "status": bill.status.value,
            "total_amount": bill.total_amount,
            "document": bill.model_dump_json(),
            "created_at": bill.created_at.isoformat(),
            "updated_at": bill.updated_at.isoformat(),
        }

        if self._exists(bill.bill_id):
            self.conn.execute(
                text(
                    "UPDATE bills SET customer_name = :customer_name, status = :status, "
                    "total_amount = :total_amount, document = :document, updated_at = :updated_at "
                    "WHERE bill_id = :bill_id"
                ),
                params,
            )
        else:
            self.conn.execute(
                text(
                    "INSERT INTO bills (bill_id, customer_name, status, total_amount, document, created_at, updated_at) "
                    "VALUES (:bill_id, :customer_name, :status, :total_amount, :document, :created_at, :updated_at)"
                ),
                params,
            )
        self.conn.commit()
        logger.debug("Upserted bill %s", bill.bill_id)

        result = self.get_by_bill_id(bill.bill_id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve bill after upsert (bill_id={bill.bill_id})")
        return result

    def get_by_bill_id(self, bill_id: str) -> Bill | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM bills WHERE bill_id = :bill_id"),
                {"bill_id": bill_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_bill(row)

    def list_all(self) -> list[Bill]:
        rows = self.conn.execute(text("SELECT * FROM bills ORDER BY created_at DESC")).mappings().fetchall()
        return [self._row_to_bill(row) for row in rows]

    def delete(self, bill_id: str) -> None:
        self.conn.execute(text("DELETE FROM bills WHERE bill_id = :bill_id"), {"bill_id": bill_id})
        self.conn.commit()
