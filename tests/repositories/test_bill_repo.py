from decimal import Decimal

from freezegun import freeze_time
from sqlalchemy import text

from couture.models.bill import DiscountKind, DiscountSpec, LineItem, PaymentStatus


class TestBillRepoCRUD:
    def test_upsert_inserts(self, bill_repo, sample_bill):
        created = bill_repo.upsert(sample_bill())

        assert created.bill_id == "BILL123456"
        assert created.created_at is not None
        assert created.updated_at is not None
        assert len(created.items) == 1
        assert created.items[0].line_amount == 100000
        assert created.total_amount == 132000

    def test_get_by_bill_id_not_found(self, bill_repo):
        assert bill_repo.get_by_bill_id("BILL000000") is None

    def test_round_trip_preserves_document(self, bill_repo, sample_bill):
        bill = sample_bill(discount=DiscountSpec(amount=Decimal("7.5"), kind=DiscountKind.PERCENTAGE))
        bill_repo.upsert(bill)

        fetched = bill_repo.get_by_bill_id(bill.bill_id)
        assert fetched is not None
        assert fetched.discount.amount == Decimal("7.5")
        assert fetched.discount.kind == DiscountKind.PERCENTAGE
        assert fetched.breakdown.fabric == 20000
        assert fetched.status == PaymentStatus.PARTIAL

    def test_upsert_overwrites(self, bill_repo, sample_bill):
        with freeze_time("2026-03-01 10:00:00"):
            created = bill_repo.upsert(sample_bill())

        created.notes = "Updated notes"
        created.items = [LineItem(id="9", description="Lehenga", quantity=1, unit_rate=500000)]
        created.paid_amount = 132000
        created.balance = 0
        created.status = PaymentStatus.PAID
        with freeze_time("2026-03-02 10:00:00"):
            updated = bill_repo.upsert(created)

        assert updated.notes == "Updated notes"
        assert updated.items[0].description == "Lehenga"
        assert updated.status == PaymentStatus.PAID
        assert updated.created_at == created.created_at
        assert updated.updated_at > updated.created_at
        assert len(bill_repo.list_all()) == 1

    def test_summary_columns_follow_document(self, bill_repo, db_connection, sample_bill):
        bill = bill_repo.upsert(sample_bill())
        bill.status = PaymentStatus.PAID
        bill.customer_name = "Anita R."
        bill_repo.upsert(bill)

        row = db_connection.execute(text("SELECT customer_name, status, total_amount FROM bills")).mappings().one()
        assert row["customer_name"] == "Anita R."
        assert row["status"] == "paid"
        assert row["total_amount"] == 132000

    def test_list_all_newest_first(self, bill_repo, sample_bill):
        with freeze_time("2026-01-01 10:00:00"):
            bill_repo.upsert(sample_bill(bill_id="BILL000001"))
        with freeze_time("2026-02-01 10:00:00"):
            bill_repo.upsert(sample_bill(bill_id="BILL000002"))

        bills = bill_repo.list_all()
        assert [b.bill_id for b in bills] == ["BILL000002", "BILL000001"]

    def test_list_all_empty(self, bill_repo):
        assert bill_repo.list_all() == []

    def test_delete(self, bill_repo, sample_bill):
        bill_repo.upsert(sample_bill())
        bill_repo.delete("BILL123456")
        assert bill_repo.get_by_bill_id("BILL123456") is None

    def test_delete_missing_is_noop(self, bill_repo):
        bill_repo.delete("BILL999999")
        assert bill_repo.list_all() == []
