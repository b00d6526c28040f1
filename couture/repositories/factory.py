from couture.repositories.base import BillRepository


def get_bill_repository() -> BillRepository:
    from couture.db import get_connection
    from couture.repositories.sqlalchemy import SQLAlchemyBillRepository

    return SQLAlchemyBillRepository(get_connection())
