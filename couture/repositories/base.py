from abc import ABC, abstractmethod

from couture.models.bill import Bill


class BillRepository(ABC):
    @abstractmethod
    def upsert(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def get_by_bill_id(self, bill_id: str) -> Bill | None: ...

    @abstractmethod
    def list_all(self) -> list[Bill]: ...

    @abstractmethod
    def delete(self, bill_id: str) -> None: ...
