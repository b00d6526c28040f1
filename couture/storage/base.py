from abc import ABC, abstractmethod


class StorageBackend(ABC):
    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        """Save data and return the storage path."""
        ...

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Return a location the operator can open (absolute path for local storage)."""
        ...
