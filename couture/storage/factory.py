import logging

from couture.settings import settings
from couture.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def get_storage() -> StorageBackend:
    backend = settings.storage_backend

    if backend == "local":
        from couture.storage.local import LocalStorage

        logger.info("Using storage backend: local path=%s", settings.storage_local_path)
        return LocalStorage(settings.storage_local_path)

    raise ValueError(f"Unsupported storage backend: {backend}")
