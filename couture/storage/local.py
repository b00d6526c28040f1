import logging
from pathlib import Path

from couture.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    def __init__(self, base_dir: str) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        path = (self.base_dir / key).resolve()
        if not path.is_relative_to(self.base_dir.resolve()):
            raise ValueError(f"Storage key escapes base directory: {key}")
        return path

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug("Saved %s (%d bytes) to %s", key, len(data), path)
        return str(path)

    def get_url(self, key: str) -> str:
        return str(self._path(key))
