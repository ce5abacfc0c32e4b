# Filename: files_manager/storage.py
import logging
from pathlib import Path
from uuid import uuid4

import aiofiles

from .config import settings

logger = logging.getLogger(__name__)


def make_storage_key() -> str:
    return str(uuid4())


def variant_path(local_path: str, size: int = 0) -> str:
    """Path of a stored blob, or of one of its size variants."""
    return f"{local_path}_{size}" if size else local_path


class ContentStore:
    """Blobs on local disk, addressed by storage key."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, storage_key: str) -> Path:
        return self.root / storage_key

    async def save(self, storage_key: str, data: bytes) -> str:
        """Write ``data`` under ``storage_key``. Returns the local path."""
        self.root.mkdir(parents=True, exist_ok=True)
        dest_path = self.path_for(storage_key)
        async with aiofiles.open(dest_path, "wb") as out_file:
            await out_file.write(data)
        logger.debug("Stored %d bytes at %s", len(data), dest_path)
        return str(dest_path)

    async def load(self, local_path: str) -> bytes:
        """Read a blob. Raises ``FileNotFoundError`` when it is missing."""
        async with aiofiles.open(local_path, "rb") as in_file:
            return await in_file.read()

    def delete(self, local_path: str) -> None:
        p = Path(local_path)
        try:
            if p.exists():
                p.unlink()
        except OSError:
            logger.exception("Could not remove %s", local_path)


def get_content_store() -> ContentStore:
    return ContentStore(settings.storage_path)
