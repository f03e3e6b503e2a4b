"""
Filesystem document storage, used in development and tests.
"""
import asyncio
import functools
import logging
from pathlib import Path
from uuid import UUID

from carbon_ledger.services.storage.base import (
    DocumentStorage,
    StoredDocument,
    document_key,
)

logger = logging.getLogger(__name__)


class LocalDocumentStorage(DocumentStorage):
    def __init__(self, root: str, public_base_url: str):
        self.root = Path(root)
        self.public_base_url = public_base_url.rstrip("/")

    def _write(self, key: str, data: bytes) -> None:
        path = self.root / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def _remove(self, key: str) -> None:
        (self.root / key).unlink()

    async def upload(
        self,
        data: bytes,
        original_name: str,
        scope_folder: str,
        organization_id: UUID,
    ) -> StoredDocument:
        key = document_key(original_name, scope_folder, organization_id)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, functools.partial(self._write, key, data))
        logger.info(f"Stored {original_name} ({len(data)} bytes) at {key}")
        return StoredDocument(url=f"{self.public_base_url}/{key}", filename=key)

    async def delete(self, filename: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, functools.partial(self._remove, filename))
        logger.info(f"Deleted stored document {filename}")
