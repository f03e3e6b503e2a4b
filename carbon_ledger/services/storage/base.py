"""
Storage interface for uploaded source documents.
"""
import mimetypes
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath
from uuid import UUID

from carbon_ledger.utils.constants import ORGANIZATIONS_FOLDER


@dataclass(frozen=True)
class StoredDocument:
    """Where an uploaded document ended up."""

    url: str
    filename: str  # storage key, used for deletion


def document_key(original_name: str, scope_folder: str, organization_id: UUID) -> str:
    """
    Storage key for a new document.

    Documents of an organization live under
    ``organizations/<organization_id>/documents/``; anything else goes under
    ``<scope_folder>/``. The stored name is a fresh UUID keeping the original
    extension.
    """
    suffix = PurePosixPath(original_name).suffix.lower()
    name = f"{uuid.uuid4()}{suffix}"
    if scope_folder == ORGANIZATIONS_FOLDER:
        return f"{ORGANIZATIONS_FOLDER}/{organization_id}/documents/{name}"
    return f"{scope_folder}/{name}"


def guess_content_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or "application/octet-stream"


class DocumentStorage(ABC):
    @abstractmethod
    async def upload(
        self,
        data: bytes,
        original_name: str,
        scope_folder: str,
        organization_id: UUID,
    ) -> StoredDocument:
        """
        Store a document.

        Args:
            data: File contents
            original_name: Name the file was uploaded with
            scope_folder: Top-level folder, normally ``organizations``
            organization_id: Owning organization

        Returns:
            StoredDocument with its public URL and storage key
        """

    @abstractmethod
    async def delete(self, filename: str) -> None:
        """Remove a stored document by its storage key."""
