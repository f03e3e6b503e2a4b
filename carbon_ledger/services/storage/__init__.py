"""
Document storage backends.
"""
from carbon_ledger.services.storage.base import DocumentStorage, StoredDocument
from carbon_ledger.services.storage.factory import get_document_storage

__all__ = ["DocumentStorage", "StoredDocument", "get_document_storage"]
