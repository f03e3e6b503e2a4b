"""
Builds the configured document storage backend.
"""
import logging

from carbon_ledger.core.config import Config
from carbon_ledger.services.storage.base import DocumentStorage
from carbon_ledger.services.storage.local import LocalDocumentStorage
from carbon_ledger.services.storage.s3 import S3DocumentStorage

logger = logging.getLogger(__name__)


def get_document_storage(config: Config) -> DocumentStorage:
    """
    Create the storage backend named in the ``[storage]`` section.

    Raises:
        ValueError: Unknown backend
    """
    settings = config.section("storage")
    backend = settings.get("backend", "local").strip().lower()

    if backend == "s3":
        logger.info(f"Using S3 document storage in bucket {settings.get('bucket')}")
        return S3DocumentStorage(
            bucket=settings.get("bucket", ""),
            prefix=settings.get("prefix", ""),
            region=settings.get("region"),
            public_base_url=settings.get("public_base_url"),
        )
    if backend == "local":
        logger.info(f"Using local document storage at {settings.get('root')}")
        return LocalDocumentStorage(
            root=settings.get("root", "./storage"),
            public_base_url=settings.get("public_base_url", "http://localhost:8000/files"),
        )
    raise ValueError(f"Unknown storage backend: {backend}")
