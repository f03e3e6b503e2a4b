"""
S3 document storage.
"""
import asyncio
import functools
import logging
from typing import Optional
from uuid import UUID

import boto3

from carbon_ledger.services.storage.base import (
    DocumentStorage,
    StoredDocument,
    document_key,
    guess_content_type,
)

logger = logging.getLogger(__name__)


class S3DocumentStorage(DocumentStorage):
    """
    Stores documents in an S3 bucket under an optional key prefix.

    Credentials come from the standard AWS environment and config chain.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        region: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client=None,
    ):
        if not bucket:
            raise ValueError("S3 storage needs a bucket name")
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self.region = region
        self.public_base_url = (
            public_base_url.rstrip("/")
            if public_base_url
            else f"https://{bucket}.s3.amazonaws.com"
        )
        self.s3 = client or boto3.client("s3", region_name=region)

    def _key(self, key: str) -> str:
        key = key.lstrip("/")
        if self.prefix:
            return f"{self.prefix}/{key}"
        return key

    async def upload(
        self,
        data: bytes,
        original_name: str,
        scope_folder: str,
        organization_id: UUID,
    ) -> StoredDocument:
        key = self._key(document_key(original_name, scope_folder, organization_id))
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            functools.partial(
                self.s3.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=guess_content_type(original_name),
            ),
        )
        logger.info(f"Uploaded {original_name} to s3://{self.bucket}/{key}")
        return StoredDocument(url=f"{self.public_base_url}/{key}", filename=key)

    async def delete(self, filename: str) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            functools.partial(self.s3.delete_object, Bucket=self.bucket, Key=filename),
        )
        logger.info(f"Deleted s3://{self.bucket}/{filename}")
