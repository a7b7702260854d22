# ledgerdocs/storage/s3_storage.py
from __future__ import annotations

import logging

import boto3
from botocore.client import Config

from ledgerdocs import config

logger = logging.getLogger(__name__)


class S3Storage:
    """Read-only access to the bucket holding company logos."""

    def __init__(self):
        self.bucket = config.s3_bucket()

        region = config.aws_region()
        profile = config.aws_profile()

        session = boto3.Session(profile_name=profile) if profile else boto3.Session()
        self.s3 = session.client(
            "s3",
            region_name=region,
            config=Config(signature_version="s3v4"),
        )

    def download_bytes(self, key: str) -> bytes:
        logger.debug("Fetching s3://%s/%s", self.bucket, key)
        resp = self.s3.get_object(Bucket=self.bucket, Key=key)
        return resp["Body"].read()


_storage_singleton: S3Storage | None = None


def get_storage() -> S3Storage:
    global _storage_singleton
    if _storage_singleton is None:
        _storage_singleton = S3Storage()
    return _storage_singleton
