# ledgerdocs/config.py
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Local dev convenience: loads from .env if present.
# In deployed environments env vars are set directly (no .env file).
load_dotenv()

DEFAULT_CURRENCY = "KSH"


def default_currency() -> str:
    return (os.getenv("LEDGERDOCS_CURRENCY") or DEFAULT_CURRENCY).strip() or DEFAULT_CURRENCY


def fonts_dir() -> Path | None:
    """
    Optional directory with brand fonts (Regular/Bold/Italic TTF).
    When unset the standard PDF fonts are used.
    """
    p = os.getenv("LEDGERDOCS_FONTS_DIR")
    return Path(p) if p else None


def logo_storage_enabled() -> bool:
    """Logos are fetched only when a bucket is configured."""
    return bool(os.getenv("S3_BUCKET"))


def s3_bucket() -> str:
    bucket = os.getenv("S3_BUCKET")
    if not bucket:
        raise RuntimeError("S3_BUCKET is not set. Local: put it in .env.")
    return bucket


def aws_region() -> str:
    return os.getenv("AWS_REGION") or "us-east-1"


def aws_profile() -> str | None:
    return os.getenv("AWS_PROFILE") or None
