# ledgerdocs/styling/common/logo.py
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Union

from reportlab.lib.utils import ImageReader

from ledgerdocs.errors import UnsupportedAssetFormat
from ledgerdocs.models import Party

logger = logging.getLogger(__name__)

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
JPEG_MAGIC = b"\xff\xd8\xff"


class BlobStore(Protocol):
    def download_bytes(self, key: str) -> bytes:
        ...


@dataclass(frozen=True)
class LogoEmbedded:
    image: ImageReader
    width: float
    height: float


@dataclass(frozen=True)
class LogoUnavailable:
    reason: str


LogoResolution = Union[LogoEmbedded, LogoUnavailable]


def sniff_format(data: bytes) -> str:
    if data.startswith(PNG_MAGIC):
        return "png"
    if data.startswith(JPEG_MAGIC):
        return "jpeg"
    raise UnsupportedAssetFormat(f"logo is neither PNG nor JPEG (starts with {data[:8]!r})")


def resolve_logo(data: Optional[bytes]) -> LogoResolution:
    if not data:
        return LogoUnavailable("no logo")

    try:
        sniff_format(data)
    except UnsupportedAssetFormat as e:
        logger.warning("Falling back to text branding: %s", e)
        return LogoUnavailable(str(e))

    try:
        img = ImageReader(io.BytesIO(data))
        iw, ih = img.getSize()
    except Exception as e:
        logger.warning("Falling back to text branding: logo could not be decoded: %s", e)
        return LogoUnavailable(f"undecodable logo: {type(e).__name__}")

    if not iw or not ih:
        return LogoUnavailable("logo has no pixels")
    return LogoEmbedded(image=img, width=float(iw), height=float(ih))


def load_logo(issuer: Optional[Party], storage: Optional[BlobStore] = None) -> LogoResolution:
    """
    Inline bytes on the party win; otherwise the logo key is fetched from blob
    storage. Fetch failures degrade to text branding, no retry.
    """
    if issuer is None:
        return LogoUnavailable("no issuer")

    if issuer.logo_bytes:
        return resolve_logo(issuer.logo_bytes)

    if not issuer.logo_key:
        return LogoUnavailable("no logo")
    if storage is None:
        return LogoUnavailable("no storage configured")

    try:
        data = storage.download_bytes(issuer.logo_key)
    except Exception as e:
        logger.warning("Logo fetch failed for key=%s: %s: %s", issuer.logo_key, type(e).__name__, e)
        return LogoUnavailable(f"fetch failed: {type(e).__name__}")

    return resolve_logo(data)
