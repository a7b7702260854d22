from __future__ import annotations

import logging

import pytest

from helpers import png_bytes
from ledgerdocs.errors import UnsupportedAssetFormat
from ledgerdocs.models import Party
from ledgerdocs.styling.common.logo import (
    LogoEmbedded,
    LogoUnavailable,
    load_logo,
    resolve_logo,
    sniff_format,
)

GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x00\x00\x00;"


class FakeStore:
    def __init__(self, data: bytes | None = None, error: Exception | None = None):
        self.data = data
        self.error = error
        self.keys = []

    def download_bytes(self, key: str) -> bytes:
        self.keys.append(key)
        if self.error is not None:
            raise self.error
        return self.data


def test_sniff_format():
    assert sniff_format(png_bytes()) == "png"
    assert sniff_format(b"\xff\xd8\xff\xe0rest") == "jpeg"
    with pytest.raises(UnsupportedAssetFormat):
        sniff_format(GIF_BYTES)


def test_png_logo_is_embedded():
    res = resolve_logo(png_bytes(40, 20))
    assert isinstance(res, LogoEmbedded)
    assert (res.width, res.height) == (40.0, 20.0)


def test_unsupported_format_falls_back_and_logs(caplog):
    with caplog.at_level(logging.WARNING, logger="ledgerdocs.styling.common.logo"):
        res = resolve_logo(GIF_BYTES)
    assert isinstance(res, LogoUnavailable)
    assert "neither PNG nor JPEG" in res.reason
    assert any("text branding" in r.getMessage() for r in caplog.records)


def test_corrupt_png_falls_back():
    res = resolve_logo(b"\x89PNG\r\n\x1a\n" + b"not really a png")
    assert isinstance(res, LogoUnavailable)
    assert res.reason.startswith("undecodable logo")


def test_no_bytes_means_no_logo():
    assert resolve_logo(None) == LogoUnavailable("no logo")
    assert resolve_logo(b"") == LogoUnavailable("no logo")


def test_load_logo_fetches_by_key():
    store = FakeStore(data=png_bytes())
    res = load_logo(Party(name="Acme", logo_key="logos/acme.png"), store)
    assert isinstance(res, LogoEmbedded)
    assert store.keys == ["logos/acme.png"]


def test_inline_bytes_win_over_key():
    store = FakeStore(data=GIF_BYTES)
    res = load_logo(Party(name="Acme", logo_key="logos/acme.gif", logo_bytes=png_bytes()), store)
    assert isinstance(res, LogoEmbedded)
    assert store.keys == []


def test_fetch_failure_degrades():
    store = FakeStore(error=ConnectionError("timed out"))
    res = load_logo(Party(name="Acme", logo_key="logos/acme.png"), store)
    assert res == LogoUnavailable("fetch failed: ConnectionError")


def test_missing_pieces_degrade():
    assert isinstance(load_logo(None, FakeStore()), LogoUnavailable)
    assert isinstance(load_logo(Party(name="Acme"), FakeStore()), LogoUnavailable)
    assert load_logo(Party(name="Acme", logo_key="k"), None) == LogoUnavailable("no storage configured")
