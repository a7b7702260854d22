from __future__ import annotations

import io
from datetime import date

from PIL import Image

CREATED = date(2026, 3, 2)
GENERATED = date(2026, 3, 5)


def png_bytes(w: int = 40, h: int = 20) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (w, h), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()
