# ledgerdocs/styling/common/text.py
from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union

from reportlab.pdfbase.pdfmetrics import stringWidth

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def text_width(text: str, font: str, size: float) -> float:
    return stringWidth(text or "", font, size)


def clean(s: Optional[str]) -> str:
    return (s or "").replace("\u00a0", " ").replace("\x00", "").strip()


def _normalize_paragraphs(text: Optional[str]) -> str:
    s = (text or "").replace("\u00a0", " ")
    s = s.replace("\r\n", "\n").replace("\r", "")
    s = s.replace("\t", " ")
    return _CONTROL_RE.sub("", s)


def wrap_text(text: Optional[str], max_w: float, font: str, size: float) -> List[str]:
    """
    Greedy word wrap. Each explicit line break starts a new paragraph; blank
    paragraphs come back as empty lines. A word wider than `max_w` is kept
    whole on its own line.
    """
    lines: List[str] = []

    for paragraph in _normalize_paragraphs(text).split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        cur = words[0]
        for w in words[1:]:
            test = cur + " " + w
            if text_width(test, font, size) < max_w:
                cur = test
            else:
                lines.append(cur)
                cur = w
        lines.append(cur)

    return lines


def money_str(x: Decimal, currency: str = "") -> str:
    s = f"{x:,.2f}"
    return f"{currency} {s}" if currency else s


def quantity_str(q: Decimal) -> str:
    """2 -> "2", 1.50 -> "1.5"."""
    if q == q.to_integral_value():
        return str(int(q))
    return format(q.normalize(), "f")


def date_str(d: Union[date, datetime, None]) -> str:
    if d is None:
        return ""
    return f"{d.month}/{d.day}/{d.year}"
