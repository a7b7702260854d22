# ledgerdocs/styling/base.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)

# A4 in points
A4_W = 595.28
A4_H = 841.89


@dataclass(frozen=True)
class PageSpec:
    w: float = A4_W
    h: float = A4_H
    margin_l: float = 50.0
    margin_r: float = 50.0
    margin_t: float = 60.0
    margin_b: float = 60.0

    @property
    def x0(self) -> float:
        return self.margin_l

    @property
    def x1(self) -> float:
        return self.w - self.margin_r

    @property
    def content_w(self) -> float:
        return self.x1 - self.x0


@dataclass(frozen=True)
class FontSet:
    regular: str = "Times-Roman"
    bold: str = "Times-Bold"
    italic: str = "Times-Italic"
    heading: str = "Helvetica-Bold"


@dataclass(frozen=True)
class DocumentTheme:
    """
    Per-kind presentation values. Everything else in the layout is shared
    between quotes and invoices.
    """
    title: str
    label: str
    accent: colors.Color
    currency: str


TEXT_COLOR = colors.Color(0.2, 0.2, 0.2)
LIGHT_TEXT_COLOR = colors.Color(0.5, 0.5, 0.5)
PANEL_FILL = colors.Color(0.98, 0.98, 0.98)
PANEL_BORDER = colors.Color(0.9, 0.9, 0.9)
FOOTER_FILL = colors.Color(0.9, 0.9, 0.9)

_BRAND_FONT_FILES = {
    "regular": ("LedgerDocs-Regular", "Regular.ttf"),
    "bold": ("LedgerDocs-Bold", "Bold.ttf"),
    "italic": ("LedgerDocs-Italic", "Italic.ttf"),
}


def register_brand_fonts(fonts_dir: Path | None) -> FontSet:
    """
    Registers brand TTF fonts found in `fonts_dir` and returns the font set to
    draw with. Missing or unreadable files fall back to the standard fonts.
    """
    default = FontSet()
    if fonts_dir is None:
        return default

    chosen = {
        "regular": default.regular,
        "bold": default.bold,
        "italic": default.italic,
    }

    for role, (font_name, filename) in _BRAND_FONT_FILES.items():
        path = fonts_dir / filename
        if not path.exists():
            continue
        try:
            if font_name not in pdfmetrics.getRegisteredFontNames():
                pdfmetrics.registerFont(TTFont(font_name, str(path)))
            chosen[role] = font_name
        except Exception as e:
            logger.warning("Could not register brand font %s: %s", path, e)

    return FontSet(
        regular=chosen["regular"],
        bold=chosen["bold"],
        italic=chosen["italic"],
        heading=chosen["bold"] if chosen["bold"] != default.bold else default.heading,
    )
