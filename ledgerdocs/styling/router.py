# ledgerdocs/styling/router.py
from __future__ import annotations

from reportlab.lib import colors

from ledgerdocs.models import DocumentKind
from ledgerdocs.styling.base import DocumentTheme

QUOTE_ACCENT = colors.Color(0.2, 0.3, 0.7)
INVOICE_ACCENT = colors.HexColor("#4F46E5")


def normalize_kind(kind: str | None) -> DocumentKind:
    k = (kind or "").strip().lower()
    if k in ("invoice", "inv"):
        return DocumentKind.INVOICE
    if k in ("quote", "quotation", "proposal", "est", "estimate"):
        return DocumentKind.QUOTE
    raise ValueError(f"Unknown document kind: {kind!r}")


def theme_for(kind: DocumentKind, currency: str) -> DocumentTheme:
    """
    Single entry point for picking presentation values:
      theme_for(DocumentKind.QUOTE, "KSH")
    """
    if kind is DocumentKind.INVOICE:
        return DocumentTheme(title="INVOICE", label="Invoice", accent=INVOICE_ACCENT, currency=currency)
    return DocumentTheme(title="QUOTATION", label="Quote", accent=QUOTE_ACCENT, currency=currency)
