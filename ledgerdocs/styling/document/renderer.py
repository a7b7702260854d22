# ledgerdocs/styling/document/renderer.py
from __future__ import annotations

import io
import logging
import re
from datetime import date, datetime
from functools import partial
from typing import Optional

from reportlab.pdfgen import canvas

from ledgerdocs import config
from ledgerdocs.errors import RenderFailed
from ledgerdocs.models import DocumentModel
from ledgerdocs.styling.base import FontSet, PageSpec, register_brand_fonts
from ledgerdocs.styling.common.logo import BlobStore, LogoResolution, LogoUnavailable, load_logo
from ledgerdocs.styling.common.pagination import Paginator, RenderState
from ledgerdocs.styling.document import sections
from ledgerdocs.styling.document.sections import LayoutContext
from ledgerdocs.styling.router import theme_for

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


def _as_date(d: date | datetime | None) -> date:
    if d is None:
        return date.today()
    if isinstance(d, datetime):
        return d.date()
    return d


def layout_document(
    doc: DocumentModel,
    *,
    logo: Optional[LogoResolution] = None,
    fonts: Optional[FontSet] = None,
    generated_at: date | datetime | None = None,
    ps: Optional[PageSpec] = None,
) -> RenderState:
    """
    Lays out every section in document order and stamps the footer on each
    page once the page count is known. No I/O happens here.
    """
    ps = ps or PageSpec()
    ctx = LayoutContext(
        doc=doc,
        ps=ps,
        fonts=fonts or FontSet(),
        theme=theme_for(doc.kind, doc.currency),
        logo=logo or LogoUnavailable("no logo"),
    )

    pg = Paginator(ps, header_band=partial(sections.draw_header_band, ctx))
    pg.new_page()

    sections.draw_title(ctx, pg)
    sections.draw_address_block(ctx, pg)
    sections.draw_project(ctx, pg)

    for section in doc.free_text_sections:
        sections.draw_text_section(ctx, pg, section)

    if doc.is_quote:
        sections.draw_deliverables(ctx, pg)

    if doc.line_items:
        sections.draw_items_table(ctx, pg)
        sections.draw_totals(ctx, pg)

    if doc.is_quote:
        sections.draw_milestones(ctx, pg)
    else:
        sections.draw_payment_details(ctx, pg)

    for section in doc.closing_sections:
        sections.draw_text_section(ctx, pg, section)

    generated_on = _as_date(generated_at)
    total = len(pg.pages)
    for page_no, page in enumerate(pg.pages, start=1):
        sections.draw_footer(ctx, page, page_no, total, generated_on)

    return pg.state


def serialize_pages(state: RenderState, *, title: str = "") -> bytes:
    if not state.pages:
        raise ValueError("nothing to serialize: no pages were laid out")

    first = state.pages[0]
    buf = io.BytesIO()
    # invariant=1 drops the creation timestamp and random file id
    c = canvas.Canvas(buf, pagesize=(first.width, first.height), invariant=1)
    if title:
        c.setTitle(title)

    for page in state.pages:
        c.setPageSize((page.width, page.height))
        page.replay(c)
        c.showPage()

    c.save()
    buf.seek(0)
    return buf.getvalue()


def render_document(
    doc: DocumentModel,
    *,
    storage: Optional[BlobStore] = None,
    fonts: Optional[FontSet] = None,
    generated_at: date | datetime | None = None,
) -> bytes:
    """
    Document model in, finished PDF bytes out.

    A missing or broken logo degrades to text branding. Anything else that
    stops the document from being produced is raised as RenderFailed.
    """
    logo = load_logo(doc.issuer, storage)

    try:
        fonts = fonts or register_brand_fonts(config.fonts_dir())
        state = layout_document(doc, logo=logo, fonts=fonts, generated_at=generated_at)
        out = serialize_pages(state, title=f"{doc.kind.value.title()} #{doc.id}")
    except Exception as e:
        logger.exception("Render failed for %s %s", doc.kind.value, doc.id)
        raise RenderFailed(doc.id, f"{type(e).__name__}: {e}") from e

    logger.info("Rendered %s %s: %d page(s), %d bytes", doc.kind.value, doc.id, len(state.pages), len(out))
    return out


def document_filename(doc: DocumentModel) -> str:
    """
    {RecipientName_or_Unknown}_{DocType}_#{id}.pdf
    """
    name = (doc.recipient.name if doc.recipient else "") or ""
    name = re.sub(r'[\\/*?:"<>|]', "", name).strip()
    name = re.sub(r"\s+", "_", name) or "Unknown"
    return f"{name}_{doc.kind.value.title()}_#{doc.id}.pdf"
