# ledgerdocs/styling/document/sections.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple

from reportlab.lib import colors

from ledgerdocs.models import DocumentModel, Party, TextSection
from ledgerdocs.styling.base import (
    FOOTER_FILL,
    LIGHT_TEXT_COLOR,
    PANEL_BORDER,
    PANEL_FILL,
    TEXT_COLOR,
    DocumentTheme,
    FontSet,
    PageSpec,
)
from ledgerdocs.styling.common.logo import LogoEmbedded, LogoResolution
from ledgerdocs.styling.common.page_canvas import PageCanvas
from ledgerdocs.styling.common.pagination import Paginator
from ledgerdocs.styling.common.text import (
    clean,
    date_str,
    money_str,
    quantity_str,
    text_width,
    wrap_text,
)


# =========================
# Layout constants
# =========================

# Header band (repeated on every page)
LOGO_BOX_W = 160
LOGO_BOX_H = 50
BRAND_FS = 16
BRAND_LINE_H = 19
TITLE_FS = 28
DOC_NO_FS = 13
HEADER_BAND_H = 70
HEADER_META_FS = 8
HEADER_RULE_W = 1.2
HEADER_BOTTOM_GAP = 18

# Document title
DOC_TITLE_FS = 16
DOC_TITLE_H = 24
DOC_TITLE_GAP_BELOW = 8

# Address panel
PANEL_PAD = 16
PANEL_BLEED = 10
PANEL_LABEL_FS = 9
PANEL_LABEL_H = 20
PARTY_NAME_FS = 13
PARTY_NAME_H = 18
PARTY_TEXT_FS = 10
PARTY_TEXT_H = 14
PANEL_COL_GAP = 30
PANEL_GAP_BELOW = 24

# Project line
PROJECT_FS = 13
PROJECT_LINE_H = 18
PROJECT_DESC_FS = 10
PROJECT_DESC_H = 13
PROJECT_GAP_BELOW = 14

# Headings / free text
HEADING_FS = 15
HEADING_H = 22
BODY_FS = 11
BODY_LINE_H = 14
SECTION_GAP_BELOW = 12

# Deliverables
DELIV_TITLE_FS = 11
DELIV_TITLE_H = 15
DELIV_TEXT_FS = 10
DELIV_TEXT_H = 13
DELIV_META_FS = 9
DELIV_BAR_W = 3
DELIV_INDENT = 12
DELIV_GAP = 8

# Items table
TABLE_HEADER_H = 25
TABLE_HEADER_FS = 10
ROW_FS = 10
ROW_LINE_H = 12
ROW_MIN_H = 20
ROW_PAD_TOP = 13
ROW_PAD_BOTTOM = 8
CELL_PAD = 10
COL_DESC_W = 230
COL_QTY_R = 280
COL_RATE_R = 385

# Totals
TOTALS_H = 52
TOTAL_LABEL_FS = 11
TOTAL_VALUE_FS = 16
TOTALS_GAP_BELOW = 18

# Milestones
MILESTONE_FS = 10
MILESTONE_H = 18
MILESTONE_DESC_FS = 9
MILESTONE_DESC_H = 12
MILESTONE_AMOUNT_X = 150
MILESTONE_DUE_X = 350

# Payment details
PAYMENT_FS = 10
PAYMENT_LINE_H = 14

# Footer
FOOTER_BAND_H = 40
FOOTER_TEXT_Y = 18
FOOTER_FS = 9
FOOTER_SMALL_FS = 8


@dataclass(frozen=True)
class LayoutContext:
    doc: DocumentModel
    ps: PageSpec
    fonts: FontSet
    theme: DocumentTheme
    logo: LogoResolution


# =========================
# Small drawing helpers
# =========================

def _draw_right(page: PageCanvas, text: str, x_right: float, y: float, font: str, size: float, color) -> None:
    page.draw_text(text, x_right - text_width(text, font, size), y, font, size, color)


def _draw_centred(page: PageCanvas, text: str, x_mid: float, y: float, font: str, size: float, color) -> None:
    page.draw_text(text, x_mid - text_width(text, font, size) / 2.0, y, font, size, color)


def _heading(ctx: LayoutContext, pg: Paginator, title: str, first_line_h: float) -> None:
    # Keep a heading together with the first line below it.
    pg.ensure_space(HEADING_H + first_line_h)
    pg.page.draw_text(title, ctx.ps.x0, pg.y - HEADING_FS, ctx.fonts.heading, HEADING_FS, TEXT_COLOR)
    pg.advance(HEADING_H)


def _flow_lines(
    pg: Paginator,
    lines: List[str],
    x: float,
    font: str,
    size: float,
    line_h: float,
    color,
) -> None:
    for ln in lines:
        pg.ensure_space(line_h)
        if ln:
            pg.page.draw_text(ln, x, pg.y - size, font, size, color)
        pg.advance(line_h)


# =========================
# Header band / footer
# =========================

def draw_header_band(ctx: LayoutContext, page: PageCanvas) -> float:
    """
    Branding on the left, document title and number on the right.
    Returns the y where page content may start.
    """
    ps = ctx.ps
    x0, x1 = ps.x0, ps.x1
    y_top = ps.h - ps.margin_t

    if isinstance(ctx.logo, LogoEmbedded):
        scale = min(LOGO_BOX_H / ctx.logo.height, LOGO_BOX_W / ctx.logo.width)
        lw = ctx.logo.width * scale
        lh = ctx.logo.height * scale
        page.draw_image(ctx.logo.image, x0, y_top - lh, lw, lh)
    else:
        name = clean(ctx.doc.issuer.name) if ctx.doc.issuer else ""
        if name:
            y = y_top - BRAND_FS
            for ln in wrap_text(name, LOGO_BOX_W + 80, ctx.fonts.heading, BRAND_FS)[:2]:
                page.draw_text(ln, x0, y, ctx.fonts.heading, BRAND_FS, ctx.theme.accent)
                y -= BRAND_LINE_H

    _draw_right(page, ctx.theme.title, x1, y_top - 22, ctx.fonts.heading, TITLE_FS, ctx.theme.accent)
    _draw_right(
        page,
        f"{ctx.theme.label} #{ctx.doc.id}",
        x1,
        y_top - 42,
        ctx.fonts.bold,
        DOC_NO_FS,
        TEXT_COLOR,
    )
    _draw_right(page, _meta_line(ctx.doc), x1, y_top - 58, ctx.fonts.regular, HEADER_META_FS, LIGHT_TEXT_COLOR)

    y_rule = y_top - HEADER_BAND_H
    page.draw_line(x0, y_rule, x1, y_rule, ctx.theme.accent, HEADER_RULE_W)
    return y_rule - HEADER_BOTTOM_GAP


def _footer_note(doc: DocumentModel) -> str:
    if doc.is_quote:
        return f"Quote valid for {doc.validity_days} days from date of issue"
    if doc.due_date:
        return f"Payment due by {date_str(doc.due_date)}"
    return "Thank you for your business"


def draw_footer(
    ctx: LayoutContext,
    page: PageCanvas,
    page_no: int,
    total_pages: int,
    generated_on: date,
) -> None:
    ps = ctx.ps
    page.draw_rect(0, 0, ps.w, FOOTER_BAND_H, FOOTER_FILL)
    page.draw_text(_footer_note(ctx.doc), ps.x0, FOOTER_TEXT_Y, ctx.fonts.italic, FOOTER_FS, LIGHT_TEXT_COLOR)
    _draw_centred(
        page,
        f"Page {page_no} of {total_pages}",
        ps.w / 2.0,
        FOOTER_TEXT_Y,
        ctx.fonts.regular,
        FOOTER_SMALL_FS,
        LIGHT_TEXT_COLOR,
    )
    _draw_right(
        page,
        f"Generated on {date_str(generated_on)}",
        ps.x1,
        FOOTER_TEXT_Y,
        ctx.fonts.italic,
        FOOTER_SMALL_FS,
        LIGHT_TEXT_COLOR,
    )


# =========================
# First-page sections
# =========================

def _validity_end(doc: DocumentModel) -> Optional[date]:
    created = doc.created_at.date() if isinstance(doc.created_at, datetime) else doc.created_at
    if created is None or doc.validity_days is None:
        return None
    return created + timedelta(days=doc.validity_days)


def _meta_line(doc: DocumentModel) -> str:
    """Issue date, validity or due date, and status; part of the header band."""
    parts = [f"Date: {date_str(doc.created_at)}"]
    if doc.is_quote:
        valid_until = _validity_end(doc)
        if valid_until:
            parts.append(f"Valid until: {date_str(valid_until)}")
    elif doc.due_date:
        parts.append(f"Due: {date_str(doc.due_date)}")
    parts.append(f"Status: {doc.status.value.upper()}")
    return "  |  ".join(parts)


def draw_title(ctx: LayoutContext, pg: Paginator) -> None:
    title = clean(ctx.doc.title)
    if not title:
        return

    max_w = ctx.ps.content_w
    for ln in wrap_text(title, max_w, ctx.fonts.bold, DOC_TITLE_FS):
        if not ln:
            continue
        pg.ensure_space(DOC_TITLE_H)
        pg.page.draw_text(ln, ctx.ps.x0, pg.y - DOC_TITLE_FS, ctx.fonts.bold, DOC_TITLE_FS, TEXT_COLOR)
        pg.advance(DOC_TITLE_H)
    pg.advance(DOC_TITLE_GAP_BELOW)


def _party_lines(ctx: LayoutContext, party: Party, max_w: float) -> List[Tuple[str, str, float, float, object]]:
    """(text, font, size, line_h, color) rows for one address column."""
    rows: List[Tuple[str, str, float, float, object]] = []
    name = clean(party.name)
    if name:
        for ln in wrap_text(name, max_w, ctx.fonts.bold, PARTY_NAME_FS):
            rows.append((ln, ctx.fonts.bold, PARTY_NAME_FS, PARTY_NAME_H, TEXT_COLOR))
    for raw in (party.email, party.phone):
        txt = clean(raw)
        if txt:
            for ln in wrap_text(txt, max_w, ctx.fonts.regular, PARTY_TEXT_FS):
                rows.append((ln, ctx.fonts.regular, PARTY_TEXT_FS, PARTY_TEXT_H, LIGHT_TEXT_COLOR))
    address = clean(party.address)
    if address:
        for ln in wrap_text(address, max_w, ctx.fonts.regular, PARTY_TEXT_FS):
            if ln:
                rows.append((ln, ctx.fonts.regular, PARTY_TEXT_FS, PARTY_TEXT_H, LIGHT_TEXT_COLOR))
    return rows


def draw_address_block(ctx: LayoutContext, pg: Paginator) -> None:
    """
    FROM (issuer) on the left, TO (recipient) on the right. Each column keeps
    its own cursor; the next section starts below the lower of the two.
    A panel taller than a page continues on the next one without its labels.
    """
    doc = ctx.doc
    if doc.issuer is None and doc.recipient is None:
        return

    x0, x1 = ctx.ps.x0, ctx.ps.x1
    col_w = (ctx.ps.content_w - PANEL_COL_GAP) / 2.0
    text_w = col_w - PANEL_PAD

    columns = []
    for label, party, x in (
        ("FROM:", doc.issuer, x0 + PANEL_PAD),
        ("TO:", doc.recipient, x0 + col_w + PANEL_COL_GAP),
    ):
        if party is not None:
            columns.append((label, _party_lines(ctx, party, text_w), x))

    pending = [rows for _label, rows, _x in columns]
    first = True
    while True:
        label_h = PANEL_LABEL_H if first else 0
        full_h = max(label_h + sum(r[3] for r in rows) for rows in pending) + 2 * PANEL_PAD
        if full_h > pg.remaining():
            # Move the whole panel when it fits on a fresh page; split it otherwise.
            min_h = 2 * PANEL_PAD + label_h + PARTY_NAME_H
            if full_h <= pg.page_capacity() or pg.remaining() < min_h:
                pg.new_page()

        avail = pg.remaining() - 2 * PANEL_PAD
        takes = []
        for rows in pending:
            used, n = label_h, 0
            for r in rows:
                if used + r[3] > avail and n > 0:
                    break
                used += r[3]
                n += 1
            takes.append((n, used))

        panel_h = max(used for _n, used in takes) + 2 * PANEL_PAD
        top = pg.y
        pg.page.draw_rect(
            x0 - PANEL_BLEED,
            top - panel_h,
            (x1 - x0) + 2 * PANEL_BLEED,
            panel_h,
            PANEL_FILL,
            border=PANEL_BORDER,
            border_w=1,
        )

        for idx, (label, _rows, x) in enumerate(columns):
            n = takes[idx][0]
            col_y = top - PANEL_PAD
            if first:
                pg.page.draw_text(label, x, col_y - PANEL_LABEL_FS, ctx.fonts.heading, PANEL_LABEL_FS, ctx.theme.accent)
                col_y -= PANEL_LABEL_H
            for text, font, size, line_h, color in pending[idx][:n]:
                pg.page.draw_text(text, x, col_y - size, font, size, color)
                col_y -= line_h
            pending[idx] = pending[idx][n:]

        pg.advance(panel_h)
        first = False
        if not any(pending):
            break
        pg.new_page()

    pg.advance(PANEL_GAP_BELOW)


def draw_project(ctx: LayoutContext, pg: Paginator) -> None:
    project = ctx.doc.project
    if project is None or not clean(project.name):
        return

    x0 = ctx.ps.x0
    pg.ensure_space(PROJECT_LINE_H)
    pg.page.draw_text(f"Project: {clean(project.name)}", x0, pg.y - PROJECT_FS, ctx.fonts.bold, PROJECT_FS, ctx.theme.accent)
    pg.advance(PROJECT_LINE_H)

    desc = clean(project.description)
    if desc:
        lines = wrap_text(desc, ctx.ps.content_w, ctx.fonts.regular, PROJECT_DESC_FS)
        _flow_lines(pg, lines, x0, ctx.fonts.regular, PROJECT_DESC_FS, PROJECT_DESC_H, LIGHT_TEXT_COLOR)

    pg.advance(PROJECT_GAP_BELOW)


# =========================
# Body sections
# =========================

def draw_text_section(ctx: LayoutContext, pg: Paginator, section: TextSection) -> None:
    body = (section.body or "").strip()
    if not body:
        return

    lines = wrap_text(body, ctx.ps.content_w, ctx.fonts.regular, BODY_FS)
    _heading(ctx, pg, section.title, BODY_LINE_H)
    _flow_lines(pg, lines, ctx.ps.x0, ctx.fonts.regular, BODY_FS, BODY_LINE_H, TEXT_COLOR)
    pg.advance(SECTION_GAP_BELOW)


def draw_deliverables(ctx: LayoutContext, pg: Paginator) -> None:
    items = [d for d in ctx.doc.deliverables if clean(d.title)]
    if not items:
        return

    x0 = ctx.ps.x0
    text_x = x0 + DELIV_INDENT
    max_w = ctx.ps.content_w - DELIV_INDENT

    _heading(ctx, pg, "Deliverables", DELIV_TITLE_H)

    for d in items:
        desc_lines = wrap_text(d.description, max_w, ctx.fonts.regular, DELIV_TEXT_FS) if clean(d.description) else []
        timeline = clean(d.timeline)

        pg.ensure_space(DELIV_TITLE_H + (DELIV_TEXT_H if desc_lines else 0))
        block_top = pg.y
        pg.page.draw_text(clean(d.title), text_x, pg.y - DELIV_TITLE_FS, ctx.fonts.bold, DELIV_TITLE_FS, TEXT_COLOR)
        pg.advance(DELIV_TITLE_H)

        start_page = pg.state.page_index
        _flow_lines(pg, desc_lines, text_x, ctx.fonts.regular, DELIV_TEXT_FS, DELIV_TEXT_H, LIGHT_TEXT_COLOR)
        if timeline:
            _flow_lines(pg, [f"Timeline: {timeline}"], text_x, ctx.fonts.italic, DELIV_META_FS, DELIV_TEXT_H, LIGHT_TEXT_COLOR)

        # Accent bar only when the block stayed on one page.
        if pg.state.page_index == start_page:
            pg.page.draw_rect(x0, pg.y + 2, DELIV_BAR_W, block_top - pg.y - 2, ctx.theme.accent)
        pg.advance(DELIV_GAP)

    pg.advance(SECTION_GAP_BELOW - DELIV_GAP)


def _table_header(ctx: LayoutContext, pg: Paginator) -> None:
    x0, x1 = ctx.ps.x0, ctx.ps.x1
    page = pg.page
    top = pg.y
    page.draw_rect(x0, top - TABLE_HEADER_H, x1 - x0, TABLE_HEADER_H, ctx.theme.accent)

    base = top - 16
    font = ctx.fonts.heading
    page.draw_text("Description", x0 + CELL_PAD, base, font, TABLE_HEADER_FS, colors.white)
    _draw_right(page, "Qty", x0 + COL_QTY_R, base, font, TABLE_HEADER_FS, colors.white)
    _draw_right(page, "Rate", x0 + COL_RATE_R, base, font, TABLE_HEADER_FS, colors.white)
    _draw_right(page, "Amount", x1 - CELL_PAD, base, font, TABLE_HEADER_FS, colors.white)
    pg.advance(TABLE_HEADER_H)


def _fit_size(text: str, font: str, size: float, max_w: float) -> float:
    """Largest size up to `size` at which `text` fits in `max_w`."""
    w = text_width(text, font, size)
    if w <= max_w or w == 0:
        return size
    return size * max_w / w


def _draw_cell(page: PageCanvas, text: str, x_right: float, max_w: float, y: float, font: str) -> None:
    _draw_right(page, text, x_right, y, font, _fit_size(text, font, ROW_FS, max_w), TEXT_COLOR)


def _row_height(n_lines: int) -> float:
    return max(ROW_MIN_H, n_lines * ROW_LINE_H + ROW_PAD_BOTTOM)


def _row_capacity(pg: Paginator) -> int:
    """Description lines that fit in one row at the cursor."""
    if pg.remaining() < ROW_MIN_H:
        return 0
    return int((pg.remaining() - ROW_PAD_BOTTOM) // ROW_LINE_H)


def draw_items_table(ctx: LayoutContext, pg: Paginator) -> None:
    """
    Four-column table. The header row is always drawn, and repeated at the
    top of a page when rows spill over.

    A row too tall for the page is split: the description continues on the
    next page under a "(cont.)" marker, and quantity, rate and amount are
    drawn on the first part only.
    """
    doc = ctx.doc
    x0, x1 = ctx.ps.x0, ctx.ps.x1
    cur = doc.currency
    desc_w = COL_DESC_W - 2 * CELL_PAD
    qty_w = COL_QTY_R - COL_DESC_W
    rate_w = COL_RATE_R - COL_QTY_R - CELL_PAD
    amount_w = (x1 - CELL_PAD) - (x0 + COL_RATE_R + CELL_PAD)

    _heading(ctx, pg, "Cost Breakdown", TABLE_HEADER_H + ROW_MIN_H)
    _table_header(ctx, pg)

    for i, item in enumerate(doc.line_items):
        desc = clean(item.description) or "Item"
        pending = [ln for ln in wrap_text(desc, desc_w, ctx.fonts.regular, ROW_FS) if ln] or [desc]
        first = True

        while pending:
            need = _row_height(len(pending))
            if need > pg.remaining():
                fits_fresh = need <= pg.page_capacity() - TABLE_HEADER_H
                if fits_fresh or _row_capacity(pg) == 0:
                    pg.new_page()
                    _table_header(ctx, pg)

            n = max(1, min(len(pending), _row_capacity(pg)))
            chunk, pending = pending[:n], pending[n:]
            row_h = _row_height(len(chunk))

            page = pg.page
            top = pg.y
            if i % 2 == 0:
                page.draw_rect(x0, top - row_h, x1 - x0, row_h, PANEL_FILL)

            base = top - ROW_PAD_TOP
            yy = base
            for ln in chunk:
                page.draw_text(ln, x0 + CELL_PAD, yy, ctx.fonts.regular, ROW_FS, TEXT_COLOR)
                yy -= ROW_LINE_H

            if first:
                _draw_cell(page, quantity_str(item.quantity), x0 + COL_QTY_R, qty_w, base, ctx.fonts.regular)
                _draw_cell(page, money_str(item.rate, cur), x0 + COL_RATE_R, rate_w, base, ctx.fonts.regular)
                _draw_cell(page, money_str(item.amount, cur), x1 - CELL_PAD, amount_w, base, ctx.fonts.regular)
            else:
                _draw_right(page, "(cont.)", x0 + COL_QTY_R, base, ctx.fonts.italic, ROW_FS, LIGHT_TEXT_COLOR)

            pg.advance(row_h)
            first = False

    pg.advance(SECTION_GAP_BELOW)


def draw_totals(ctx: LayoutContext, pg: Paginator) -> None:
    x1 = ctx.ps.x1
    pg.ensure_space(TOTALS_H)

    page = pg.page
    top = pg.y
    page.draw_line(ctx.ps.x0 + COL_QTY_R - 40, top, x1, top, ctx.theme.accent, 1.0)

    value_x = x1 - CELL_PAD
    _draw_right(page, "TOTAL", value_x, top - 16, ctx.fonts.heading, TOTAL_LABEL_FS, LIGHT_TEXT_COLOR)
    _draw_right(
        page,
        money_str(ctx.doc.grand_total, ctx.doc.currency),
        value_x,
        top - 16 - TOTAL_VALUE_FS - 6,
        ctx.fonts.heading,
        TOTAL_VALUE_FS,
        ctx.theme.accent,
    )
    pg.advance(TOTALS_H + TOTALS_GAP_BELOW)


def draw_milestones(ctx: LayoutContext, pg: Paginator) -> None:
    doc = ctx.doc
    if not doc.milestones:
        return

    x0 = ctx.ps.x0
    cur = doc.currency
    amounts = doc.milestone_amounts()
    desc_w = ctx.ps.content_w - 20

    _heading(ctx, pg, "Payment Schedule", MILESTONE_H)

    for m, amount in zip(doc.milestones, amounts):
        pg.ensure_space(MILESTONE_H)
        page = pg.page
        base = pg.y - MILESTONE_FS
        page.draw_text(f"• {clean(m.label) or 'Milestone'}", x0 + 10, base, ctx.fonts.bold, MILESTONE_FS, TEXT_COLOR)
        page.draw_text(
            f"{quantity_str(m.percentage)}% - {money_str(amount, cur)}",
            x0 + MILESTONE_AMOUNT_X,
            base,
            ctx.fonts.regular,
            MILESTONE_FS,
            ctx.theme.accent,
        )
        if m.due_date:
            page.draw_text(
                f"Due: {date_str(m.due_date)}",
                x0 + MILESTONE_DUE_X,
                base,
                ctx.fonts.regular,
                MILESTONE_DESC_FS,
                LIGHT_TEXT_COLOR,
            )
        pg.advance(MILESTONE_H)

        desc = clean(m.description)
        if desc:
            lines = wrap_text(desc, desc_w, ctx.fonts.italic, MILESTONE_DESC_FS)
            _flow_lines(pg, lines, x0 + 20, ctx.fonts.italic, MILESTONE_DESC_FS, MILESTONE_DESC_H, LIGHT_TEXT_COLOR)

    pg.advance(SECTION_GAP_BELOW)


def draw_payment_details(ctx: LayoutContext, pg: Paginator) -> None:
    details = ctx.doc.payment_details
    rows = details.rows() if details else ()
    if not rows:
        return

    x0 = ctx.ps.x0
    _heading(ctx, pg, "Payment Details", PAYMENT_LINE_H)
    for label, value in rows:
        pg.ensure_space(PAYMENT_LINE_H)
        base = pg.y - PAYMENT_FS
        label_txt = f"{label}:"
        pg.page.draw_text(label_txt, x0, base, ctx.fonts.bold, PAYMENT_FS, TEXT_COLOR)
        vx = x0 + text_width(label_txt, ctx.fonts.bold, PAYMENT_FS) + 4
        pg.page.draw_text(value, vx, base, ctx.fonts.regular, PAYMENT_FS, TEXT_COLOR)
        pg.advance(PAYMENT_LINE_H)
    pg.advance(SECTION_GAP_BELOW)
