# ledgerdocs/services/document_records.py
from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from ledgerdocs.config import default_currency
from ledgerdocs.models import (
    Deliverable,
    DocumentKind,
    DocumentModel,
    LineItem,
    Milestone,
    Party,
    PaymentDetails,
    Project,
    TextSection,
)


def _s(x: Any) -> str:
    return str(x if x is not None else "").strip()


def _dec(s: Any, *, field_name: str) -> Decimal:
    t = str(s if s is not None else "").replace(",", "").strip()
    if not t:
        return Decimal("0")
    try:
        d = Decimal(t)
    except InvalidOperation:
        raise ValueError(f"{field_name}: not a number: {s!r}")
    if not d.is_finite():
        raise ValueError(f"{field_name}: not a finite number: {s!r}")
    return d


def _json_list(raw: Any, *, field_name: str) -> List[dict]:
    """
    Sub-lists arrive either as JSON text (as stored on the row) or already
    decoded.
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"{field_name}: invalid JSON: {e}")
    if not isinstance(raw, list):
        raise ValueError(f"{field_name}: expected a list")
    return [x for x in raw if isinstance(x, dict)]


def _date_or_none(x: Any) -> Optional[date]:
    if x is None or x == "":
        return None
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    t = str(x).strip()
    try:
        return datetime.fromisoformat(t.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError(f"not an ISO date: {x!r}")


def _created_at(row: dict) -> date | datetime:
    v = row.get("created_at")
    if isinstance(v, (date, datetime)):
        return v
    if v:
        return datetime.fromisoformat(str(v).replace("Z", "+00:00"))
    return date.today()


def party_from_record(row: Optional[dict]) -> Optional[Party]:
    if not row:
        return None
    return Party(
        name=_s(row.get("name")),
        email=_s(row.get("email")),
        phone=_s(row.get("phone")),
        address=_s(row.get("address")),
        logo_key=_s(row.get("logo_key") or row.get("logo_url")) or None,
    )


def project_from_record(row: Optional[dict]) -> Optional[Project]:
    if not row or not _s(row.get("name")):
        return None
    return Project(name=_s(row.get("name")), description=_s(row.get("description")))


def _line_items(raw: Any) -> List[LineItem]:
    items: List[LineItem] = []
    for x in _json_list(raw, field_name="items"):
        desc = _s(x.get("description")) or _s(x.get("item"))
        rate = x.get("rate") if x.get("rate") is not None else x.get("price")
        items.append(
            LineItem(
                description=desc,
                quantity=_dec(x.get("quantity"), field_name="items.quantity"),
                rate=_dec(rate, field_name="items.rate"),
                category=_s(x.get("category")),
            )
        )
    return items


def _milestones(raw: Any) -> List[Milestone]:
    out: List[Milestone] = []
    for x in _json_list(raw, field_name="payment_terms"):
        out.append(
            Milestone(
                label=_s(x.get("milestone")) or _s(x.get("name")) or _s(x.get("label")),
                percentage=_dec(x.get("percentage"), field_name="payment_terms.percentage"),
                due_date=_date_or_none(x.get("due_date") or x.get("dueDate")),
                description=_s(x.get("description")),
            )
        )
    return out


def _deliverables(raw: Any) -> List[Deliverable]:
    return [
        Deliverable(
            title=_s(x.get("title")),
            description=_s(x.get("description")),
            timeline=_s(x.get("timeline")),
        )
        for x in _json_list(raw, field_name="deliverables")
    ]


def quote_from_record(
    quote: dict,
    company: Optional[dict] = None,
    client: Optional[dict] = None,
    project: Optional[dict] = None,
) -> DocumentModel:
    opening = [
        TextSection("Introduction", _s(quote.get("introduction"))),
        TextSection("Project Scope", _s(quote.get("scope_summary") or quote.get("scope"))),
    ]
    closing = [
        TextSection("Conclusion", _s(quote.get("conclusion"))),
        TextSection("Terms & Conditions", _s(quote.get("notes") or quote.get("terms"))),
    ]

    validity = quote.get("validity_period")
    return DocumentModel(
        kind=DocumentKind.QUOTE,
        id=_s(quote.get("id")),
        created_at=_created_at(quote),
        status=_s(quote.get("status")) or "draft",
        title=_s(quote.get("title")),
        issuer=party_from_record(company),
        recipient=party_from_record(client),
        project=project_from_record(project),
        free_text_sections=tuple(s for s in opening if s.body),
        closing_sections=tuple(s for s in closing if s.body),
        deliverables=tuple(_deliverables(quote.get("deliverables"))),
        line_items=tuple(_line_items(quote.get("items"))),
        milestones=tuple(_milestones(quote.get("payment_terms"))),
        validity_days=int(validity) if validity not in (None, "") else 30,
        currency=_s(quote.get("currency")) or default_currency(),
    )


def invoice_from_record(
    invoice: dict,
    company: Optional[dict] = None,
    client: Optional[dict] = None,
    project: Optional[dict] = None,
) -> DocumentModel:
    closing = [TextSection("Payment Instructions", _s(invoice.get("payment_instructions")))]

    details = PaymentDetails(
        bank_name=_s(invoice.get("bank_name")),
        account_name=_s(invoice.get("account_name")),
        account_number=_s(invoice.get("account_number")),
        swift_code=_s(invoice.get("swift_code")),
    )

    return DocumentModel(
        kind=DocumentKind.INVOICE,
        id=_s(invoice.get("id")),
        created_at=_created_at(invoice),
        status=_s(invoice.get("status")) or "draft",
        title=_s(invoice.get("title")),
        issuer=party_from_record(company),
        recipient=party_from_record(client),
        project=project_from_record(project),
        closing_sections=tuple(s for s in closing if s.body),
        line_items=tuple(_line_items(invoice.get("items"))),
        due_date=_date_or_none(invoice.get("due_date")),
        payment_details=details if details.rows() else None,
        currency=_s(invoice.get("currency")) or default_currency(),
    )
