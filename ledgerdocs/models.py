# ledgerdocs/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional, Tuple, Union

from ledgerdocs.config import default_currency

CENTS = Decimal("0.01")


def to_money(x: Union[Decimal, int, float, str]) -> Decimal:
    return Decimal(str(x)).quantize(CENTS, rounding=ROUND_HALF_UP)


class DocumentKind(str, Enum):
    QUOTE = "quote"
    INVOICE = "invoice"


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    OVERDUE = "overdue"
    EXPIRED = "expired"


@dataclass(frozen=True)
class Party:
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""

    # Blob storage key of the logo; bytes win when both are given.
    logo_key: Optional[str] = None
    logo_bytes: Optional[bytes] = None


@dataclass(frozen=True)
class Project:
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class TextSection:
    title: str
    body: str = ""


@dataclass(frozen=True)
class Deliverable:
    title: str
    description: str = ""
    timeline: str = ""


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: Decimal = Decimal("1")
    rate: Decimal = Decimal("0")
    category: str = ""

    def __post_init__(self):
        object.__setattr__(self, "quantity", Decimal(str(self.quantity)))
        object.__setattr__(self, "rate", Decimal(str(self.rate)))
        if not (self.quantity.is_finite() and self.rate.is_finite()):
            raise ValueError(f"line item quantity and rate must be finite, got {self.quantity} x {self.rate}")
        if self.quantity < 0:
            raise ValueError(f"line item quantity must be >= 0, got {self.quantity}")
        if self.rate < 0:
            raise ValueError(f"line item rate must be >= 0, got {self.rate}")

    @property
    def amount(self) -> Decimal:
        return to_money(self.quantity * self.rate)


@dataclass(frozen=True)
class Milestone:
    label: str
    percentage: Decimal = Decimal("0")
    due_date: Optional[date] = None
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "percentage", Decimal(str(self.percentage)))
        if not self.percentage.is_finite() or not (Decimal("0") <= self.percentage <= Decimal("100")):
            raise ValueError(f"milestone percentage must be within 0..100, got {self.percentage}")

    def amount_of(self, subtotal: Decimal) -> Decimal:
        return to_money(self.percentage / Decimal("100") * subtotal)


@dataclass(frozen=True)
class PaymentDetails:
    bank_name: str = ""
    account_name: str = ""
    account_number: str = ""
    swift_code: str = ""

    def rows(self) -> Tuple[Tuple[str, str], ...]:
        pairs = (
            ("Bank", self.bank_name),
            ("Account Name", self.account_name),
            ("Account No", self.account_number),
            ("Swift Code", self.swift_code),
        )
        return tuple((label, value.strip()) for label, value in pairs if (value or "").strip())


@dataclass(frozen=True)
class DocumentModel:
    """
    Fully resolved quote or invoice, ready for a single render pass.

    The `kind` tag selects the variant: invoices may carry `due_date` and
    `payment_details`, quotes carry `validity_days`, `milestones` and
    `deliverables`.
    """

    kind: DocumentKind
    id: str
    created_at: Union[date, datetime]
    status: DocumentStatus = DocumentStatus.DRAFT
    title: str = ""

    issuer: Optional[Party] = None
    recipient: Optional[Party] = None
    project: Optional[Project] = None

    free_text_sections: Tuple[TextSection, ...] = ()
    closing_sections: Tuple[TextSection, ...] = ()
    deliverables: Tuple[Deliverable, ...] = ()
    line_items: Tuple[LineItem, ...] = ()
    milestones: Tuple[Milestone, ...] = ()

    due_date: Optional[date] = None
    validity_days: Optional[int] = None
    payment_details: Optional[PaymentDetails] = None

    currency: str = field(default_factory=default_currency)

    def __post_init__(self):
        object.__setattr__(self, "kind", DocumentKind(self.kind))
        object.__setattr__(self, "status", DocumentStatus(self.status or DocumentStatus.DRAFT))
        object.__setattr__(self, "id", str(self.id))
        for name in ("free_text_sections", "closing_sections", "deliverables", "line_items", "milestones"):
            object.__setattr__(self, name, tuple(getattr(self, name) or ()))

        if self.kind is DocumentKind.QUOTE:
            if self.due_date is not None:
                raise ValueError("a quote carries a validity period, not a due date")
            if self.validity_days is None:
                object.__setattr__(self, "validity_days", 30)
        else:
            if self.validity_days is not None:
                raise ValueError("an invoice carries a due date, not a validity period")
            if self.milestones:
                raise ValueError("payment milestones only apply to quotes")

    @property
    def is_quote(self) -> bool:
        return self.kind is DocumentKind.QUOTE

    @property
    def subtotal(self) -> Decimal:
        return to_money(sum((it.amount for it in self.line_items), Decimal("0")))

    @property
    def grand_total(self) -> Decimal:
        # Milestones partition the subtotal; they never add to it.
        return self.subtotal

    def milestone_amounts(self) -> Tuple[Decimal, ...]:
        subtotal = self.subtotal
        return tuple(m.amount_of(subtotal) for m in self.milestones)
