from __future__ import annotations

from datetime import date

import pytest

from helpers import CREATED
from ledgerdocs.models import DocumentKind, DocumentModel, LineItem, Milestone, Party


@pytest.fixture
def company() -> Party:
    return Party(
        name="Acme Studio Ltd",
        email="hello@acmestudio.co.ke",
        phone="+254 700 000 000",
        address="Kenyatta Avenue, Nairobi",
    )


@pytest.fixture
def client_party() -> Party:
    return Party(name="Jane Wanjiru", email="jane@example.com")


@pytest.fixture
def scenario_items():
    return (
        LineItem("Design", 2, 500),
        LineItem("Dev", 1, 2000),
        LineItem("Hosting", 12, 50),
    )


@pytest.fixture
def scenario_invoice(scenario_items, company, client_party) -> DocumentModel:
    return DocumentModel(
        kind=DocumentKind.INVOICE,
        id="204",
        created_at=CREATED,
        due_date=date(2026, 4, 30),
        issuer=company,
        recipient=client_party,
        line_items=scenario_items,
        currency="KSH",
    )


@pytest.fixture
def milestone_quote(company, client_party) -> DocumentModel:
    return DocumentModel(
        kind=DocumentKind.QUOTE,
        id="1017",
        created_at=CREATED,
        issuer=company,
        recipient=client_party,
        line_items=(LineItem("Build", 1, 10000),),
        milestones=(
            Milestone("Deposit", 40, due_date=date(2026, 3, 10)),
            Milestone("Final", 60),
        ),
        currency="KSH",
    )
