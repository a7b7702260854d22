from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from ledgerdocs import api_main
from ledgerdocs.errors import RenderFailed


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("S3_BUCKET", raising=False)
    return TestClient(api_main.app)


QUOTE_BODY = {
    "quote": {
        "id": "1017",
        "created_at": "2026-03-02",
        "items": json.dumps([{"description": "Build", "quantity": 1, "rate": 10000}]),
        "payment_terms": json.dumps([
            {"milestone": "Deposit", "percentage": 40},
            {"milestone": "Final", "percentage": 60},
        ]),
    },
    "company": {"name": "Acme Studio Ltd"},
    "client": {"name": "Jane Wanjiru"},
    "project": None,
}


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_quote_pdf(client):
    r = client.post("/api/quotes/pdf", json=QUOTE_BODY)
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")
    assert "Jane_Wanjiru_Quote_%231017.pdf" in r.headers["content-disposition"]


def test_invoice_pdf(client):
    body = {
        "invoice": {"id": "204", "created_at": "2026-04-01", "items": [{"description": "Dev", "quantity": 1, "price": 2000}]},
        "client": None,
    }
    r = client.post("/api/invoices/pdf", json=body)
    assert r.status_code == 200
    assert r.content.startswith(b"%PDF")
    assert "Unknown_Invoice_%23204.pdf" in r.headers["content-disposition"]


def test_missing_record_is_bad_request(client):
    assert client.post("/api/quotes/pdf", json={"company": {}}).status_code == 400
    assert client.post("/api/invoices/pdf", json={"quote": {}}).status_code == 400


def test_malformed_items_are_bad_request(client):
    body = dict(QUOTE_BODY, quote=dict(QUOTE_BODY["quote"], items="[{broken"))
    r = client.post("/api/quotes/pdf", json=body)
    assert r.status_code == 400
    assert "items" in r.json()["detail"]


def test_render_failure_is_server_error(client, monkeypatch):
    def boom(doc, **kwargs):
        raise RenderFailed(doc.id)

    monkeypatch.setattr(api_main, "render_document", boom)
    r = client.post("/api/quotes/pdf", json=QUOTE_BODY)
    assert r.status_code == 500
    assert "1017" in r.json()["detail"]


@pytest.mark.parametrize("quantity", ["NaN", "Infinity"])
def test_non_finite_quantity_is_bad_request(client, quantity):
    items = json.dumps([{"description": "Build", "quantity": quantity, "rate": 100}])
    body = dict(QUOTE_BODY, quote=dict(QUOTE_BODY["quote"], items=items))
    r = client.post("/api/quotes/pdf", json=body)
    assert r.status_code == 400


def test_storage_is_skipped_without_a_bucket(monkeypatch):
    calls = []
    monkeypatch.setattr(api_main, "get_storage", lambda: calls.append(1) or object())

    monkeypatch.delenv("S3_BUCKET", raising=False)
    assert api_main._storage_or_none() is None
    assert calls == []

    monkeypatch.setenv("S3_BUCKET", "ledger-assets")
    assert api_main._storage_or_none() is not None
    assert calls == [1]
