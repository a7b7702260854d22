# ledgerdocs/api_main.py
from __future__ import annotations

import logging
from urllib.parse import quote

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import Response

from ledgerdocs import config
from ledgerdocs.errors import RenderFailed
from ledgerdocs.models import DocumentModel
from ledgerdocs.services.document_records import invoice_from_record, quote_from_record
from ledgerdocs.storage.s3_storage import get_storage
from ledgerdocs.styling.document.renderer import PDF_CONTENT_TYPE, document_filename, render_document

logger = logging.getLogger(__name__)

app = FastAPI(title="LedgerDocs PDF API")


def _storage_or_none():
    # Logos are optional; without a bucket every document gets text branding.
    if not config.logo_storage_enabled():
        return None
    try:
        return get_storage()
    except Exception as e:
        logger.warning("Blob storage unavailable, rendering without logos: %s", e)
        return None


def _pdf_response(doc: DocumentModel) -> Response:
    try:
        pdf = render_document(doc, storage=_storage_or_none())
    except RenderFailed as e:
        raise HTTPException(status_code=500, detail=f"Could not render document {e.document_id}")

    filename = document_filename(doc)
    return Response(
        content=pdf,
        media_type=PDF_CONTENT_TYPE,
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(filename)}"},
    )


@app.get("/api/health")
def health():
    return {"ok": True}


@app.post("/api/quotes/pdf")
def quote_pdf(body: dict = Body(...)):
    """
    body = { "quote": {...row...}, "company": {...}|null, "client": {...}|null, "project": {...}|null }
    """
    row = body.get("quote")
    if not isinstance(row, dict):
        raise HTTPException(status_code=400, detail="Missing quote")

    try:
        doc = quote_from_record(row, body.get("company"), body.get("client"), body.get("project"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _pdf_response(doc)


@app.post("/api/invoices/pdf")
def invoice_pdf(body: dict = Body(...)):
    row = body.get("invoice")
    if not isinstance(row, dict):
        raise HTTPException(status_code=400, detail="Missing invoice")

    try:
        doc = invoice_from_record(row, body.get("company"), body.get("client"), body.get("project"))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _pdf_response(doc)
