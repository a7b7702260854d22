# scripts/render_sample.py
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from pypdf import PdfReader

from ledgerdocs.services.document_records import invoice_from_record, quote_from_record
from ledgerdocs.styling.document.renderer import document_filename, render_document
from ledgerdocs.styling.router import normalize_kind

SAMPLE_COMPANY = {
    "name": "Acme Studio Ltd",
    "email": "hello@acmestudio.co.ke",
    "phone": "+254 700 000 000",
    "address": "Kenyatta Avenue, Nairobi",
}

SAMPLE_CLIENT = {
    "name": "Jane Wanjiru",
    "email": "jane@example.com",
    "phone": "+254 711 111 111",
    "address": "Westlands, Nairobi",
}

SAMPLE_QUOTE = {
    "id": "1017",
    "title": "Website Redesign",
    "created_at": "2026-03-02",
    "status": "sent",
    "validity_period": 30,
    "introduction": "Thank you for the opportunity to quote on your website redesign.\nThis proposal covers design, build and hosting.",
    "scope_summary": "A responsive marketing site with a blog and a contact form.",
    "deliverables": json.dumps([
        {"title": "Design system", "description": "Colours, type scale and components.", "timeline": "2 weeks"},
        {"title": "Website build", "description": "Implementation of all agreed pages.", "timeline": "4 weeks"},
    ]),
    "items": json.dumps([
        {"description": "Design", "quantity": 2, "rate": 500},
        {"description": "Development", "quantity": 1, "rate": 2000},
        {"description": "Hosting (monthly)", "quantity": 12, "rate": 50},
    ]),
    "payment_terms": json.dumps([
        {"milestone": "Deposit", "percentage": 40, "due_date": "2026-03-10"},
        {"milestone": "Final", "percentage": 60},
    ]),
    "notes": "Prices exclude VAT.\nWork starts once the deposit is received.",
}

SAMPLE_INVOICE = {
    "id": "204",
    "created_at": "2026-04-01",
    "due_date": "2026-04-30",
    "status": "sent",
    "items": [
        {"description": "Design", "quantity": 2, "price": 500},
        {"description": "Development", "quantity": 1, "price": 2000},
        {"description": "Hosting", "quantity": 12, "price": 50},
    ],
    "bank_name": "Equity Bank",
    "account_name": "Acme Studio Ltd",
    "account_number": "0123456789",
    "swift_code": "EQBLKENA",
    "payment_instructions": "Please quote the invoice number as the payment reference.",
}


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--out", default="tmp", help="Output folder")
    parser.add_argument("--rows", type=int, default=0, help="Extra line items to force pagination")
    parser.add_argument("--kind", action="append", help="quote and/or invoice (default: both)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    quote = dict(SAMPLE_QUOTE)
    if args.rows:
        items = json.loads(quote["items"])
        items += [{"description": f"Extra item {i + 1}", "quantity": 1, "rate": 100} for i in range(args.rows)]
        quote["items"] = json.dumps(items)

    docs = [
        quote_from_record(quote, SAMPLE_COMPANY, SAMPLE_CLIENT, {"name": "Acme Website", "description": "Marketing site"}),
        invoice_from_record(SAMPLE_INVOICE, SAMPLE_COMPANY, SAMPLE_CLIENT),
    ]
    if args.kind:
        wanted = {normalize_kind(k) for k in args.kind}
        docs = [d for d in docs if d.kind in wanted]

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    for doc in docs:
        pdf = render_document(doc)
        out_path = out_dir / document_filename(doc)
        out_path.write_bytes(pdf)

        pages = len(PdfReader(str(out_path)).pages)
        print(f"✅ {doc.kind.value} #{doc.id}: {out_path.resolve()} ({pages} page(s))")
        print(f"   subtotal : {doc.currency} {doc.subtotal:,.2f}")
        for m, amount in zip(doc.milestones, doc.milestone_amounts()):
            print(f"   {m.label:9}: {m.percentage}% -> {doc.currency} {amount:,.2f}")


if __name__ == "__main__":
    main()
