# ledgerdocs/errors.py
from __future__ import annotations


class LedgerDocsError(Exception):
    pass


class UnsupportedAssetFormat(LedgerDocsError):
    """Logo bytes that are not PNG or JPEG. Never escapes the header renderer."""


class RenderFailed(LedgerDocsError):
    """
    The document could not be produced at all.
    Carries the document id so the caller can correlate logs.
    """

    def __init__(self, document_id: str, message: str = "document render failed"):
        super().__init__(f"{message} (document_id={document_id})")
        self.document_id = document_id
