"""Two-step document fetching: list names, then fetch each full document.

The list endpoint of the document API only returns the requested columns of
the parent doctype, so detail views and reports expand every listed name with
its own ``frappe.client.get`` call. Those calls run on a bounded thread pool
and a failed fetch drops that record instead of failing the whole listing.
"""

from __future__ import annotations

import contextvars
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from app.config import settings
from app.logging import get_logger
from app.observability import ERP_FETCH_DROPPED
from app.services.erpnext.client import ERPNextClient, ERPNextError
from app.telemetry import get_tracer

logger = get_logger(__name__)


def list_names(
    client: ERPNextClient,
    doctype: str,
    filters: dict | list | None = None,
    order_by: str | None = "creation desc",
    limit: int | None = None,
) -> list[str]:
    rows = client.get_list(
        doctype,
        fields=["name"],
        filters=filters,
        order_by=order_by,
        limit_page_length=limit or settings.erp_list_limit,
    )
    return [row["name"] for row in rows if row.get("name")]


class FetchedDocuments(list):
    """Fetched documents, plus how many listed names could not be fetched."""

    def __init__(self, docs=(), dropped: int = 0):
        super().__init__(docs)
        self.dropped = dropped


def fetch_documents(
    client: ERPNextClient,
    doctype: str,
    names: list[str],
    max_workers: int | None = None,
) -> FetchedDocuments:
    """Fetch full documents for ``names``, preserving their order.

    Documents whose fetch raises ``ERPNextError`` are logged and left out of
    the result; ``dropped`` on the returned list counts them. Each fetch runs
    in a copy of the caller's context so the ``erp.fetch_documents`` span
    stays the parent of the HTTP calls made on the worker threads.
    """
    if not names:
        return FetchedDocuments()

    def _fetch(name: str) -> dict[str, Any] | None:
        try:
            return client.get_doc(doctype, name)
        except ERPNextError as exc:
            logger.warning(
                "erpnext_fetch_failed doctype=%s name=%s status=%s error=%s",
                doctype,
                name,
                exc.status_code,
                exc.message,
            )
            ERP_FETCH_DROPPED.labels(doctype).inc()
            return None

    workers = max(1, min(len(names), max_workers or settings.erp_fetch_concurrency))
    tracer = get_tracer(__name__)
    with tracer.start_as_current_span(
        "erp.fetch_documents",
        attributes={"erp.doctype": doctype, "erp.requested": len(names)},
    ):
        context = contextvars.copy_context()

        def _fetch_in_context(name: str) -> dict[str, Any] | None:
            # A Context can only be entered by one thread at a time.
            return context.copy().run(_fetch, name)

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="erp-fetch") as executor:
            results = list(executor.map(_fetch_in_context, names))

    docs = FetchedDocuments((doc for doc in results if doc is not None), dropped=results.count(None))
    if len(docs) < len(names):
        logger.info(
            "erpnext_fetch_partial doctype=%s requested=%s returned=%s",
            doctype,
            len(names),
            len(docs),
        )
    return docs


def list_documents(
    client: ERPNextClient,
    doctype: str,
    filters: dict | list | None = None,
    order_by: str | None = "creation desc",
    limit: int | None = None,
) -> FetchedDocuments:
    """List matching names and expand each into its full document."""
    names = list_names(client, doctype, filters=filters, order_by=order_by, limit=limit)
    return fetch_documents(client, doctype, names)


def fetch_all_documents(
    client: ERPNextClient,
    doctype: str,
    filters: dict | list | None = None,
    order_by: str | None = "creation asc",
) -> FetchedDocuments:
    """Like ``list_documents`` but pages through every matching name."""
    names = [
        row["name"]
        for row in client.get_all(doctype, fields=["name"], filters=filters, order_by=order_by)
        if row.get("name")
    ]
    return fetch_documents(client, doctype, names)
