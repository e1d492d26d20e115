from __future__ import annotations

from datetime import date
from typing import Any

from app.config import settings
from app.schemas.accounting import (
    PURCHASE_STATUS_ALIASES,
    PurchaseInvoiceCreate,
    PurchaseInvoiceRead,
    PurchaseInvoiceUpdate,
    SalesInvoiceCreate,
    SalesInvoiceRead,
    SalesInvoiceUpdate,
)
from app.services.common import build_item_rows, date_range_filters, eq_filters, iso, today, totals_fields
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.mappers import map_purchase_invoice


def _item_changes(items, child_doctype: str) -> dict[str, Any]:
    rows, total = build_item_rows(items, child_doctype)
    return {"items": rows, **totals_fields(total)}


class SalesInvoices(DocumentResource[SalesInvoiceRead]):
    doctype = "Sales Invoice"
    read_model = SalesInvoiceRead
    order_by = "posting_date desc"

    def list(
        self,
        client: ERPNextClient,
        customer: str | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        limit: int | None = None,
    ) -> list[SalesInvoiceRead]:
        filters = eq_filters(customer=customer, status=status)
        filters += date_range_filters("posting_date", date_from, date_to)
        return self.query(client, filters, limit=limit)

    def build_doc(self, client: ERPNextClient, payload: SalesInvoiceCreate) -> dict[str, Any]:
        rows, total = build_item_rows(payload.items, "Sales Invoice Item")
        posting_date = payload.posting_date or today()
        return {
            "customer": payload.customer,
            "posting_date": iso(posting_date),
            "due_date": iso(payload.due_date or posting_date),
            "company": payload.company or settings.default_company or None,
            "currency": payload.currency or settings.default_currency,
            "conversion_rate": payload.conversion_rate,
            **totals_fields(total),
            "outstanding_amount": total,
            "docstatus": 0,
            "update_stock": 1,
            "is_return": 0,
            "is_debit_note": 0,
            "items": rows,
        }

    def build_changes(
        self, client: ERPNextClient, payload: SalesInvoiceUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"items"})
        if payload.items is not None:
            changes.update(_item_changes(payload.items, "Sales Invoice Item"))
            changes["outstanding_amount"] = changes["grand_total"]
        return changes


class PurchaseInvoices(DocumentResource[PurchaseInvoiceRead]):
    doctype = "Purchase Invoice"
    read_model = PurchaseInvoiceRead
    order_by = "posting_date desc"

    def map_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        return map_purchase_invoice(doc)

    def list(
        self,
        client: ERPNextClient,
        status: str | None = None,
        supplier: str | None = None,
        limit: int | None = None,
    ) -> list[PurchaseInvoiceRead]:
        if status:
            status = PURCHASE_STATUS_ALIASES.get(status.lower(), status)
        filters = eq_filters(status=status, supplier=supplier)
        return self.query(client, filters, limit=limit)

    def build_doc(self, client: ERPNextClient, payload: PurchaseInvoiceCreate) -> dict[str, Any]:
        rows, total = build_item_rows(payload.items, "Purchase Invoice Item")
        return {
            "supplier": payload.supplier,
            "posting_date": iso(payload.posting_date),
            "due_date": iso(payload.due_date or payload.posting_date),
            "company": payload.company,
            "bill_no": payload.bill_no,
            "currency": payload.currency or settings.default_currency,
            **totals_fields(total),
            "outstanding_amount": total,
            "docstatus": 0,
            "items": rows,
        }

    def build_changes(
        self, client: ERPNextClient, payload: PurchaseInvoiceUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"items"})
        if payload.items is not None:
            changes.update(_item_changes(payload.items, "Purchase Invoice Item"))
            changes["outstanding_amount"] = changes["grand_total"]
        return changes


sales_invoices = SalesInvoices()
purchase_invoices = PurchaseInvoices()
