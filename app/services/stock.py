"""Delivery notes and stock entries.

Both doctypes post stock ledger entries on submit. Item rows always carry
``allow_zero_valuation_rate`` so items without a valuation rate can still be
moved; valuation itself is computed by the remote system.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from app.logging import get_logger
from app.schemas.stock import (
    DeliveryNoteCreate,
    DeliveryNoteItemLine,
    DeliveryNoteRead,
    StockEntryCreate,
    StockEntryItemLine,
    StockEntryRead,
)
from app.services.common import (
    OptionSources,
    bad_request,
    date_range_filters,
    eq_filters,
    load_options,
    timestamp_suffix,
)
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient, ERPNextError

logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 100
OPTION_LIMIT = 1000
DOCSTATUS_VALUES = ("0", "1", "2")

DELIVERY_NOTE_ITEM_FIELDS = [
    "item_code",
    "item_name",
    "qty",
    "uom",
    "rate",
    "amount",
    "warehouse",
    "batch_no",
    "serial_no",
    "against_sales_order",
]

ITEM_OPTION_FIELDS = ["item_code", "item_name", "stock_uom", "valuation_rate"]

DELIVERY_NOTE_OPTION_SOURCES: OptionSources = {
    "customers": ("Customer", ["name", "customer_name"], None, OPTION_LIMIT),
    "companies": ("Company", ["name"], None, OPTION_LIMIT),
    "warehouses": ("Warehouse", ["name"], None, OPTION_LIMIT),
    "territories": ("Territory", ["name"], None, OPTION_LIMIT),
    "items": ("Item", ITEM_OPTION_FIELDS, None, OPTION_LIMIT),
    "uoms": ("UOM", ["name"], None, OPTION_LIMIT),
}

STOCK_ENTRY_OPTION_SOURCES: OptionSources = {
    "companies": ("Company", ["name"], None, OPTION_LIMIT),
    "warehouses": ("Warehouse", ["name"], None, OPTION_LIMIT),
    "items": ("Item", ITEM_OPTION_FIELDS, None, OPTION_LIMIT),
    "uoms": ("UOM", ["name"], None, OPTION_LIMIT),
}


def selected(value: str | None) -> str | None:
    """Filter value from a query string; "all" and empty mean no filter."""
    if value in (None, "", "all"):
        return None
    return value


def docstatus_filter(docstatus: str | None) -> list[list[Any]]:
    value = selected(docstatus)
    if value is None:
        return []
    if value not in DOCSTATUS_VALUES:
        raise bad_request("docstatus must be one of: all, 0, 1, 2")
    return [["docstatus", "=", int(value)]]


def distinct_values(rows: list[dict[str, Any]], field: str) -> list[str]:
    """Non-empty values of ``field`` in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        value = row.get(field)
        if value:
            seen.setdefault(value, None)
    return list(seen)


def _names(rows: list[dict[str, Any]]) -> list[str]:
    return [row["name"] for row in rows if row.get("name")]


def delivery_note_row(item: DeliveryNoteItemLine) -> dict[str, Any]:
    row = item.model_dump(mode="json", exclude_none=True)
    row["allow_zero_valuation_rate"] = 1
    return row


def stock_entry_row(
    item: StockEntryItemLine,
    purpose: str | None,
    from_warehouse: str | None,
    to_warehouse: str | None,
) -> dict[str, Any]:
    """Child row for a stock entry item.

    Raw materials leave the source warehouse; finished goods of a
    manufacture land in the target warehouse only.
    """
    row = item.model_dump(mode="json", exclude_none=True)
    finished = item.is_finished_item
    if from_warehouse and not finished:
        row.setdefault("s_warehouse", from_warehouse)
    if to_warehouse and (finished or purpose != "Manufacture"):
        row.setdefault("t_warehouse", to_warehouse)
    row["is_finished_item"] = int(finished)
    row["allow_zero_valuation_rate"] = 1
    return row


class DeliveryNotes(DocumentResource[DeliveryNoteRead]):
    doctype = "Delivery Note"
    read_model = DeliveryNoteRead
    order_by = "modified desc"

    def list(
        self,
        client: ERPNextClient,
        customer: str | None = None,
        territory: str | None = None,
        posting_date_from: date | None = None,
        posting_date_to: date | None = None,
        docstatus: str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[DeliveryNoteRead]:
        filters = eq_filters(customer=selected(customer), territory=selected(territory))
        filters += date_range_filters("posting_date", posting_date_from, posting_date_to)
        filters += docstatus_filter(docstatus)
        return self.query(client, filters, limit=limit)

    def customers(self, client: ERPNextClient) -> list[str]:
        return _names(client.get_list("Customer", fields=["name"], limit_page_length=OPTION_LIMIT))

    def territories(self, client: ERPNextClient) -> list[str]:
        return _names(client.get_list("Territory", fields=["name"], limit_page_length=OPTION_LIMIT))

    def note_types(self, client: ERPNextClient) -> list[str]:
        rows = client.get_list(self.doctype, fields=["delivery_note_type"], limit_page_length=OPTION_LIMIT)
        return distinct_values(rows, "delivery_note_type")

    def options(self, client: ERPNextClient) -> dict[str, list[dict[str, Any]]]:
        return load_options(client, DELIVERY_NOTE_OPTION_SOURCES)

    def _items(self, client: ERPNextClient, name: str) -> list[dict[str, Any]]:
        try:
            return client.get_list(
                "Delivery Note Item",
                fields=DELIVERY_NOTE_ITEM_FIELDS,
                filters=[["parent", "=", name]],
                order_by="idx asc",
                parent=self.doctype,
            )
        except ERPNextError as exc:
            logger.warning("delivery_note_items_unavailable name=%s error=%s", name, exc.message)
            return []

    def get(self, client: ERPNextClient, name: str) -> DeliveryNoteRead:
        doc = client.get_doc(self.doctype, name)
        if not isinstance(doc.get("items"), list):
            doc["items"] = self._items(client, name)
        return self.project(doc)

    def build_doc(self, client: ERPNextClient, payload: DeliveryNoteCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True, exclude={"items"})
        doc["name"] = payload.name or f"DN-{payload.customer}-{timestamp_suffix()}"
        doc["items"] = [delivery_note_row(item) for item in payload.items]
        return doc

    def build_changes(self, client: ERPNextClient, payload, current: dict[str, Any]) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"items"})
        if payload.items is not None:
            changes["items"] = [delivery_note_row(item) for item in payload.items]
        return changes


class StockEntries(DocumentResource[StockEntryRead]):
    doctype = "Stock Entry"
    read_model = StockEntryRead
    order_by = "modified desc"

    def list(
        self,
        client: ERPNextClient,
        stock_entry_type: str | None = None,
        purpose: str | None = None,
        from_warehouse: str | None = None,
        to_warehouse: str | None = None,
        posting_date_from: date | None = None,
        posting_date_to: date | None = None,
        docstatus: str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[StockEntryRead]:
        filters = eq_filters(
            stock_entry_type=selected(stock_entry_type),
            purpose=selected(purpose),
            from_warehouse=selected(from_warehouse),
            to_warehouse=selected(to_warehouse),
        )
        filters += date_range_filters("posting_date", posting_date_from, posting_date_to)
        filters += docstatus_filter(docstatus)
        return self.query(client, filters, limit=limit)

    def entry_types(self, client: ERPNextClient) -> list[str]:
        rows = client.get_list(self.doctype, fields=["stock_entry_type"], limit_page_length=OPTION_LIMIT)
        return distinct_values(rows, "stock_entry_type")

    def options(self, client: ERPNextClient) -> dict[str, Any]:
        options: dict[str, Any] = load_options(client, STOCK_ENTRY_OPTION_SOURCES)
        entries = client.get_list(
            self.doctype, fields=["stock_entry_type", "purpose"], limit_page_length=OPTION_LIMIT
        )
        options["stock_entry_types"] = distinct_values(entries, "stock_entry_type")
        options["purposes"] = distinct_values(entries, "purpose")
        return options

    def build_doc(self, client: ERPNextClient, payload: StockEntryCreate) -> dict[str, Any]:
        purpose = payload.entry_purpose
        prefix = "STE-MI" if purpose == "Material Issue" else "STE-MR"
        doc = payload.model_dump(mode="json", exclude_none=True, exclude={"items"})
        doc["name"] = payload.name or f"{prefix}-{timestamp_suffix()}"
        doc["purpose"] = purpose
        doc["items"] = [
            stock_entry_row(item, purpose, payload.from_warehouse, payload.to_warehouse)
            for item in payload.items
        ]
        return doc

    def build_changes(self, client: ERPNextClient, payload, current: dict[str, Any]) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"items"})
        if payload.items is not None:
            from_warehouse = changes.get("from_warehouse", current.get("from_warehouse"))
            to_warehouse = changes.get("to_warehouse", current.get("to_warehouse"))
            purpose = current.get("purpose") or current.get("stock_entry_type")
            changes["items"] = [
                stock_entry_row(item, purpose, from_warehouse, to_warehouse) for item in payload.items
            ]
        return changes


delivery_notes = DeliveryNotes()
stock_entries = StockEntries()
