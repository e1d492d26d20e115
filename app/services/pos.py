"""Point of sale: catalog for the till and submitted POS invoices."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import HTTPException

from app.config import settings
from app.logging import get_logger
from app.schemas.pos import POSCatalog, POSCategory, POSItem, POSOrder, POSProfile, StockLevel
from app.services.common import as_float, iso, timestamp_suffix
from app.services.erpnext.client import ERPNextClient, ERPNextError

logger = get_logger(__name__)

ALL_GOODS_CATEGORY = "All Finished Goods"
CONFLICT_MARKER = "Document has been modified"

PROFILE_FIELDS = [
    "name",
    "company",
    "customer",
    "warehouse",
    "currency",
    "write_off_account",
    "expense_account",
    "income_account",
]
ITEM_FIELDS = [
    "item_code",
    "item_name",
    "description",
    "stock_uom",
    "image",
    "standard_rate",
    "is_stock_item",
    "item_group",
]


def category_keyword(group: str) -> str:
    """Keyword an item name must contain to belong to ``group``.

    >>> category_keyword("Pastries")
    'pastry'
    >>> category_keyword("Breads")
    'bread'
    """
    keyword = group.strip().lower()
    if keyword.endswith("ies"):
        return keyword[:-3] + "y"
    if keyword.endswith("s"):
        return keyword[:-1]
    return keyword


def categorize_items(items: list[POSItem], groups: list[str]) -> list[POSCategory]:
    """Group items by name keyword; unmatched items go to the catch-all category.

    An item matching several groups appears in each of them. Empty
    categories are dropped.
    """
    categories = [POSCategory(name=ALL_GOODS_CATEGORY)]
    categories += [POSCategory(name=group) for group in groups]
    keywords = [(category, category_keyword(category.name)) for category in categories[1:]]

    for item in items:
        name = item.item_name.lower()
        matched = False
        for category, keyword in keywords:
            if keyword and keyword in name:
                category.items.append(item)
                matched = True
        if not matched:
            categories[0].items.append(item)

    return [category for category in categories if category.items]


def is_conflict(exc: ERPNextError) -> bool:
    return CONFLICT_MARKER in (exc.message or "")


def current_time() -> str:
    return datetime.now().strftime("%H:%M:%S")


class PointOfSale:
    def profile(self, client: ERPNextClient) -> POSProfile:
        profiles = client.get_list("POS Profile", fields=PROFILE_FIELDS, limit_page_length=1)
        if not profiles:
            raise HTTPException(status_code=404, detail="No POS profile found")
        return POSProfile.model_validate(profiles[0])

    def _parent_group(self, client: ERPNextClient) -> str:
        group = settings.pos_item_group
        rows = client.get_list(
            "Item Group", fields=["name"], filters=[["name", "=", group]], limit_page_length=1
        )
        if not rows:
            raise HTTPException(status_code=404, detail=f"{group} item group not found")
        return rows[0]["name"]

    def _stock_map(self, client: ERPNextClient, warehouse: str | None, codes: list[str]) -> dict[str, float]:
        if not codes:
            return {}
        if not warehouse:
            logger.info("pos_profile_without_warehouse")
            return {}
        bins = client.get_list(
            "Bin",
            fields=["item_code", "actual_qty"],
            filters=[["item_code", "in", codes], ["warehouse", "=", warehouse]],
            limit_page_length=10000,
        )
        return {row["item_code"]: as_float(row.get("actual_qty")) for row in bins}

    def catalog(self, client: ERPNextClient) -> POSCatalog:
        profile = self.profile(client)
        customers = client.get_list(
            "Customer",
            fields=["name", "customer_name"],
            filters=[["disabled", "=", 0]],
            order_by="customer_name asc",
            limit_page_length=100,
        )
        parent = self._parent_group(client)
        child_groups = client.get_list(
            "Item Group",
            fields=["name"],
            filters=[["parent_item_group", "=", parent]],
            order_by="name asc",
            limit_page_length=100,
        )
        rows = client.get_list(
            "Item",
            fields=ITEM_FIELDS,
            filters=[["disabled", "=", 0], ["is_stock_item", "=", 1], ["item_group", "=", parent]],
            order_by="item_name asc",
            limit_page_length=1000,
        )
        stock = self._stock_map(client, profile.warehouse, [row["item_code"] for row in rows])
        items = [
            POSItem.model_validate({**row, "actual_qty": stock.get(row["item_code"], 0)}) for row in rows
        ]
        groups = [row["name"] for row in child_groups] or [parent]
        categories = categorize_items(items, groups)
        logger.info(
            "pos_catalog_loaded profile=%s items=%s categories=%s", profile.name, len(items), len(categories)
        )
        return POSCatalog(
            profile=profile,
            customers=[row["name"] for row in customers],
            categories=categories,
        )

    def build_invoice(self, order: POSOrder) -> dict[str, Any]:
        invoice = {
            "doctype": "Sales Invoice",
            "customer": order.customer,
            "posting_date": iso(order.posting_date),
            "posting_time": order.posting_time,
            "company": order.company,
            "set_warehouse": order.warehouse,
            "docstatus": 1,
            "items": [
                {
                    "item_code": item.item_code,
                    "item_name": item.item_name,
                    "qty": item.qty,
                    "rate": item.rate,
                    "uom": item.uom,
                    "warehouse": order.warehouse,
                }
                for item in order.items
            ],
            "payments": [payment.model_dump(mode="json") for payment in order.payments],
            "is_pos": 1,
            "update_stock": 1,
            "allow_zero_valuation_rate": 1,
        }
        return {key: value for key, value in invoice.items() if value is not None}

    def create_invoice(self, client: ERPNextClient, order: POSOrder) -> dict[str, Any]:
        """Insert a submitted POS invoice and return the stored document.

        A "Document has been modified" rejection is retried once under a
        fresh name and posting time. Every other error propagates.
        """
        invoice = self.build_invoice(order)
        try:
            created = client.insert(invoice)
        except ERPNextError as exc:
            if not is_conflict(exc):
                raise
            logger.warning("pos_invoice_conflict customer=%s retrying=1", order.customer)
            retry = {**invoice, "name": f"POS-{timestamp_suffix()}", "posting_time": current_time()}
            created = client.insert(retry)
        logger.info("pos_invoice_created name=%s customer=%s", created.get("name"), order.customer)
        return client.get_doc("Sales Invoice", created["name"])

    def stock_levels(
        self, client: ERPNextClient, item_codes: list[str], warehouse: str | None
    ) -> list[StockLevel]:
        codes = [code.strip() for code in item_codes if code and code.strip()]
        if not codes or not warehouse:
            raise HTTPException(status_code=400, detail="Item codes and warehouse are required")
        bins = client.get_list(
            "Bin",
            fields=["item_code", "warehouse", "actual_qty", "projected_qty", "stock_uom"],
            filters=[["item_code", "in", codes], ["warehouse", "=", warehouse]],
            limit_page_length=1000,
        )
        items = client.get_list(
            "Item",
            fields=["item_code", "item_name", "is_stock_item"],
            filters=[["item_code", "in", codes]],
            limit_page_length=1000,
        )
        details = {row["item_code"]: row for row in items}
        levels = []
        for row in bins:
            item = details.get(row["item_code"], {})
            levels.append(
                StockLevel.model_validate(
                    {
                        **row,
                        "item_name": item.get("item_name") or "",
                        "is_stock_item": item.get("is_stock_item") or 0,
                    }
                )
            )
        return levels


point_of_sale = PointOfSale()
