from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import HTTPException

from app.config import settings
from app.schemas.crm.sales import (
    LeadRead,
    OpportunityCreate,
    OpportunityRead,
    QuotationCreate,
    QuotationRead,
    SalesOrderCreate,
    SalesOrderRead,
)
from app.services.common import build_item_rows, date_range_filters, eq_filters, iso, today, totals_fields
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient


class Leads(DocumentResource[LeadRead]):
    doctype = "Lead"
    read_model = LeadRead

    def list(
        self,
        client: ERPNextClient,
        status: str | None = None,
        source: str | None = None,
        territory: str | None = None,
        contact_by: str | None = None,
    ) -> list[LeadRead]:
        filters = eq_filters(status=status, source=source, territory=territory, contact_by=contact_by)
        return self.query(client, filters)


def opportunity_party(payload: OpportunityCreate) -> str:
    """Return the party the opportunity is opened for.

    The party must match the source: a customer for Customer, a lead for Lead.
    """
    if payload.opportunity_from == "Customer" and payload.customer:
        return payload.customer
    if payload.opportunity_from == "Lead" and payload.lead:
        return payload.lead
    raise HTTPException(status_code=400, detail="Party name is required based on opportunity source")


class Opportunities(DocumentResource[OpportunityRead]):
    doctype = "Opportunity"
    read_model = OpportunityRead

    def list(
        self,
        client: ERPNextClient,
        status: str | None = None,
        opportunity_type: str | None = None,
        sales_stage: str | None = None,
        customer: str | None = None,
        lead: str | None = None,
    ) -> list[OpportunityRead]:
        filters = eq_filters(
            status=status,
            opportunity_type=opportunity_type,
            sales_stage=sales_stage,
            customer=customer,
            lead=lead,
        )
        return self.query(client, filters)

    def build_doc(self, client: ERPNextClient, payload: OpportunityCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc["party_name"] = opportunity_party(payload)
        return doc


class _SalesDocuments(DocumentResource):
    """Quotation and Sales Order share item handling and date filters."""

    item_doctype: str

    def list(
        self,
        client: ERPNextClient,
        status: str | None = None,
        customer: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ):
        filters = eq_filters(status=status, customer=customer)
        filters += date_range_filters("transaction_date", date_from, date_to)
        return self.query(client, filters)

    def build_doc(self, client: ERPNextClient, payload) -> dict[str, Any]:
        rows, total = build_item_rows(payload.items, self.item_doctype)
        doc = payload.model_dump(mode="json", exclude_none=True, exclude={"items"})
        doc.update(
            {
                "transaction_date": iso(payload.transaction_date or today()),
                "currency": settings.default_currency,
                **totals_fields(total),
                "items": rows,
            }
        )
        return doc

    def build_changes(self, client: ERPNextClient, payload, current: dict[str, Any]) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"items"})
        if payload.items is not None:
            rows, total = build_item_rows(payload.items, self.item_doctype)
            changes.update({"items": rows, **totals_fields(total)})
        return changes


class Quotations(_SalesDocuments):
    doctype = "Quotation"
    read_model = QuotationRead
    item_doctype = "Quotation Item"

    def build_doc(self, client: ERPNextClient, payload: QuotationCreate) -> dict[str, Any]:
        doc = super().build_doc(client, payload)
        doc["quotation_to"] = "Customer"
        doc["party_name"] = payload.customer
        return doc


class SalesOrders(_SalesDocuments):
    doctype = "Sales Order"
    read_model = SalesOrderRead
    item_doctype = "Sales Order Item"

    def build_doc(self, client: ERPNextClient, payload: SalesOrderCreate) -> dict[str, Any]:
        doc = super().build_doc(client, payload)
        doc["delivery_date"] = iso(payload.delivery_date or payload.transaction_date or today())
        return doc


leads = Leads()
opportunities = Opportunities()
quotations = Quotations()
sales_orders = SalesOrders()
