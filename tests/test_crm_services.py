"""Tests for CRM leads, opportunities, quotations and activities."""

from datetime import date

import pytest
from fastapi import HTTPException

from app.schemas.common import ItemLine
from app.schemas.crm.conversation import ActivityCreate, ActivityUpdate, ReferencedCommunicationCreate
from app.schemas.crm.sales import OpportunityCreate, QuotationCreate, SalesOrderCreate
from app.services.crm.conversations import service as conversations_service
from app.services.crm.sales import service as sales_service
from app.services.erpnext.client import ERPNextNotFoundError


class TestOpportunities:
    def test_party_from_customer(self):
        payload = OpportunityCreate(opportunity_from="Customer", opportunity_type="Sales", customer="Abebe")
        assert sales_service.opportunity_party(payload) == "Abebe"

    def test_party_must_match_source(self):
        payload = OpportunityCreate(opportunity_from="Lead", opportunity_type="Sales", customer="Abebe")

        with pytest.raises(HTTPException) as excinfo:
            sales_service.opportunity_party(payload)

        assert excinfo.value.status_code == 400
        assert excinfo.value.detail == "Party name is required based on opportunity source"

    def test_create_sets_party_name(self, erp):
        erp.insert.side_effect = lambda doc: {**doc, "name": "CRM-OPP-1"}
        payload = OpportunityCreate(opportunity_from="Lead", opportunity_type="Sales", lead="LEAD-1")

        opportunity = sales_service.opportunities.create(erp, payload)

        doc = erp.insert.call_args.args[0]
        assert doc["doctype"] == "Opportunity"
        assert doc["party_name"] == "LEAD-1"
        assert "customer" not in doc
        assert opportunity.party_name == "LEAD-1"


class TestSalesDocuments:
    def test_quotation_totals_and_party(self, erp, monkeypatch):
        monkeypatch.setattr(sales_service, "today", lambda: date(2024, 6, 1))
        erp.insert.side_effect = lambda doc: {**doc, "name": "QTN-1"}
        payload = QuotationCreate(
            customer="Abebe",
            items=[ItemLine(item_code="BREAD", qty=4, rate=2.5), ItemLine(item_code="CAKE", qty=1, rate=20)],
        )

        quotation = sales_service.quotations.create(erp, payload)

        doc = erp.insert.call_args.args[0]
        assert doc["quotation_to"] == "Customer"
        assert doc["party_name"] == "Abebe"
        assert doc["transaction_date"] == "2024-06-01"
        assert doc["grand_total"] == 30
        assert [row["amount"] for row in doc["items"]] == [10, 20]
        assert doc["items"][0]["doctype"] == "Quotation Item"
        assert quotation.grand_total == 30

    def test_sales_order_delivery_date_defaults_to_transaction_date(self, erp):
        erp.insert.side_effect = lambda doc: {**doc, "name": "SO-1"}
        payload = SalesOrderCreate(
            customer="Abebe",
            transaction_date=date(2024, 6, 3),
            items=[ItemLine(item_code="BREAD", qty=1, rate=1)],
        )

        sales_service.sales_orders.create(erp, payload)

        assert erp.insert.call_args.args[0]["delivery_date"] == "2024-06-03"

    def test_lead_list_filters(self, erp):
        sales_service.leads.list(erp, status="Open", territory="Addis Ababa")

        assert erp.get_list.call_args.kwargs["filters"] == [
            ["status", "=", "Open"],
            ["territory", "=", "Addis Ababa"],
        ]


class TestActivities:
    def test_unknown_assignee_left_unassigned(self, erp):
        erp.get_value.return_value = {}
        erp.insert.side_effect = lambda doc: {**doc, "name": "TODO-1"}

        activity = conversations_service.activities.create(
            erp, ActivityCreate(subject="Call back", assigned_to="ghost@example.com", due_date=date(2024, 6, 1))
        )

        doc = erp.insert.call_args.args[0]
        assert doc["allocated_to"] == ""
        assert doc["description"] == "Call back"
        assert doc["date"] == "2024-06-01"
        assert activity.subject == "Call back"
        assert activity.due_date == date(2024, 6, 1)

    def test_known_assignee_kept(self, erp):
        erp.get_value.return_value = {"name": "agent@example.com"}
        erp.insert.side_effect = lambda doc: {**doc, "name": "TODO-1"}

        activity = conversations_service.activities.create(
            erp, ActivityCreate(subject="Call back", assigned_to="agent@example.com")
        )

        assert activity.assigned_to == "agent@example.com"

    def test_reference_name_without_doctype(self, erp):
        with pytest.raises(HTTPException) as excinfo:
            conversations_service.activities.create(erp, ActivityCreate(subject="x", reference_name="LEAD-1"))

        assert excinfo.value.status_code == 400
        erp.insert.assert_not_called()

    def test_missing_reference_document(self, erp):
        erp.get_doc.side_effect = ERPNextNotFoundError("Lead LEAD-9 not found", status_code=404)

        with pytest.raises(HTTPException) as excinfo:
            conversations_service.activities.create_for_reference(erp, "Lead", "LEAD-9", ActivityCreate(subject="x"))

        assert excinfo.value.status_code == 404
        assert excinfo.value.detail == "Referenced Lead document not found: LEAD-9"

    def test_update_translates_fields(self, erp):
        erp.get_doc.return_value = {"name": "TODO-1", "description": "Old", "allocated_to": ""}
        erp.get_value.return_value = {"name": "agent@example.com"}
        erp.save.side_effect = lambda doc: doc

        activity = conversations_service.activities.update(
            erp, "TODO-1", ActivityUpdate(subject="New", assigned_to="agent@example.com")
        )

        saved = erp.save.call_args.args[0]
        assert saved["description"] == "New"
        assert saved["allocated_to"] == "agent@example.com"
        assert "subject" not in saved
        assert activity.subject == "New"

    def test_by_reference_requires_both_parts(self, erp):
        with pytest.raises(HTTPException) as excinfo:
            conversations_service.activities.by_reference(erp, "Lead", None)

        assert excinfo.value.detail == "Doctype and name are required"


class TestCommunications:
    def test_create_for_reference(self, erp):
        erp.insert.side_effect = lambda doc: {**doc, "name": "COMM-1"}

        communication = conversations_service.communications.create_for_reference(
            erp, "Lead", "LEAD-1", ReferencedCommunicationCreate(subject="Hello", content="Body")
        )

        doc = erp.insert.call_args.args[0]
        assert doc["reference_doctype"] == "Lead"
        assert doc["reference_name"] == "LEAD-1"
        assert communication.subject == "Hello"
