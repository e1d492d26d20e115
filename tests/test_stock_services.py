"""Tests for delivery notes, stock entries and stock entry validation."""

from datetime import date

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.schemas.stock import DeliveryNoteCreate, StockEntryCreate, StockEntryItemLine, StockEntryUpdate
from app.services import stock as stock_service
from app.services.erpnext.client import ERPNextError
from app.validators.stock_entry import validate_stock_entry


class TestValidateStockEntry:
    def test_material_issue_requires_source(self):
        with pytest.raises(ValueError, match="From Warehouse is required for Material Issue"):
            validate_stock_entry("Material Issue", None, "Stores", [{"item_code": "FLOUR"}])

    def test_material_receipt_requires_target(self):
        with pytest.raises(ValueError, match="To Warehouse is required for Material Receipt"):
            validate_stock_entry("Material Receipt", "Stores", "", [{"item_code": "FLOUR"}])

    def test_manufacture_needs_raw_and_finished(self):
        with pytest.raises(ValueError, match="raw material"):
            validate_stock_entry("Manufacture", "Stores", "Finished", [{"is_finished_item": True}])
        with pytest.raises(ValueError, match="finished good"):
            validate_stock_entry("Manufacture", "Stores", "Finished", [{"is_finished_item": False}])

    def test_manufacture_valid(self):
        validate_stock_entry(
            "Manufacture",
            "Stores",
            "Finished",
            [{"item_code": "FLOUR", "is_finished_item": False}, {"item_code": "BREAD", "is_finished_item": True}],
        )

    def test_other_purposes_pass(self):
        validate_stock_entry("Material Transfer", None, None, [])

    def test_schema_uses_purpose_over_type(self):
        with pytest.raises(ValidationError, match="To Warehouse is required for Material Receipt"):
            StockEntryCreate(
                stock_entry_type="Opening Stock",
                purpose="Material Receipt",
                posting_date=date(2024, 5, 1),
                items=[{"item_code": "FLOUR", "qty": 5}],
            )


class TestHelpers:
    def test_selected_treats_all_as_unset(self):
        assert stock_service.selected("all") is None
        assert stock_service.selected("") is None
        assert stock_service.selected("Addis") == "Addis"

    def test_docstatus_filter(self):
        assert stock_service.docstatus_filter("1") == [["docstatus", "=", 1]]
        assert stock_service.docstatus_filter("all") == []

    @pytest.mark.parametrize("docstatus", ["submitted", "3", "-1"])
    def test_docstatus_filter_rejects_unknown_values(self, docstatus):
        with pytest.raises(HTTPException) as excinfo:
            stock_service.docstatus_filter(docstatus)
        assert excinfo.value.status_code == 400

    def test_distinct_values_keeps_first_seen_order(self):
        rows = [{"t": "B"}, {"t": "A"}, {"t": "B"}, {"t": None}, {}]
        assert stock_service.distinct_values(rows, "t") == ["B", "A"]

    def test_stock_entry_row_for_manufacture(self):
        raw = StockEntryItemLine(item_code="FLOUR", qty=10)
        finished = StockEntryItemLine(item_code="BREAD", qty=40, is_finished_item=True)

        raw_row = stock_service.stock_entry_row(raw, "Manufacture", "Stores", "Finished")
        finished_row = stock_service.stock_entry_row(finished, "Manufacture", "Stores", "Finished")

        assert raw_row["s_warehouse"] == "Stores"
        assert "t_warehouse" not in raw_row
        assert raw_row["is_finished_item"] == 0
        assert finished_row["t_warehouse"] == "Finished"
        assert "s_warehouse" not in finished_row
        assert finished_row["is_finished_item"] == 1
        assert finished_row["allow_zero_valuation_rate"] == 1

    def test_stock_entry_row_keeps_explicit_warehouse(self):
        item = StockEntryItemLine(item_code="FLOUR", qty=1, s_warehouse="Bakery")

        row = stock_service.stock_entry_row(item, "Material Transfer", "Stores", "Shop")

        assert row["s_warehouse"] == "Bakery"
        assert row["t_warehouse"] == "Shop"


class TestDeliveryNotes:
    def test_create_names_and_flags_rows(self, erp, monkeypatch):
        monkeypatch.setattr(stock_service, "timestamp_suffix", lambda: "1700000000000")
        erp.insert.side_effect = lambda doc: doc
        payload = DeliveryNoteCreate(
            customer="Abebe",
            posting_date=date(2024, 5, 1),
            set_warehouse="Stores",
            items=[{"item_code": "BREAD", "qty": 3, "rate": 10}],
        )

        note = stock_service.delivery_notes.create(erp, payload)

        doc = erp.insert.call_args.args[0]
        assert doc["doctype"] == "Delivery Note"
        assert doc["name"] == "DN-Abebe-1700000000000"
        assert doc["posting_date"] == "2024-05-01"
        assert doc["items"][0]["allow_zero_valuation_rate"] == 1
        assert note.name == "DN-Abebe-1700000000000"

    def test_get_falls_back_to_child_listing(self, erp):
        erp.get_doc.return_value = {"name": "DN-1", "customer": "Abebe"}
        erp.get_list.return_value = [{"item_code": "BREAD", "qty": 2, "rate": 5, "amount": 10}]

        note = stock_service.delivery_notes.get(erp, "DN-1")

        assert [item.item_code for item in note.items] == ["BREAD"]
        kwargs = erp.get_list.call_args.kwargs
        assert erp.get_list.call_args.args[0] == "Delivery Note Item"
        assert kwargs["parent"] == "Delivery Note"
        assert kwargs["filters"] == [["parent", "=", "DN-1"]]

    def test_get_child_listing_failure_yields_no_items(self, erp):
        erp.get_doc.return_value = {"name": "DN-1"}
        erp.get_list.side_effect = ERPNextError("Not permitted", status_code=403)

        note = stock_service.delivery_notes.get(erp, "DN-1")

        assert note.items == []

    def test_note_types_are_distinct(self, erp):
        erp.get_list.return_value = [
            {"delivery_note_type": "Retail"},
            {"delivery_note_type": "Wholesale"},
            {"delivery_note_type": "Retail"},
        ]

        assert stock_service.delivery_notes.note_types(erp) == ["Retail", "Wholesale"]

    def test_filter_builds_remote_filters(self, erp):
        stock_service.delivery_notes.list(
            erp,
            customer="Abebe",
            territory="all",
            posting_date_from=date(2024, 1, 1),
            docstatus="1",
            limit=20,
        )

        kwargs = erp.get_list.call_args.kwargs
        assert kwargs["filters"] == [
            ["customer", "=", "Abebe"],
            ["posting_date", ">=", "2024-01-01"],
            ["docstatus", "=", 1],
        ]
        assert kwargs["order_by"] == "modified desc"
        assert kwargs["limit_page_length"] == 20


class TestStockEntries:
    def test_material_issue_name_prefix(self, erp, monkeypatch):
        monkeypatch.setattr(stock_service, "timestamp_suffix", lambda: "42")
        erp.insert.side_effect = lambda doc: doc
        payload = StockEntryCreate(
            stock_entry_type="Material Issue",
            posting_date=date(2024, 5, 1),
            from_warehouse="Stores",
            items=[{"item_code": "FLOUR", "qty": 5}],
        )

        entry = stock_service.stock_entries.create(erp, payload)

        doc = erp.insert.call_args.args[0]
        assert doc["name"] == "STE-MI-42"
        assert doc["purpose"] == "Material Issue"
        assert doc["items"][0]["s_warehouse"] == "Stores"
        assert entry.name == "STE-MI-42"

    def test_other_purposes_use_receipt_prefix(self, erp, monkeypatch):
        monkeypatch.setattr(stock_service, "timestamp_suffix", lambda: "42")
        erp.insert.side_effect = lambda doc: doc
        payload = StockEntryCreate(
            stock_entry_type="Material Receipt",
            posting_date=date(2024, 5, 1),
            to_warehouse="Stores",
            items=[{"item_code": "FLOUR", "qty": 5}],
        )

        stock_service.stock_entries.create(erp, payload)

        assert erp.insert.call_args.args[0]["name"] == "STE-MR-42"

    def test_update_rows_use_stored_warehouses(self, erp):
        erp.get_doc.return_value = {
            "name": "STE-MR-1",
            "purpose": "Material Receipt",
            "to_warehouse": "Stores",
        }
        erp.save.side_effect = lambda doc: doc

        stock_service.stock_entries.update(
            erp, "STE-MR-1", StockEntryUpdate(items=[{"item_code": "FLOUR", "qty": 2}])
        )

        saved = erp.save.call_args.args[0]
        assert saved["items"][0]["t_warehouse"] == "Stores"

    def test_options_include_types_and_purposes(self, erp):
        def get_list(doctype, fields=None, **kwargs):
            if doctype == "Stock Entry":
                return [
                    {"stock_entry_type": "Material Issue", "purpose": "Material Issue"},
                    {"stock_entry_type": "Bakery Issue", "purpose": "Material Issue"},
                ]
            return [{"name": f"{doctype}-1"}]

        erp.get_list.side_effect = get_list

        options = stock_service.stock_entries.options(erp)

        assert options["stock_entry_types"] == ["Material Issue", "Bakery Issue"]
        assert options["purposes"] == ["Material Issue"]
        assert options["warehouses"] == [{"name": "Warehouse-1"}]
