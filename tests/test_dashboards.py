"""Tests for the asset, CRM and accounting dashboards."""

from datetime import date

import pytest
from fastapi import HTTPException

from app.services.accounting import ledger as ledger_service
from app.services.accounting.ledger import AccountingDashboard
from app.services.asset import dashboard as asset_dashboard_service
from app.services.asset.dashboard import (
    asset_book_value,
    asset_dashboard,
    count_requiring_attention,
    group_assets,
    maintenance_due,
    recent_activities,
)
from app.services.crm import reports as crm_reports_service
from app.services.crm.reports import conversion_rate, crm_reports, top_sales_persons

TODAY = date(2024, 5, 10)


class TestAssetDashboard:
    def test_book_value_never_negative(self):
        assert asset_book_value({"gross_purchase_amount": 1000, "opening_accumulated_depreciation": 250}) == 750
        assert asset_book_value({"gross_purchase_amount": 500, "opening_accumulated_depreciation": 700}) == 0
        assert asset_book_value({"gross_purchase_amount": None}) == 0

    def test_group_assets_by_category_and_location(self):
        assets = [
            {"asset_category": "Laptops", "location": "HQ", "gross_purchase_amount": 1000},
            {"asset_category": "Laptops", "location": "Branch", "gross_purchase_amount": 800},
            {"asset_category": None, "location": "HQ", "gross_purchase_amount": 300},
        ]

        categories, locations = group_assets(assets)

        assert [(c.category, c.count, c.value) for c in categories] == [
            ("Laptops", 2, 1800),
            ("Uncategorized", 1, 300),
        ]
        assert [(loc.location, loc.count) for loc in locations] == [("HQ", 2), ("Branch", 1)]

    def test_attention_window_is_thirty_days(self):
        records = [
            {"status": "Scheduled", "next_maintenance_date": "2024-05-10"},
            {"status": "Scheduled", "next_maintenance_date": "2024-06-09"},
            {"status": "Scheduled", "next_maintenance_date": "2024-06-10"},
            {"status": "Scheduled", "next_maintenance_date": "2024-05-09"},
            {"status": "Completed", "next_maintenance_date": "2024-05-15"},
            {"status": "Scheduled", "next_maintenance_date": None},
        ]

        assert count_requiring_attention(records, TODAY) == 2

    def test_maintenance_due_ordered_by_days_remaining(self):
        records = [
            {"asset": "AST-1", "status": "Scheduled", "next_maintenance_date": "2024-06-01"},
            {"asset": "AST-2", "status": "Scheduled", "next_maintenance_date": "2024-05-01"},
            {"asset": None, "status": "Scheduled", "next_maintenance_date": "2024-05-12"},
            {"asset": "AST-4", "status": "Completed", "next_maintenance_date": "2024-05-11"},
        ]

        due = maintenance_due(records, TODAY)

        assert [item.asset for item in due] == ["AST-2", "Unknown Asset", "AST-1"]
        assert [item.days_remaining for item in due] == [-9, 2, 22]

    def test_maintenance_due_keeps_ten(self):
        records = [
            {"asset": f"AST-{day}", "status": "Scheduled", "next_maintenance_date": f"2024-05-{day:02d}"}
            for day in range(11, 25)
        ]

        due = maintenance_due(records, TODAY)

        assert len(due) == 10
        assert due[0].asset == "AST-11"

    def test_recent_activities_skip_cancelled_and_undated(self):
        maintenance = [
            {"asset": "AST-1", "maintenance_date": "2024-05-01", "status": "Completed"},
            {"asset": "AST-2", "maintenance_date": "2024-05-05", "status": "Cancelled"},
        ]
        movements = [
            {"purpose": "Transfer", "movement_date": "2024-05-03", "status": "Submitted"},
            {"purpose": "Issue", "movement_date": None},
        ]
        repairs = [
            {"asset": "AST-3", "repair_date": "2024-04-20", "completion_date": "2024-05-04", "status": "Completed"},
        ]

        activities = recent_activities(maintenance, movements, repairs)

        assert [(a.type, a.asset, a.date) for a in activities] == [
            ("repair", "AST-3", date(2024, 5, 4)),
            ("movement", "Multiple Assets", date(2024, 5, 3)),
            ("maintenance", "AST-1", date(2024, 5, 1)),
        ]
        assert activities[0].description == "Repair completed"
        assert activities[1].description == "Movement: Transfer"
        assert activities[2].description == "Maintenance: Completed"

    def test_summary_from_remote_documents(self, serve_documents, monkeypatch):
        monkeypatch.setattr(asset_dashboard_service, "today", lambda: TODAY)
        erp = serve_documents(
            {
                "Asset": [
                    {"name": "AST-1", "asset_category": "Laptops", "location": "HQ", "gross_purchase_amount": 900},
                    {"name": "AST-2", "asset_category": "Vehicles", "location": "HQ", "gross_purchase_amount": 5000},
                ],
                "Asset Maintenance": [
                    {
                        "name": "MAINT-1",
                        "asset": "AST-1",
                        "status": "Scheduled",
                        "maintenance_date": "2024-04-01",
                        "next_maintenance_date": "2024-05-20",
                    },
                ],
                "Asset Repair": [
                    {"name": "REP-1", "asset": "AST-2", "repair_date": "2024-05-02", "status": "Cancelled"},
                ],
                "Asset Movement": [
                    {"name": "MOV-1", "purpose": "Transfer", "movement_date": "2024-05-06", "status": "Submitted"},
                ],
            }
        )

        dashboard = asset_dashboard.summary(erp)

        assert dashboard.total_assets == 2
        assert dashboard.assets_requiring_attention == 1
        assert [item.days_remaining for item in dashboard.maintenance_due] == [10]
        assert [activity.type for activity in dashboard.recent_activities] == ["movement", "maintenance"]


class TestCRMDashboard:
    def test_conversion_rate(self):
        assert conversion_rate(0, 0) == 0
        assert conversion_rate(8, 12) == 67
        assert conversion_rate(3, 3) == 100

    def test_top_sales_persons_ranked_by_amount(self):
        opportunities = [
            {"contact_by": f"rep{index}@acme.et", "opportunity_amount": index * 100} for index in range(1, 7)
        ]
        opportunities.append({"contact_by": None, "opportunity_amount": 50})
        opportunities.append({"contact_by": "rep1@acme.et", "opportunity_amount": 550})

        ranked = top_sales_persons(opportunities)

        assert [person.name for person in ranked] == [
            "rep1@acme.et",
            "rep6@acme.et",
            "rep5@acme.et",
            "rep4@acme.et",
            "rep3@acme.et",
        ]
        assert ranked[0].opportunities == 2
        assert ranked[0].amount == 650

    def test_dashboard_counts(self, erp, monkeypatch):
        monkeypatch.setattr(crm_reports_service, "today", lambda: TODAY)
        counts = {"Lead": 0, "Opportunity": 4, "Quotation": 2}
        erp.get_count.side_effect = lambda doctype, filters=None: counts[doctype]

        def get_list(doctype, fields=None, **kwargs):
            if doctype == "Opportunity" and "sales_stage" in fields:
                return [
                    {"sales_stage": "Prospecting", "opportunity_amount": 100},
                    {"sales_stage": None, "opportunity_amount": 40},
                    {"sales_stage": "Prospecting", "opportunity_amount": 60},
                ]
            return []

        erp.get_list.side_effect = get_list

        dashboard = crm_reports.dashboard(erp, territory="Addis Ababa")

        assert dashboard.total_leads == 0
        assert dashboard.lead_conversion_rate == 0
        assert dashboard.open_opportunities == 4
        assert dashboard.quotations_to_follow_up == 2
        assert [(s.stage, s.count, s.amount) for s in dashboard.opportunities_by_stage] == [
            ("Prospecting", 2, 160),
            ("Unknown", 1, 40),
        ]
        quotation_filters = next(
            call.args[1] for call in erp.get_count.call_args_list if call.args[0] == "Quotation"
        )
        assert ["valid_till", ">=", "2024-05-10"] in quotation_filters
        assert ["status", "=", "Submitted"] in quotation_filters
        assert ["territory", "=", "Addis Ababa"] in quotation_filters


class TestAccountingSummary:
    def test_requires_company(self, erp):
        with pytest.raises(HTTPException) as excinfo:
            AccountingDashboard.summary(erp, None)
        assert excinfo.value.status_code == 400

    def test_cash_balance_sums_leaf_cash_accounts(self, serve_documents):
        erp = serve_documents(
            {
                "Account": [
                    {"name": "1110 - Cash", "opening_balance": 5000},
                    {"name": "1120 - Petty Cash", "opening_balance": 250},
                ]
            }
        )

        assert AccountingDashboard.cash_balance(erp, "Acme") == 5250
        filters = erp.get_all.call_args.kwargs["filters"]
        assert ["account_name", "like", "%Cash%"] in filters
        assert ["is_group", "=", 0] in filters
        assert ["company", "=", "Acme"] in filters

    def test_summary_defaults_to_last_thirty_days(self, serve_documents, monkeypatch):
        monkeypatch.setattr(ledger_service, "today", lambda: date(2024, 5, 31))
        erp = serve_documents(
            {
                "Sales Invoice": [
                    {
                        "name": "SINV-1",
                        "grand_total": 1000,
                        "total_taxes_and_charges": 100,
                        "outstanding_amount": 300,
                        "due_date": "2024-05-20",
                    }
                ],
                "Purchase Invoice": [{"name": "PINV-1", "grand_total": 400}],
                "Expense Claim": [{"name": "EXP-1", "total_amount": 150}],
                "Account": [{"name": "1110 - Cash", "opening_balance": 5000}],
            }
        )

        summary = AccountingDashboard.summary(erp, "Acme")

        assert summary.date_from == date(2024, 5, 1)
        assert summary.date_to == date(2024, 5, 31)
        assert summary.total_revenue == 1000
        assert summary.total_expenses == 550
        assert summary.net_profit == 350
        assert summary.cash_balance == 5000
        assert summary.pending_payments == 300
        assert summary.overdue_payments == 300
        sales_filters = [
            call.kwargs["filters"] for call in erp.get_all.call_args_list if call.args[0] == "Sales Invoice"
        ]
        assert any(["posting_date", "between", ["2024-05-01", "2024-05-31"]] in f for f in sales_filters)

    def test_summary_rejects_inverted_range(self, erp):
        with pytest.raises(HTTPException) as excinfo:
            AccountingDashboard.summary(erp, "Acme", date(2024, 6, 1), date(2024, 5, 1))
        assert excinfo.value.status_code == 400
