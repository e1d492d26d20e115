"""HTTP tests for the response envelope, error mapping and authentication."""

from app.api.deps import get_erp_client, require_erp_auth
from app.errors import erp_error_status
from app.main import app
from app.services.erpnext.client import (
    ERPNextAuthError,
    ERPNextConfigError,
    ERPNextError,
    ERPNextNotFoundError,
)


class TestEnvelope:
    def test_get_wraps_record(self, client, erp):
        erp.get_doc.return_value = {"name": "SINV-1", "customer": "Abebe", "grand_total": "12.5"}

        response = client.get("/api/accounting/sales/SINV-1")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Request successful"
        assert body["data"]["name"] == "SINV-1"
        assert body["data"]["grand_total"] == 12.5

    def test_create_returns_201(self, client, erp):
        erp.insert.side_effect = lambda doc: {**doc, "name": "SINV-2"}

        response = client.post(
            "/api/accounting/sales",
            json={"customer": "Abebe", "items": [{"item_code": "BREAD", "qty": 1, "rate": 10}]},
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Sales invoice created successfully"

    def test_report_endpoint(self, client, serve_documents):
        serve_documents(
            {
                "Payment Entry": [
                    {"name": "PE-1", "payment_type": "Receive", "received_amount": 90},
                    {"name": "PE-2", "payment_type": "Pay", "paid_amount": 40},
                ]
            }
        )

        response = client.get(
            "/api/accounting/reports",
            params={"report_type": "CashFlow", "company": "Acme", "date_from": "2024-01-01", "date_to": "2024-01-31"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Report generated successfully"
        assert body["data"]["report"]["data"] == {"Cash Inflows": 90, "Cash Outflows": 40, "Net Cash Flow": 50}

    def test_delivery_note_actions(self, client, erp):
        erp.get_list.return_value = [{"name": "Addis Ababa"}, {"name": "Adama"}]

        response = client.get("/api/delivery-notes", params={"action": "get-territories"})

        assert response.status_code == 200
        assert response.json()["data"] == {"territories": ["Addis Ababa", "Adama"]}

    def test_pos_stock_check_splits_codes(self, client, erp):
        erp.get_list.return_value = []

        response = client.get("/api/pos/stock-check", params={"item_codes": "B1,C1", "warehouse": "Shop"})

        assert response.status_code == 200
        assert response.json()["data"] == []
        filters = erp.get_list.call_args_list[0].kwargs["filters"]
        assert filters[0] == ["item_code", "in", ["B1", "C1"]]


class TestErrors:
    def test_validation_error_is_400(self, client):
        response = client.post("/api/accounting/sales", json={"customer": "Abebe", "items": []})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation Error"
        assert body["details"]

    def test_movement_rule_violation_is_400(self, client, erp):
        response = client.post(
            "/api/asset/movements",
            json={
                "purpose": "Transfer",
                "movement_date": "2024-03-01",
                "assets": [{"asset": "AST-1", "from_location": "HQ", "to_employee": "EMP-1"}],
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"
        erp.insert.assert_not_called()

    def test_service_http_exception(self, client):
        response = client.get("/api/accounting/reports", params={"report_type": "Income"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Missing required parameters: report_type, date range, company"
        assert body["status_code"] == 400

    def test_unknown_docstatus_is_400(self, client, erp):
        response = client.get("/api/delivery-notes", params={"action": "filter", "docstatus": "submitted"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "docstatus must be one of: all, 0, 1, 2"
        erp.get_list.assert_not_called()

    def test_remote_not_found(self, client, erp):
        erp.get_doc.side_effect = ERPNextNotFoundError("Sales Invoice SINV-9 not found", status_code=404)

        response = client.get("/api/accounting/sales/SINV-9")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Frappe API Error"
        assert body["details"] == "Sales Invoice SINV-9 not found"

    def test_remote_duplicate_is_409(self, client, erp):
        erp.insert.side_effect = ERPNextError("Duplicate entry: Lead LEAD-1 already exists", status_code=417)

        response = client.post("/api/crm/leads", json={"lead_name": "Abebe"})

        assert response.status_code == 409

    def test_missing_configuration(self, client):
        def broken_client():
            raise ERPNextConfigError("Missing ERP API environment variables: ERP_API_URL", status_code=500)

        app.dependency_overrides[get_erp_client] = broken_client

        response = client.get("/api/accounting/sales/SINV-1")

        assert response.status_code == 500
        assert response.json()["error"] == "Configuration Error"

    def test_unhandled_error(self, client, erp):
        erp.get_doc.side_effect = RuntimeError("boom")

        response = client.get("/api/accounting/sales/SINV-1")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Application Error"

    def test_status_keywords(self):
        assert erp_error_status(ERPNextError("Insufficient Permission for Lead", status_code=417)) == 403
        assert erp_error_status(ERPNextError("Customer is mandatory", status_code=417)) == 400
        assert erp_error_status(ERPNextError("Something odd", status_code=417)) == 417
        assert erp_error_status(ERPNextError("Something odd")) == 500


class TestAuthentication:
    def test_write_rejected_without_valid_credentials(self, client, erp):
        app.dependency_overrides.pop(require_erp_auth)
        erp.test_connection.side_effect = ERPNextAuthError("Authentication failed", status_code=401)

        response = client.post("/api/crm/leads", json={"lead_name": "Abebe"})

        assert response.status_code == 401
        assert response.json()["error"] == "Authentication required"
        erp.insert.assert_not_called()

    def test_reads_do_not_check_credentials(self, client, erp):
        app.dependency_overrides.pop(require_erp_auth)
        erp.get_doc.return_value = {"name": "SINV-1"}

        response = client.get("/api/accounting/sales/SINV-1")

        assert response.status_code == 200
        erp.test_connection.assert_not_called()

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
