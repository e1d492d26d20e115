"""Tests for the ERPNext HTTP client: request shape, error mapping and retries."""

import json

import httpx
import pytest

from app.config import Settings
from app.services.erpnext import client as client_module
from app.services.erpnext.client import (
    ERPNextAuthError,
    ERPNextClient,
    ERPNextConfigError,
    ERPNextError,
    ERPNextNotFoundError,
    ERPNextRateLimitError,
)

REAL_HTTPX_CLIENT = httpx.Client


@pytest.fixture()
def transport(monkeypatch):
    """Route every request of the client through a MockTransport handler."""
    calls = []
    responses = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        response = responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    mock_transport = httpx.MockTransport(handler)
    monkeypatch.setattr(
        client_module.httpx,
        "Client",
        lambda timeout=None: REAL_HTTPX_CLIENT(transport=mock_transport, timeout=timeout),
    )
    monkeypatch.setattr(client_module.time, "sleep", lambda seconds: None)
    return calls, responses


@pytest.fixture()
def erp_client():
    return ERPNextClient(base_url="https://erp.test.local/", api_key="key", api_secret="secret")


class TestRequestShape:
    def test_auth_header_and_base_url(self, transport, erp_client):
        calls, responses = transport
        responses.append(httpx.Response(200, json={"message": {"name": "SINV-1"}}))

        doc = erp_client.get_doc("Sales Invoice", "SINV-1")

        assert doc == {"name": "SINV-1"}
        request = calls[0]
        assert request.headers["Authorization"] == "token key:secret"
        assert str(request.url).startswith("https://erp.test.local/api/method/frappe.client.get?")
        assert request.url.params["doctype"] == "Sales Invoice"

    def test_get_list_encodes_filters_and_fields_as_json(self, transport, erp_client):
        calls, responses = transport
        responses.append(httpx.Response(200, json={"message": [{"name": "A"}]}))

        rows = erp_client.get_list(
            "Lead", fields=["name", "status"], filters=[["status", "=", "Open"]], limit_page_length=5
        )

        assert rows == [{"name": "A"}]
        params = calls[0].url.params
        assert json.loads(params["fields"]) == ["name", "status"]
        assert json.loads(params["filters"]) == [["status", "=", "Open"]]
        assert params["limit_page_length"] == "5"
        assert "order_by" not in params

    def test_insert_posts_document(self, transport, erp_client):
        calls, responses = transport
        responses.append(httpx.Response(200, json={"message": {"name": "LEAD-1"}}))

        created = erp_client.insert({"doctype": "Lead", "lead_name": "Abebe"})

        assert created == {"name": "LEAD-1"}
        assert calls[0].method == "POST"
        assert json.loads(calls[0].content) == {"doc": {"doctype": "Lead", "lead_name": "Abebe"}}

    def test_get_doc_empty_message_is_not_found(self, transport, erp_client):
        _, responses = transport
        responses.append(httpx.Response(200, json={"message": None}))

        with pytest.raises(ERPNextNotFoundError):
            erp_client.get_doc("Asset", "missing")

    def test_get_value_no_match_returns_empty_dict(self, transport, erp_client):
        _, responses = transport
        responses.append(httpx.Response(200, json={}))

        assert erp_client.get_value("Customer", "territory", {"name": "X"}) == {}


class TestPagination:
    def test_get_all_pages_until_short_batch(self, transport):
        calls, responses = transport
        erp_client = ERPNextClient("https://erp.test.local", "key", "secret", page_size=2)
        responses.append(httpx.Response(200, json={"message": [{"name": "A"}, {"name": "B"}]}))
        responses.append(httpx.Response(200, json={"message": [{"name": "C"}]}))

        names = [row["name"] for row in erp_client.get_all("Account")]

        assert names == ["A", "B", "C"]
        assert [call.url.params["limit_start"] for call in calls] == ["0", "2"]


class TestErrorMapping:
    def test_401_is_auth_error(self, transport, erp_client):
        _, responses = transport
        responses.append(httpx.Response(401, json={"exc_type": "AuthenticationError"}))

        with pytest.raises(ERPNextAuthError) as excinfo:
            erp_client.get_logged_user()
        assert excinfo.value.status_code == 401

    def test_403_is_auth_error_with_remote_message(self, transport, erp_client):
        _, responses = transport
        responses.append(httpx.Response(403, json={"message": "Not permitted"}))

        with pytest.raises(ERPNextAuthError, match="Not permitted"):
            erp_client.get_doc("Account", "Cash")

    def test_does_not_exist_exc_type_is_not_found(self, transport, erp_client):
        _, responses = transport
        responses.append(
            httpx.Response(
                417,
                json={
                    "exc_type": "DoesNotExistError",
                    "exception": "frappe.exceptions.DoesNotExistError: Lead LEAD-9 not found",
                },
            )
        )

        with pytest.raises(ERPNextNotFoundError) as excinfo:
            erp_client.get_doc("Lead", "LEAD-9")
        assert excinfo.value.status_code == 404
        assert excinfo.value.message == "Lead LEAD-9 not found"

    def test_server_messages_are_joined(self, transport, erp_client):
        _, responses = transport
        server_messages = json.dumps(
            [json.dumps({"message": "Customer is mandatory"}), json.dumps({"message": "Row 1: qty"})]
        )
        responses.append(httpx.Response(417, json={"_server_messages": server_messages}))

        with pytest.raises(ERPNextError) as excinfo:
            erp_client.insert({"doctype": "Sales Invoice"})
        assert excinfo.value.message == "Customer is mandatory; Row 1: qty"
        assert excinfo.value.status_code == 417

    def test_non_json_error_body(self, transport, erp_client):
        _, responses = transport
        responses.append(httpx.Response(502, text="Bad Gateway"))

        with pytest.raises(ERPNextError, match="Bad Gateway"):
            erp_client.get_doc("Asset", "A-1")


class TestRetries:
    def test_rate_limit_retried_then_succeeds(self, transport, erp_client):
        calls, responses = transport
        responses.append(httpx.Response(429, headers={"Retry-After": "0"}))
        responses.append(httpx.Response(200, json={"message": "admin@example.com"}))

        assert erp_client.get_logged_user() == "admin@example.com"
        assert len(calls) == 2

    def test_rate_limit_exhausted(self, transport, erp_client):
        calls, responses = transport
        responses.extend(httpx.Response(429) for _ in range(ERPNextClient.MAX_RETRIES + 1))

        with pytest.raises(ERPNextRateLimitError):
            erp_client.get_logged_user()
        assert len(calls) == ERPNextClient.MAX_RETRIES + 1

    def test_timeout_exhausted_maps_to_504(self, transport, erp_client):
        _, responses = transport
        responses.extend(httpx.ReadTimeout("slow") for _ in range(ERPNextClient.MAX_RETRIES + 1))

        with pytest.raises(ERPNextError) as excinfo:
            erp_client.get_logged_user()
        assert excinfo.value.status_code == 504

    def test_connection_error_maps_to_502(self, transport, erp_client):
        calls, responses = transport
        responses.append(httpx.ConnectError("refused"))

        with pytest.raises(ERPNextError) as excinfo:
            erp_client.get_logged_user()
        assert excinfo.value.status_code == 502
        assert len(calls) == 1


class TestFromSettings:
    def test_missing_settings_raise_config_error(self):
        config = Settings(erp_api_url="", erp_api_key="key", erp_api_secret="")

        with pytest.raises(ERPNextConfigError, match="ERP_API_URL, ERP_API_SECRET"):
            ERPNextClient.from_settings(config)

    def test_builds_client(self):
        config = Settings(
            erp_api_url="https://erp.test.local",
            erp_api_key="key",
            erp_api_secret="secret",
            erp_timeout_seconds=12.0,
        )

        erp_client = ERPNextClient.from_settings(config)

        assert erp_client.base_url == "https://erp.test.local"
        assert erp_client.timeout == 12.0
