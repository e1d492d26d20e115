import os
from unittest.mock import MagicMock

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from app.api.deps import get_erp_client, require_erp_auth
from app.main import app
from app.services.erpnext.client import ERPNextClient, ERPNextNotFoundError

load_dotenv(os.path.join(os.getcwd(), ".env"))


@pytest.fixture()
def erp():
    """ERP client double; tests set return values per call."""
    mock = MagicMock(spec=ERPNextClient)
    mock.get_list.return_value = []
    mock.get_all.return_value = []
    mock.get_value.return_value = {}
    mock.get_count.return_value = 0
    return mock


@pytest.fixture()
def serve_documents(erp):
    """Make ``erp`` answer the name listing and detail fetches for ``docs``.

    ``docs`` maps doctype to a list of full documents. The name listing of a
    doctype returns every document name, ``get_doc`` returns the stored copy
    and raises not-found for anything else.
    """
    store: dict[str, dict[str, dict]] = {}

    def _get_list(doctype, fields=None, **kwargs):
        rows = list(store.get(doctype, {}).values())
        if fields == ["name"]:
            return [{"name": row["name"]} for row in rows]
        return rows

    def _get_all(doctype, fields=None, **kwargs):
        return iter(_get_list(doctype, fields=fields))

    def _get_doc(doctype, name):
        try:
            return store[doctype][name]
        except KeyError:
            raise ERPNextNotFoundError(f"{doctype} {name} not found", status_code=404) from None

    def _serve(docs: dict[str, list[dict]]):
        for doctype, rows in docs.items():
            store[doctype] = {row["name"]: row for row in rows}
        erp.get_list.side_effect = _get_list
        erp.get_all.side_effect = _get_all
        erp.get_doc.side_effect = _get_doc
        return erp

    return _serve


@pytest.fixture()
def client(erp):
    """Test client wired to the ERP double with authentication bypassed."""
    app.dependency_overrides[get_erp_client] = lambda: erp
    app.dependency_overrides[require_erp_auth] = lambda: None
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
