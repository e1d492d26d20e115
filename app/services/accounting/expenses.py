from __future__ import annotations

from typing import Any

from app.schemas.accounting import EXPENSE_STATUS_ALIASES, ExpenseCreate, ExpenseRead, ExpenseUpdate
from app.services.common import eq_filters
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.mappers import map_expense_claim


class Expenses(DocumentResource[ExpenseRead]):
    """Expense Claims exposed as expense records."""

    doctype = "Expense Claim"
    read_model = ExpenseRead
    order_by = "posting_date desc"

    def map_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        return map_expense_claim(doc)

    def list(
        self,
        client: ERPNextClient,
        status: str | None = None,
        expense_type: str | None = None,
        limit: int | None = None,
    ) -> list[ExpenseRead]:
        if status:
            status = EXPENSE_STATUS_ALIASES.get(status.lower(), status)
        return self.query(client, eq_filters(status=status, expense_type=expense_type), limit=limit)

    def build_doc(self, client: ERPNextClient, payload: ExpenseCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        # New claims always start as drafts regardless of what the caller sent
        doc["status"] = "Draft"
        doc["docstatus"] = 0
        return doc

    def build_changes(
        self, client: ERPNextClient, payload: ExpenseUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True)
        changes.pop("docstatus", None)
        return changes


expenses = Expenses()
