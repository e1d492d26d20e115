from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any

from app.logging import get_logger
from app.schemas.accounting import PaymentCreate, PaymentDetailRead, PaymentRead, PaymentUpdate
from app.services.common import eq_filters, iso
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient, ERPNextError
from app.services.erpnext.mappers import map_payment_entry

logger = get_logger(__name__)

# party_type -> (doctype, display-name field)
PARTY_NAME_FIELDS = {
    "Customer": ("Customer", "customer_name"),
    "Supplier": ("Supplier", "supplier_name"),
    "Employee": ("Employee", "employee_name"),
}


def _display_name(client: ERPNextClient, doctype: str, name: str | None, fieldname: str) -> str:
    """Resolve a human readable name, falling back to the document name."""
    if not name:
        return ""
    try:
        value = client.get_value(doctype, fieldname, name)
    except ERPNextError as exc:
        logger.warning("erp_display_name_failed doctype=%s name=%s error=%s", doctype, name, exc.message)
        return name
    return value.get(fieldname) or name


class Payments(DocumentResource[PaymentRead]):
    doctype = "Payment Entry"
    read_model = PaymentRead
    order_by = "posting_date desc"

    def map_doc(self, doc: dict[str, Any]) -> dict[str, Any]:
        return map_payment_entry(doc)

    def list(
        self,
        client: ERPNextClient,
        payment_type: str | None = None,
        party_type: str | None = None,
        status: str | None = None,
        limit: int | None = None,
    ) -> list[PaymentRead]:
        filters = eq_filters(payment_type=payment_type, party_type=party_type, status=status)
        return self.query(client, filters, limit=limit)

    def get(self, client: ERPNextClient, name: str) -> PaymentDetailRead:
        doc = client.get_doc(self.doctype, name)
        party_doctype, party_field = PARTY_NAME_FIELDS.get(doc.get("party_type") or "", (None, None))

        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="erp-names") as executor:
            paid_from = executor.submit(_display_name, client, "Account", doc.get("paid_from"), "account_name")
            paid_to = executor.submit(_display_name, client, "Account", doc.get("paid_to"), "account_name")
            if party_doctype:
                party = executor.submit(_display_name, client, party_doctype, doc.get("party"), party_field)
                party_name = party.result()
            else:
                party_name = doc.get("party") or ""
            mapped = map_payment_entry(doc)
            mapped["paid_from_account_name"] = paid_from.result()
            mapped["paid_to_account_name"] = paid_to.result()
            mapped["party_name"] = party_name
        return PaymentDetailRead.model_validate(mapped)

    def build_doc(self, client: ERPNextClient, payload: PaymentCreate) -> dict[str, Any]:
        return {
            "payment_type": payload.payment_type,
            "party_type": payload.party_type,
            "party": payload.party,
            "posting_date": iso(payload.posting_date),
            "company": payload.company,
            "paid_from": payload.paid_from,
            "paid_to": payload.paid_to,
            "paid_amount": payload.amount,
            "received_amount": payload.amount if payload.payment_type == "Receive" else None,
            "mode_of_payment": payload.payment_method,
            "reference_no": payload.reference_no,
            "reference_date": iso(payload.reference_date),
            "remarks": payload.remarks,
            "docstatus": 0,
        }

    def build_changes(
        self, client: ERPNextClient, payload: PaymentUpdate, current: dict[str, Any]
    ) -> dict[str, Any]:
        changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"amount", "payment_method"})
        if payload.amount is not None:
            changes["paid_amount"] = payload.amount
            if current.get("payment_type") == "Receive":
                changes["received_amount"] = payload.amount
        if "payment_method" in payload.model_fields_set:
            changes["mode_of_payment"] = payload.payment_method
        return changes


payments = Payments()
