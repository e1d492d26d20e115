from __future__ import annotations

from typing import Any

from app.config import settings
from app.logging import get_logger
from app.schemas.crm.contact import (
    AddressCreate,
    AddressRead,
    ContactCreate,
    ContactRead,
    CustomerCreate,
    CustomerRead,
)
from app.services.common import eq_filters
from app.services.documents import DocumentResource
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.fetcher import list_documents

logger = get_logger(__name__)


def _normalize_email(address: str | None) -> str | None:
    if not address:
        return None
    candidate = address.strip().lower()
    return candidate or None


def _normalize_phone(address: str | None) -> str | None:
    if not address:
        return None
    candidate = address.strip()
    digits = "".join(ch for ch in candidate if ch.isdigit())
    if not digits:
        return None
    return f"+{digits}" if candidate.startswith("+") else digits


def _customer_link_filters(customer: str) -> list[list[Any]]:
    return [
        ["Dynamic Link", "link_doctype", "=", "Customer"],
        ["Dynamic Link", "link_name", "=", customer],
    ]


def _customer_link(customer: str) -> list[dict[str, str]]:
    return [{"link_doctype": "Customer", "link_name": customer}]


class Customers(DocumentResource[CustomerRead]):
    doctype = "Customer"
    read_model = CustomerRead

    def list(
        self,
        client: ERPNextClient,
        customer_type: str | None = None,
        customer_group: str | None = None,
        territory: str | None = None,
    ) -> list[CustomerRead]:
        filters = eq_filters(customer_type=customer_type, customer_group=customer_group, territory=territory)
        return self.query(client, filters)

    def build_doc(self, client: ERPNextClient, payload: CustomerCreate) -> dict[str, Any]:
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc["default_currency"] = payload.default_currency or settings.default_currency
        doc["email_id"] = _normalize_email(payload.email_id)
        doc["mobile_no"] = _normalize_phone(payload.mobile_no)
        return doc


class CustomerContacts(DocumentResource[ContactRead]):
    """Contacts attached to a customer through Dynamic Link rows."""

    doctype = "Contact"
    read_model = ContactRead

    def list_for_customer(self, client: ERPNextClient, customer: str) -> list[ContactRead]:
        # Raises not-found for an unknown customer
        client.get_doc("Customer", customer)
        docs = list_documents(client, self.doctype, filters=_customer_link_filters(customer))
        return self.project_many(docs)

    def create_for_customer(self, client: ERPNextClient, customer: str, payload: ContactCreate) -> ContactRead:
        client.get_doc("Customer", customer)
        doc = {
            "doctype": self.doctype,
            "first_name": payload.first_name,
            "last_name": payload.last_name or "",
            "email_id": _normalize_email(payload.email_id) or "",
            "mobile_no": _normalize_phone(payload.mobile_no) or "",
            "is_primary_contact": int(payload.is_primary_contact),
            "links": _customer_link(customer),
        }
        created = client.insert(doc)
        logger.info("crm_contact_created name=%s customer=%s", created.get("name"), customer)
        return self.project(created)


class CustomerAddresses(DocumentResource[AddressRead]):
    doctype = "Address"
    read_model = AddressRead

    def list_for_customer(self, client: ERPNextClient, customer: str) -> list[AddressRead]:
        client.get_doc("Customer", customer)
        docs = list_documents(client, self.doctype, filters=_customer_link_filters(customer))
        return self.project_many(docs)

    def create_for_customer(self, client: ERPNextClient, customer: str, payload: AddressCreate) -> AddressRead:
        client.get_doc("Customer", customer)
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc.update(
            {
                "doctype": self.doctype,
                "country": payload.country or settings.default_country,
                "is_primary_address": int(payload.is_primary_address),
                "links": _customer_link(customer),
            }
        )
        created = client.insert(doc)
        logger.info("crm_address_created name=%s customer=%s", created.get("name"), customer)
        return self.project(created)


customers = Customers()
customer_contacts = CustomerContacts()
customer_addresses = CustomerAddresses()
