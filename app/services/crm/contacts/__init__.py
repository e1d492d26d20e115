"""CRM Contacts submodule.

Handles customers and the contacts and addresses linked to them.
"""

from app.services.crm.contacts.service import (
    CustomerAddresses,
    CustomerContacts,
    Customers,
    customer_addresses,
    customer_contacts,
    customers,
)

__all__ = [
    "Customers",
    "CustomerContacts",
    "CustomerAddresses",
    "customers",
    "customer_contacts",
    "customer_addresses",
]
