"""CRM Service Module.

Provides customer relationship management backed by ERPNext documents:
- Contacts: Customers with their linked contacts and addresses
- Conversations: Communications and follow-up activities
- Sales: Leads, opportunities, quotations, and sales orders
- Reports: CRM dashboard and form options

Submodule Structure:
    crm/
    ├── contacts/      - Customers, contacts, addresses
    ├── conversations/ - Communications, activities
    ├── sales/         - Leads, opportunities, quotations, sales orders
    └── reports.py     - CRM dashboard and options
"""

# Contacts submodule
from app.services.crm.contacts import (
    CustomerAddresses,
    CustomerContacts,
    Customers,
    customer_addresses,
    customer_contacts,
    customers,
)

# Conversations submodule
from app.services.crm.conversations import (
    Activities,
    Communications,
    activities,
    communications,
)

# Reports
from app.services.crm.reports import CRMReports, crm_reports

# Sales submodule
from app.services.crm.sales import (
    Leads,
    Opportunities,
    Quotations,
    SalesOrders,
    leads,
    opportunities,
    quotations,
    sales_orders,
)

__all__ = [
    # Contacts
    "Customers",
    "CustomerContacts",
    "CustomerAddresses",
    "customers",
    "customer_contacts",
    "customer_addresses",
    # Conversations
    "Communications",
    "Activities",
    "communications",
    "activities",
    # Sales
    "Leads",
    "Opportunities",
    "Quotations",
    "SalesOrders",
    "leads",
    "opportunities",
    "quotations",
    "sales_orders",
    # Reports
    "CRMReports",
    "crm_reports",
]
