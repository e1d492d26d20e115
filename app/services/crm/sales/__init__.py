"""CRM Sales submodule.

Handles leads, opportunities, quotations, and sales orders.
"""

from app.services.crm.sales.service import (
    Leads,
    Opportunities,
    Quotations,
    SalesOrders,
    leads,
    opportunities,
    opportunity_party,
    quotations,
    sales_orders,
)

__all__ = [
    "Leads",
    "Opportunities",
    "Quotations",
    "SalesOrders",
    "leads",
    "opportunities",
    "opportunity_party",
    "quotations",
    "sales_orders",
]
