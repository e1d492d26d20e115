"""Accounting Service Module.

Provides accounting records backed by ERPNext documents:
- Invoices: Sales and purchase invoices with computed item totals
- Expenses: Expense claims
- Payments: Payment entries with resolved display names
- Ledger: Chart of accounts, form options and the dashboard summary
- Reports: Income statement, cash flow statement and balance sheet
"""

from app.services.accounting.expenses import Expenses, expenses
from app.services.accounting.invoices import (
    PurchaseInvoices,
    SalesInvoices,
    purchase_invoices,
    sales_invoices,
)
from app.services.accounting.ledger import (
    AccountingDashboard,
    ChartOfAccounts,
    accounting_dashboard,
    chart_of_accounts,
)
from app.services.accounting.payments import Payments, payments
from app.services.accounting.reports import FinancialReports, financial_reports

__all__ = [
    "SalesInvoices",
    "PurchaseInvoices",
    "Expenses",
    "Payments",
    "ChartOfAccounts",
    "AccountingDashboard",
    "FinancialReports",
    "sales_invoices",
    "purchase_invoices",
    "expenses",
    "payments",
    "chart_of_accounts",
    "accounting_dashboard",
    "financial_reports",
]
