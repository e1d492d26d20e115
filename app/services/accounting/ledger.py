"""Chart of accounts, form options, dashboard summary and recent transactions."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import HTTPException

from app.logging import get_logger
from app.schemas.accounting import AccountCreate, AccountingSummary, AccountRead, TransactionRead
from app.services.accounting.reports import (
    COGS,
    NET_INCOME,
    OPERATING_EXPENSES,
    REVENUE,
    FinancialReports,
    aggregate_income,
)
from app.services.common import OptionSources, add_days, as_float, load_options, parse_date, today
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.fetcher import fetch_all_documents, list_documents

logger = get_logger(__name__)

SUMMARY_DEFAULT_DAYS = 30

ACCOUNTING_OPTION_SOURCES: OptionSources = {
    "companies": ("Company", ["name", "company_name"], None, 100),
    "suppliers": ("Supplier", ["name", "supplier_name"], None, 100),
    "customers": ("Customer", ["name", "customer_name"], None, 100),
    "items": (
        "Item",
        ["name", "item_code", "item_name", "description", "stock_uom", "standard_rate", "is_stock_item"],
        [["disabled", "=", 0]],
        1000,
    ),
    "warehouses": ("Warehouse", ["name", "warehouse_name"], None, 100),
    "accounts": ("Account", ["name", "account_name", "account_type", "root_type"], None, 1000),
    "expense_types": ("Expense Claim Type", ["name", "description"], None, 100),
    "payment_methods": ("Mode of Payment", ["name", "mode_of_payment"], None, 100),
}


class ChartOfAccounts:
    @staticmethod
    def list(client: ERPNextClient, company: str | None) -> list[AccountRead]:
        if not company:
            raise HTTPException(status_code=400, detail="Company parameter is required")
        rows = client.get_list(
            "Account",
            fields=[
                "name",
                "account_name",
                "account_number",
                "account_type",
                "parent_account",
                "is_group",
                "company",
                "root_type",
                "account_currency",
            ],
            filters=[["company", "=", company]],
            order_by="account_name asc",
            limit_page_length=1000,
        )
        return [AccountRead.model_validate(row) for row in rows]

    @staticmethod
    def create(client: ERPNextClient, payload: AccountCreate) -> AccountRead:
        doc = payload.model_dump(mode="json", exclude_none=True)
        doc["doctype"] = "Account"
        doc["is_group"] = int(payload.is_group)
        created = client.insert(doc)
        logger.info("erp_account_created name=%s company=%s", created.get("name"), payload.company)
        return AccountRead.model_validate(created)


class AccountingDashboard:
    @staticmethod
    def options(client: ERPNextClient) -> dict[str, list[dict[str, Any]]]:
        return load_options(client, ACCOUNTING_OPTION_SOURCES)

    @staticmethod
    def cash_balance(client: ERPNextClient, company: str) -> float:
        accounts = fetch_all_documents(
            client,
            "Account",
            [["company", "=", company], ["account_name", "like", "%Cash%"], ["is_group", "=", 0]],
        )
        return sum(as_float(account.get("opening_balance")) for account in accounts)

    @staticmethod
    def receivables(client: ERPNextClient, company: str) -> tuple[float, float]:
        """Return (pending, overdue) outstanding amounts on unpaid sales invoices."""
        invoices = fetch_all_documents(
            client,
            "Sales Invoice",
            [["company", "=", company], ["docstatus", "=", 1], ["status", "in", ["Unpaid", "Overdue"]]],
        )
        pending = 0.0
        overdue = 0.0
        current = today()
        for invoice in invoices:
            outstanding = as_float(invoice.get("outstanding_amount"))
            if outstanding <= 0:
                continue
            pending += outstanding
            due_date = parse_date(invoice.get("due_date"))
            if due_date and due_date < current:
                overdue += outstanding
        return pending, overdue

    @staticmethod
    def summary(
        client: ERPNextClient,
        company: str | None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> AccountingSummary:
        if not company:
            raise HTTPException(status_code=400, detail="Company parameter is required")
        date_to = date_to or today()
        date_from = date_from or add_days(date_to, -SUMMARY_DEFAULT_DAYS)
        if date_from > date_to:
            raise HTTPException(status_code=400, detail="Start date must be on or before end date")

        income = aggregate_income(*FinancialReports.income_documents(client, company, date_from, date_to))
        pending, overdue = AccountingDashboard.receivables(client, company)
        return AccountingSummary(
            total_revenue=income[REVENUE],
            total_expenses=income[COGS] + income[OPERATING_EXPENSES],
            net_profit=income[NET_INCOME],
            cash_balance=AccountingDashboard.cash_balance(client, company),
            pending_payments=pending,
            overdue_payments=overdue,
            date_from=date_from,
            date_to=date_to,
        )

    @staticmethod
    def recent_transactions(client: ERPNextClient, company: str | None, limit: int = 10) -> list[TransactionRead]:
        """Latest documents of each transaction doctype, newest first.

        Each doctype contributes up to ``limit // 4`` documents before the
        merged list is sorted by date and cut to ``limit``.
        """
        if not company:
            raise HTTPException(status_code=400, detail="Company parameter is required")
        per_doctype = max(1, limit // 4)
        filters = [["company", "=", company]]

        def _fetch(doctype: str) -> list[dict[str, Any]]:
            return list_documents(client, doctype, filters=filters, order_by="posting_date desc", limit=per_doctype)

        transactions: list[TransactionRead] = []
        for doc in _fetch("Sales Invoice"):
            transactions.append(
                TransactionRead(
                    id=doc["name"],
                    type="sale",
                    date=doc.get("posting_date"),
                    description=f"Sales Invoice - {doc.get('customer')}",
                    amount=as_float(doc.get("grand_total")),
                    status=doc.get("status"),
                )
            )
        for doc in _fetch("Purchase Invoice"):
            transactions.append(
                TransactionRead(
                    id=doc["name"],
                    type="purchase",
                    date=doc.get("posting_date"),
                    description=f"Purchase Invoice - {doc.get('supplier')}",
                    amount=as_float(doc.get("grand_total")),
                    status=doc.get("status"),
                )
            )
        for doc in _fetch("Expense Claim"):
            transactions.append(
                TransactionRead(
                    id=doc["name"],
                    type="expense",
                    date=doc.get("posting_date"),
                    description=f"Expense - {doc.get('expense_type')}",
                    amount=as_float(doc.get("total_amount")),
                    status=doc.get("status"),
                )
            )
        for doc in _fetch("Payment Entry"):
            transactions.append(
                TransactionRead(
                    id=doc["name"],
                    type="payment",
                    date=doc.get("posting_date"),
                    description=f"Payment - {doc.get('party_type')}: {doc.get('party')}",
                    amount=as_float(doc.get("paid_amount")) or as_float(doc.get("received_amount")),
                    status=doc.get("status"),
                )
            )

        transactions.sort(key=lambda txn: txn.date or date.min, reverse=True)
        return transactions[:limit]


chart_of_accounts = ChartOfAccounts()
accounting_dashboard = AccountingDashboard()
