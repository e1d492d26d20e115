"""Financial report aggregation.

Builds the Income Statement, Cash Flow Statement and Balance Sheet from
submitted ERP documents. Each report lists the matching document names,
expands them with the bounded-concurrency fetcher and folds the numeric
fields into category totals. Amounts are summed as reported by the ERP:
no rounding and no currency conversion.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any

from fastapi import HTTPException

from app.logging import get_logger
from app.schemas.reports import (
    AccountBalanceLine,
    BalanceSheetDetail,
    CashFlowDetail,
    CashFlowLine,
    ExpenseLine,
    IncomeStatementDetail,
    LedgerLine,
    PurchaseLine,
    ReportSummary,
    SalesLine,
)
from app.services.common import as_float
from app.services.erpnext.client import ERPNextClient
from app.services.erpnext.fetcher import fetch_all_documents

logger = get_logger(__name__)

REPORT_TYPES = ("Income", "CashFlow", "Balance")

REVENUE = "Revenue"
COGS = "Cost of Goods Sold"
GROSS_PROFIT = "Gross Profit"
OPERATING_EXPENSES = "Operating Expenses"
OPERATING_INCOME = "Operating Income"
TAX = "Tax"
NET_INCOME = "Net Income"

CASH_INFLOWS = "Cash Inflows"
CASH_OUTFLOWS = "Cash Outflows"
NET_CASH_FLOW = "Net Cash Flow"

# Account root_type -> balance sheet category. Income/Expense roots are not
# balance sheet accounts and fall outside every bucket.
ROOT_TYPE_CATEGORIES = {
    "Asset": "Assets",
    "Liability": "Liabilities",
    "Equity": "Equity",
}
BALANCE_CATEGORIES = ("Assets", "Liabilities", "Equity")


# -----------------------------------------------------------------------------
# Aggregation
# -----------------------------------------------------------------------------


def aggregate_income(
    sales: list[dict[str, Any]],
    purchases: list[dict[str, Any]],
    expenses: list[dict[str, Any]],
) -> dict[str, float]:
    revenue = sum(as_float(doc.get("grand_total")) for doc in sales)
    tax = sum(as_float(doc.get("total_taxes_and_charges")) for doc in sales)
    cogs = sum(as_float(doc.get("grand_total")) for doc in purchases)
    operating_expenses = sum(as_float(doc.get("total_amount")) for doc in expenses)

    gross_profit = revenue - cogs
    operating_income = gross_profit - operating_expenses
    net_income = operating_income - tax
    return {
        REVENUE: revenue,
        COGS: cogs,
        GROSS_PROFIT: gross_profit,
        OPERATING_EXPENSES: operating_expenses,
        OPERATING_INCOME: operating_income,
        TAX: tax,
        NET_INCOME: net_income,
    }


def payment_flow(doc: dict[str, Any]) -> tuple[str, float]:
    """Classify a Payment Entry as ("Inflow" | "Outflow", amount).

    Receipts count their received amount, everything else its paid amount;
    each falls back to the other side when empty.
    """
    paid = as_float(doc.get("paid_amount"))
    received = as_float(doc.get("received_amount"))
    if doc.get("payment_type") == "Receive":
        return "Inflow", received or paid
    return "Outflow", paid or received


def aggregate_cash_flow(payments: list[dict[str, Any]]) -> dict[str, float]:
    inflow = 0.0
    outflow = 0.0
    for doc in payments:
        direction, amount = payment_flow(doc)
        if direction == "Inflow":
            inflow += amount
        else:
            outflow += amount
    return {
        CASH_INFLOWS: inflow,
        CASH_OUTFLOWS: outflow,
        NET_CASH_FLOW: inflow - outflow,
    }


def account_balances(gl_entries: list[dict[str, Any]]) -> dict[str, float]:
    """Sum ``debit - credit`` per account."""
    balances: dict[str, float] = defaultdict(float)
    for entry in gl_entries:
        account = entry.get("account")
        if not account:
            continue
        balances[account] += as_float(entry.get("debit")) - as_float(entry.get("credit"))
    return dict(balances)


def aggregate_balance(
    gl_entries: list[dict[str, Any]],
    accounts: list[dict[str, Any]],
) -> dict[str, float]:
    balances = account_balances(gl_entries)
    totals = {category: 0.0 for category in BALANCE_CATEGORIES}
    for account in accounts:
        category = ROOT_TYPE_CATEGORIES.get(account.get("root_type") or "")
        if category is None:
            continue
        totals[category] += balances.get(account["name"], 0.0)
    return totals


def dropped_count(*batches: list[dict[str, Any]]) -> int:
    """Listed documents left out of ``batches`` because their fetch failed."""
    return sum(getattr(batch, "dropped", 0) for batch in batches)


# -----------------------------------------------------------------------------
# Report service
# -----------------------------------------------------------------------------


def _period_filters(company: str, from_date: date, to_date: date) -> list[list[Any]]:
    return [
        ["company", "=", company],
        ["posting_date", "between", [from_date.isoformat(), to_date.isoformat()]],
        ["docstatus", "=", 1],
    ]


def _cutoff_filters(company: str, to_date: date) -> list[list[Any]]:
    return [
        ["company", "=", company],
        ["posting_date", "<=", to_date.isoformat()],
        ["docstatus", "=", 1],
    ]


class FinancialReports:
    @staticmethod
    def validate_params(
        report_type: str | None,
        company: str | None,
        from_date: date | None,
        to_date: date | None,
    ) -> None:
        if not report_type or not company or not from_date or not to_date:
            raise HTTPException(
                status_code=400,
                detail="Missing required parameters: report_type, date range, company",
            )
        if report_type not in REPORT_TYPES:
            raise HTTPException(
                status_code=400,
                detail=f"report_type must be one of: {', '.join(REPORT_TYPES)}",
            )
        if from_date > to_date:
            raise HTTPException(status_code=400, detail="Start date must be on or before end date")

    @staticmethod
    def income_documents(client: ERPNextClient, company: str, from_date: date, to_date: date):
        filters = _period_filters(company, from_date, to_date)
        sales = fetch_all_documents(client, "Sales Invoice", filters, order_by="posting_date asc")
        purchases = fetch_all_documents(client, "Purchase Invoice", filters, order_by="posting_date asc")
        expenses = fetch_all_documents(client, "Expense Claim", filters, order_by="posting_date asc")
        return sales, purchases, expenses

    @staticmethod
    def _payments(client: ERPNextClient, company: str, from_date: date, to_date: date):
        return fetch_all_documents(
            client,
            "Payment Entry",
            _period_filters(company, from_date, to_date),
            order_by="posting_date asc",
        )

    @staticmethod
    def _ledger(client: ERPNextClient, company: str, to_date: date):
        gl_entries = fetch_all_documents(
            client, "GL Entry", _cutoff_filters(company, to_date), order_by="posting_date asc"
        )
        accounts = fetch_all_documents(
            client, "Account", [["company", "=", company]], order_by="lft asc"
        )
        return gl_entries, accounts

    @staticmethod
    def summary(
        client: ERPNextClient,
        report_type: str,
        company: str,
        from_date: date,
        to_date: date,
    ) -> ReportSummary:
        FinancialReports.validate_params(report_type, company, from_date, to_date)
        if report_type == "Income":
            documents = FinancialReports.income_documents(client, company, from_date, to_date)
            data = aggregate_income(*documents)
        elif report_type == "CashFlow":
            documents = (FinancialReports._payments(client, company, from_date, to_date),)
            data = aggregate_cash_flow(*documents)
        else:
            documents = FinancialReports._ledger(client, company, to_date)
            data = aggregate_balance(*documents)
        dropped = dropped_count(*documents)

        logger.info(
            "financial_report_generated type=%s company=%s from=%s to=%s dropped=%s",
            report_type,
            company,
            from_date,
            to_date,
            dropped,
        )
        return ReportSummary(
            report_type=report_type,
            company=company,
            from_date=from_date,
            to_date=to_date,
            data=data,
            dropped=dropped,
        )

    @staticmethod
    def detailed(
        client: ERPNextClient,
        report_type: str,
        company: str,
        from_date: date,
        to_date: date,
    ) -> IncomeStatementDetail | CashFlowDetail | BalanceSheetDetail:
        FinancialReports.validate_params(report_type, company, from_date, to_date)
        header = {"company": company, "from_date": from_date, "to_date": to_date}
        if report_type == "Income":
            report = FinancialReports._income_detail(client, company, from_date, to_date, header)
        elif report_type == "CashFlow":
            report = FinancialReports._cash_flow_detail(client, company, from_date, to_date, header)
        else:
            report = FinancialReports._balance_detail(client, company, to_date, header)

        logger.info(
            "financial_report_detailed type=%s company=%s from=%s to=%s dropped=%s",
            report_type,
            company,
            from_date,
            to_date,
            report.dropped,
        )
        return report

    @staticmethod
    def _income_detail(client, company, from_date, to_date, header) -> IncomeStatementDetail:
        sales, purchases, expenses = FinancialReports.income_documents(client, company, from_date, to_date)
        return IncomeStatementDetail(
            **header,
            data=aggregate_income(sales, purchases, expenses),
            dropped=dropped_count(sales, purchases, expenses),
            sales=[
                SalesLine(
                    invoice=doc["name"],
                    customer=doc.get("customer"),
                    date=doc.get("posting_date"),
                    amount=as_float(doc.get("grand_total")),
                    tax=as_float(doc.get("total_taxes_and_charges")),
                )
                for doc in sales
            ],
            purchases=[
                PurchaseLine(
                    invoice=doc["name"],
                    supplier=doc.get("supplier"),
                    date=doc.get("posting_date"),
                    amount=as_float(doc.get("grand_total")),
                )
                for doc in purchases
            ],
            expenses=[
                ExpenseLine(
                    expense=doc["name"],
                    type=doc.get("expense_type"),
                    date=doc.get("posting_date"),
                    amount=as_float(doc.get("total_amount")),
                    employee=doc.get("employee"),
                )
                for doc in expenses
            ],
        )

    @staticmethod
    def _cash_flow_detail(client, company, from_date, to_date, header) -> CashFlowDetail:
        payments = FinancialReports._payments(client, company, from_date, to_date)
        lines = []
        for doc in payments:
            direction, amount = payment_flow(doc)
            lines.append(
                CashFlowLine(
                    payment=doc["name"],
                    type=direction,
                    party=doc.get("party"),
                    date=doc.get("posting_date"),
                    amount=amount,
                    mode=doc.get("mode_of_payment"),
                )
            )
        return CashFlowDetail(
            **header,
            data=aggregate_cash_flow(payments),
            dropped=dropped_count(payments),
            payments=lines,
        )

    @staticmethod
    def _balance_detail(client, company, to_date, header) -> BalanceSheetDetail:
        gl_entries, accounts = FinancialReports._ledger(client, company, to_date)

        entries_by_account: dict[str, list[LedgerLine]] = defaultdict(list)
        for entry in gl_entries:
            account = entry.get("account")
            if not account:
                continue
            debit = as_float(entry.get("debit"))
            credit = as_float(entry.get("credit"))
            entries_by_account[account].append(
                LedgerLine(
                    entry=entry["name"],
                    date=entry.get("posting_date"),
                    debit=debit,
                    credit=credit,
                    balance=debit - credit,
                    voucher_type=entry.get("voucher_type"),
                    voucher_no=entry.get("voucher_no"),
                )
            )

        balances = account_balances(gl_entries)
        grouped: dict[str, list[AccountBalanceLine]] = {category: [] for category in BALANCE_CATEGORIES}
        for account in accounts:
            category = ROOT_TYPE_CATEGORIES.get(account.get("root_type") or "")
            if category is None:
                continue
            grouped[category].append(
                AccountBalanceLine(
                    account=account["name"],
                    account_name=account.get("account_name"),
                    balance=balances.get(account["name"], 0.0),
                    category=category,
                    entries=entries_by_account.get(account["name"], []),
                )
            )

        return BalanceSheetDetail(
            **header,
            data=aggregate_balance(gl_entries, accounts),
            dropped=dropped_count(gl_entries, accounts),
            accounts=[line for category in BALANCE_CATEGORIES for line in grouped[category]],
        )


financial_reports = FinancialReports()
