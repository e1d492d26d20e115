from __future__ import annotations

from datetime import date
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from app.schemas.common import OptionalDate

ReportType = Literal["Income", "CashFlow", "Balance"]
BalanceCategory = Literal["Assets", "Liabilities", "Equity"]


class ReportSummary(BaseModel):
    report_type: ReportType
    company: str
    from_date: date | None = None
    to_date: date
    # Ordered category label -> amount, e.g. {"Revenue": 1500.0, ...}
    data: dict[str, float]
    # Matching documents that could not be fetched and are missing from data.
    dropped: int = 0


# -----------------------------------------------------------------------------
# Income statement detail lines, tagged by category
# -----------------------------------------------------------------------------


class SalesLine(BaseModel):
    category: Literal["Revenue"] = "Revenue"
    invoice: str
    customer: str | None = None
    date: OptionalDate = None
    amount: float = 0
    tax: float = 0


class PurchaseLine(BaseModel):
    category: Literal["Cost of Goods Sold"] = "Cost of Goods Sold"
    invoice: str
    supplier: str | None = None
    date: OptionalDate = None
    amount: float = 0


class ExpenseLine(BaseModel):
    category: Literal["Operating Expenses"] = "Operating Expenses"
    expense: str
    type: str | None = None
    date: OptionalDate = None
    amount: float = 0
    employee: str | None = None


class IncomeStatementDetail(ReportSummary):
    report_type: Literal["Income"] = "Income"
    sales: list[SalesLine] = Field(default_factory=list)
    purchases: list[PurchaseLine] = Field(default_factory=list)
    expenses: list[ExpenseLine] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Cash flow detail lines, tagged by direction
# -----------------------------------------------------------------------------


class CashFlowLine(BaseModel):
    payment: str
    type: Literal["Inflow", "Outflow"]
    party: str | None = None
    date: OptionalDate = None
    amount: float = 0
    mode: str | None = None


class CashFlowDetail(ReportSummary):
    report_type: Literal["CashFlow"] = "CashFlow"
    payments: list[CashFlowLine] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Balance sheet detail lines
# -----------------------------------------------------------------------------


class LedgerLine(BaseModel):
    entry: str
    date: OptionalDate = None
    debit: float = 0
    credit: float = 0
    balance: float = 0
    voucher_type: str | None = None
    voucher_no: str | None = None


class AccountBalanceLine(BaseModel):
    account: str
    account_name: str | None = None
    balance: float = 0
    category: BalanceCategory
    entries: list[LedgerLine] = Field(default_factory=list)


class BalanceSheetDetail(ReportSummary):
    report_type: Literal["Balance"] = "Balance"
    accounts: list[AccountBalanceLine] = Field(default_factory=list)


DetailedReport = Annotated[
    IncomeStatementDetail | CashFlowDetail | BalanceSheetDetail,
    Field(discriminator="report_type"),
]
