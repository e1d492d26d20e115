from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Amount, ERPDocumentRead, ItemLine, ItemLineRead, OptionalDate

# -----------------------------------------------------------------------------
# Sales Invoice
# -----------------------------------------------------------------------------


class SalesInvoiceCreate(BaseModel):
    customer: str = Field(min_length=1)
    posting_date: date | None = None
    due_date: date | None = None
    company: str | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    conversion_rate: float = Field(default=1, gt=0)
    items: list[ItemLine] = Field(min_length=1)


class SalesInvoiceUpdate(BaseModel):
    customer: str | None = Field(default=None, min_length=1)
    posting_date: date | None = None
    due_date: date | None = None
    items: list[ItemLine] | None = Field(default=None, min_length=1)
    remarks: str | None = None


class SalesInvoiceRead(ERPDocumentRead):
    customer: str | None = None
    customer_name: str | None = None
    posting_date: OptionalDate = None
    due_date: OptionalDate = None
    grand_total: Amount = 0
    total_taxes_and_charges: Amount = 0
    outstanding_amount: Amount = 0
    status: str | None = None
    currency: str | None = None
    company: str | None = None
    items: list[ItemLineRead] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Purchase Invoice
# -----------------------------------------------------------------------------

PURCHASE_STATUS_ALIASES = {
    "drafts": "Draft",
    "draft": "Draft",
    "submitted": "Submitted",
    "paid": "Paid",
    "unpaid": "Unpaid",
    "overdue": "Overdue",
}


class PurchaseInvoiceCreate(BaseModel):
    supplier: str = Field(min_length=1)
    posting_date: date
    company: str = Field(min_length=1)
    due_date: date | None = None
    bill_no: str | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    items: list[ItemLine] = Field(min_length=1)


class PurchaseInvoiceUpdate(BaseModel):
    supplier: str | None = Field(default=None, min_length=1)
    posting_date: date | None = None
    due_date: date | None = None
    bill_no: str | None = None
    items: list[ItemLine] | None = Field(default=None, min_length=1)


class PurchaseInvoiceRead(ERPDocumentRead):
    supplier: str | None = None
    supplier_name: str | None = None
    posting_date: OptionalDate = None
    due_date: OptionalDate = None
    grand_total: Amount = 0
    total_amount: Amount = 0
    total_tax: Amount = 0
    status: str | None = None
    currency: str | None = None
    company: str | None = None
    items: list[ItemLineRead] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Expense Claim
# -----------------------------------------------------------------------------

EXPENSE_STATUS_ALIASES = {
    "paid": "Paid",
    "unpaid": "Unpaid",
    "draft": "Draft",
    "submitted": "Submitted",
}


class ExpenseCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    expense_type: str = Field(min_length=1)
    posting_date: date
    amount: float = Field(gt=0)
    paid_by: str = Field(min_length=1)
    employee: str | None = None
    company: str | None = None
    description: str | None = None
    remark: str | None = None


class ExpenseUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    expense_type: str | None = Field(default=None, min_length=1)
    posting_date: date | None = None
    amount: float | None = Field(default=None, gt=0)
    paid_by: str | None = None
    description: str | None = None
    remark: str | None = None


class ExpenseRead(ERPDocumentRead):
    expense_type: str | None = None
    posting_date: OptionalDate = None
    amount: Amount = 0
    tax_amount: Amount = 0
    total_amount: Amount = 0
    description: str | None = None
    paid_by: str | None = None
    status: str | None = None
    employee: str | None = None
    company: str | None = None
    currency: str | None = None
    approval_status: str | None = None
    remark: str | None = None


# -----------------------------------------------------------------------------
# Payment Entry
# -----------------------------------------------------------------------------

PaymentType = Literal["Receive", "Pay", "Internal Transfer"]


class PaymentCreate(BaseModel):
    payment_type: PaymentType
    party_type: str = Field(min_length=1)
    party: str = Field(min_length=1)
    posting_date: date
    amount: float = Field(gt=0)
    company: str = Field(min_length=1)
    paid_from: str = Field(min_length=1)
    paid_to: str = Field(min_length=1)
    payment_method: str | None = None
    reference_no: str | None = None
    reference_date: date | None = None
    remarks: str | None = None


class PaymentUpdate(BaseModel):
    posting_date: date | None = None
    amount: float | None = Field(default=None, gt=0)
    payment_method: str | None = None
    reference_no: str | None = None
    reference_date: date | None = None
    remarks: str | None = None


class PaymentRead(ERPDocumentRead):
    payment_type: str | None = None
    party_type: str | None = None
    party: str | None = None
    party_name: str | None = None
    posting_date: OptionalDate = None
    amount: Amount = 0
    paid_amount: Amount = 0
    received_amount: Amount = 0
    reference_no: str | None = None
    reference_date: OptionalDate = None
    status: str | None = None
    payment_method: str | None = None
    mode_of_payment: str | None = None
    company: str | None = None
    currency: str | None = None
    paid_from: str | None = None
    paid_to: str | None = None


class PaymentDetailRead(PaymentRead):
    paid_from_account_name: str | None = None
    paid_to_account_name: str | None = None


# -----------------------------------------------------------------------------
# Chart of Accounts
# -----------------------------------------------------------------------------

RootType = Literal["Asset", "Liability", "Equity", "Income", "Expense"]


class AccountCreate(BaseModel):
    account_name: str = Field(min_length=1)
    account_type: str = Field(min_length=1)
    company: str = Field(min_length=1)
    root_type: RootType
    parent_account: str | None = None
    account_number: str | None = None
    is_group: bool = False
    account_currency: str | None = None


class AccountRead(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    account_name: str | None = None
    account_number: str | None = None
    account_type: str | None = None
    root_type: str | None = None
    parent_account: str | None = None
    is_group: bool = False
    company: str | None = None
    account_currency: str | None = None


# -----------------------------------------------------------------------------
# Summary / recent transactions
# -----------------------------------------------------------------------------


class AccountingSummary(BaseModel):
    total_revenue: float
    total_expenses: float
    net_profit: float
    cash_balance: float
    pending_payments: float
    overdue_payments: float
    date_from: date
    date_to: date


class TransactionRead(BaseModel):
    id: str
    type: Literal["sale", "purchase", "expense", "payment"]
    date: OptionalDate = None
    description: str
    amount: Amount = 0
    status: str | None = None

