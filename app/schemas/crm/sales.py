from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from app.schemas.common import Amount, ERPDocumentRead, ItemLine, ItemLineRead, OptionalDate

OpportunityFrom = Literal["Customer", "Lead"]


class LeadBase(BaseModel):
    email_id: str | None = Field(default=None, max_length=140)
    mobile_no: str | None = Field(default=None, max_length=40)
    source: str | None = None
    territory: str | None = None
    contact_by: str | None = None
    company_name: str | None = None


class LeadCreate(LeadBase):
    lead_name: str = Field(min_length=1, max_length=140)
    status: str = "Open"


class LeadUpdate(LeadBase):
    lead_name: str | None = Field(default=None, min_length=1, max_length=140)
    status: str | None = None


class LeadRead(ERPDocumentRead):
    lead_name: str | None = None
    email_id: str | None = None
    mobile_no: str | None = None
    status: str | None = None
    source: str | None = None
    territory: str | None = None
    contact_by: str | None = None
    company_name: str | None = None
    owner: str | None = None


class OpportunityCreate(BaseModel):
    opportunity_from: OpportunityFrom
    opportunity_type: str = Field(min_length=1)
    customer: str | None = None
    lead: str | None = None
    status: str = "Open"
    probability: int = Field(default=0, ge=0, le=100)
    expected_closing_date: date | None = None
    opportunity_amount: float = Field(default=0, ge=0)
    sales_stage: str = "Qualification"
    territory: str | None = None
    contact_by: str | None = None


class OpportunityUpdate(BaseModel):
    opportunity_type: str | None = None
    status: str | None = None
    probability: int | None = Field(default=None, ge=0, le=100)
    expected_closing_date: date | None = None
    opportunity_amount: float | None = Field(default=None, ge=0)
    sales_stage: str | None = None
    territory: str | None = None
    contact_by: str | None = None


class OpportunityRead(ERPDocumentRead):
    opportunity_from: str | None = None
    party_name: str | None = None
    opportunity_type: str | None = None
    status: str | None = None
    probability: float | None = None
    expected_closing_date: OptionalDate = None
    opportunity_amount: Amount = 0
    sales_stage: str | None = None
    customer: str | None = None
    lead: str | None = None
    territory: str | None = None
    contact_by: str | None = None
    owner: str | None = None


class SalesDocumentCreate(BaseModel):
    customer: str = Field(min_length=1)
    items: list[ItemLine] = Field(min_length=1)
    transaction_date: date | None = None
    status: str = "Draft"


class QuotationCreate(SalesDocumentCreate):
    valid_till: date | None = None


class QuotationUpdate(BaseModel):
    valid_till: date | None = None
    transaction_date: date | None = None
    status: str | None = None
    items: list[ItemLine] | None = Field(default=None, min_length=1)


class SalesOrderCreate(SalesDocumentCreate):
    delivery_date: date | None = None


class SalesOrderUpdate(BaseModel):
    delivery_date: date | None = None
    transaction_date: date | None = None
    status: str | None = None
    items: list[ItemLine] | None = Field(default=None, min_length=1)


class SalesDocumentRead(ERPDocumentRead):
    customer: str | None = None
    customer_name: str | None = None
    party_name: str | None = None
    transaction_date: OptionalDate = None
    status: str | None = None
    currency: str | None = None
    total: Amount = 0
    grand_total: Amount = 0
    items: list[ItemLineRead] = Field(default_factory=list)
    owner: str | None = None


class QuotationRead(SalesDocumentRead):
    valid_till: OptionalDate = None


class SalesOrderRead(SalesDocumentRead):
    delivery_date: OptionalDate = None
    per_delivered: Amount = 0
    per_billed: Amount = 0
