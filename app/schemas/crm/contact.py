from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Amount, ERPDocumentRead


class CustomerCreate(BaseModel):
    customer_name: str = Field(min_length=1, max_length=140)
    customer_type: str = "Individual"
    customer_group: str = "All Customer Groups"
    territory: str = "All Territories"
    default_currency: str | None = None
    credit_limit: float = Field(default=0, ge=0)
    email_id: str | None = None
    mobile_no: str | None = None


class CustomerUpdate(BaseModel):
    customer_name: str | None = Field(default=None, min_length=1, max_length=140)
    customer_type: str | None = None
    customer_group: str | None = None
    territory: str | None = None
    default_currency: str | None = None
    email_id: str | None = None
    mobile_no: str | None = None
    disabled: bool | None = None


class CustomerRead(ERPDocumentRead):
    customer_name: str | None = None
    customer_type: str | None = None
    customer_group: str | None = None
    territory: str | None = None
    default_currency: str | None = None
    email_id: str | None = None
    mobile_no: str | None = None
    disabled: int | None = None
    credit_limit: Amount = 0
    owner: str | None = None


class DynamicLink(BaseModel):
    model_config = ConfigDict(extra="ignore")

    link_doctype: str | None = None
    link_name: str | None = None


class ContactCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=140)
    last_name: str | None = None
    email_id: str | None = None
    mobile_no: str | None = None
    is_primary_contact: bool = False


class ContactRead(ERPDocumentRead):
    first_name: str | None = None
    last_name: str | None = None
    email_id: str | None = None
    mobile_no: str | None = None
    is_primary_contact: int | None = None
    links: list[DynamicLink] = Field(default_factory=list)


class AddressCreate(BaseModel):
    address_title: str = Field(min_length=1, max_length=140)
    address_type: str = Field(min_length=1)
    address_line1: str = Field(min_length=1)
    address_line2: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    is_primary_address: bool = False


class AddressRead(ERPDocumentRead):
    address_title: str | None = None
    address_type: str | None = None
    address_line1: str | None = None
    address_line2: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    is_primary_address: int | None = None
    links: list[DynamicLink] = Field(default_factory=list)
