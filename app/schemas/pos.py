from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Amount


class POSProfile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    company: str | None = None
    customer: str | None = None
    warehouse: str | None = None
    currency: str | None = None
    write_off_account: str | None = None
    expense_account: str | None = None
    income_account: str | None = None


class POSItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item_code: str
    item_name: str = ""
    description: str | None = None
    stock_uom: str | None = None
    image: str | None = None
    standard_rate: Amount = 0
    is_stock_item: int | None = None
    item_group: str | None = None
    actual_qty: Amount = 0


class POSCategory(BaseModel):
    name: str
    items: list[POSItem] = Field(default_factory=list)


class POSCatalog(BaseModel):
    profile: POSProfile
    customers: list[str]
    categories: list[POSCategory]


class POSOrderLine(BaseModel):
    item_code: str = Field(min_length=1)
    item_name: str | None = None
    qty: float = Field(gt=0)
    rate: float = Field(ge=0)
    uom: str | None = None


class POSPayment(BaseModel):
    model_config = ConfigDict(extra="allow")

    mode_of_payment: str = Field(min_length=1)
    amount: float = Field(ge=0)


class POSOrder(BaseModel):
    customer: str = Field(min_length=1)
    items: list[POSOrderLine] = Field(min_length=1)
    posting_date: date | None = None
    posting_time: str | None = None
    company: str | None = None
    warehouse: str | None = None
    payments: list[POSPayment] = Field(default_factory=list)


class StockLevel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item_code: str
    item_name: str = ""
    warehouse: str | None = None
    actual_qty: Amount = 0
    projected_qty: Amount = 0
    stock_uom: str | None = None
    is_stock_item: int = 0
