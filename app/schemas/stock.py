from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.schemas.common import Amount, ERPDocumentRead, OptionalDate
from app.validators.stock_entry import validate_stock_entry


class StockItemLine(BaseModel):
    model_config = ConfigDict(extra="allow")

    item_code: str = Field(min_length=1)
    item_name: str | None = None
    qty: float = Field(gt=0)
    uom: str | None = None
    rate: float | None = Field(default=None, ge=0)
    warehouse: str | None = None
    batch_no: str | None = None
    serial_no: str | None = None


class StockItemRead(BaseModel):
    model_config = ConfigDict(extra="allow")

    item_code: str | None = None
    item_name: str | None = None
    qty: Amount = 0
    uom: str | None = None
    rate: Amount = 0
    amount: Amount = 0
    warehouse: str | None = None


# -----------------------------------------------------------------------------
# Delivery notes
# -----------------------------------------------------------------------------


class DeliveryNoteItemLine(StockItemLine):
    against_sales_order: str | None = None


class DeliveryNoteCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    customer: str = Field(min_length=1)
    posting_date: date
    set_warehouse: str = Field(min_length=1)
    items: list[DeliveryNoteItemLine] = Field(min_length=1)
    name: str | None = None
    posting_time: str | None = None
    company: str | None = None
    territory: str | None = None


class DeliveryNoteUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    posting_date: date | None = None
    posting_time: str | None = None
    set_warehouse: str | None = None
    territory: str | None = None
    items: list[DeliveryNoteItemLine] | None = Field(default=None, min_length=1)


class DeliveryNoteRead(ERPDocumentRead):
    customer: str | None = None
    customer_name: str | None = None
    posting_date: OptionalDate = None
    posting_time: str | None = None
    set_warehouse: str | None = None
    territory: str | None = None
    company: str | None = None
    status: str | None = None
    grand_total: Amount = 0
    items: list[StockItemRead] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Stock entries
# -----------------------------------------------------------------------------


class StockEntryItemLine(StockItemLine):
    s_warehouse: str | None = None
    t_warehouse: str | None = None
    is_finished_item: bool = False
    basic_rate: float | None = Field(default=None, ge=0)


class StockEntryCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    stock_entry_type: str = Field(min_length=1)
    posting_date: date
    items: list[StockEntryItemLine] = Field(min_length=1)
    purpose: str | None = None
    name: str | None = None
    posting_time: str | None = None
    company: str | None = None
    from_warehouse: str | None = None
    to_warehouse: str | None = None

    @property
    def entry_purpose(self) -> str:
        return self.purpose or self.stock_entry_type

    @model_validator(mode="after")
    def _check_purpose(self) -> StockEntryCreate:
        validate_stock_entry(self.entry_purpose, self.from_warehouse, self.to_warehouse, self.items)
        return self


class StockEntryUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    posting_date: date | None = None
    posting_time: str | None = None
    from_warehouse: str | None = None
    to_warehouse: str | None = None
    items: list[StockEntryItemLine] | None = Field(default=None, min_length=1)


class StockEntryRead(ERPDocumentRead):
    stock_entry_type: str | None = None
    purpose: str | None = None
    posting_date: OptionalDate = None
    posting_time: str | None = None
    company: str | None = None
    from_warehouse: str | None = None
    to_warehouse: str | None = None
    total_outgoing_value: Amount = 0
    total_incoming_value: Amount = 0
    items: list[StockItemRead] = Field(default_factory=list)
