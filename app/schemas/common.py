from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Generic, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

T = TypeVar("T")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _missing_to_zero(value: Any) -> Any:
    if value is None or value == "":
        return 0
    return value


# Frappe sends "" for unset dates and null/absent for unset currency fields.
OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]
Amount = Annotated[float, BeforeValidator(_missing_to_zero)]


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T
    message: str | None = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
    details: Any = None
    status_code: int | None = None


class ERPDocumentRead(BaseModel):
    """Base projection of a remote document."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    docstatus: int | None = None
    creation: str | None = None
    modified: str | None = None


class ItemLine(BaseModel):
    item_code: str = Field(min_length=1)
    item_name: str | None = None
    description: str | None = None
    qty: float = Field(default=0, ge=0)
    rate: float = Field(default=0, ge=0)
    uom: str | None = None
    warehouse: str | None = None


class ItemLineRead(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    item_code: str | None = None
    item_name: str | None = None
    description: str | None = None
    qty: Amount = 0
    rate: Amount = 0
    amount: Amount = 0
    uom: str | None = None
    warehouse: str | None = None


class DeleteResult(BaseModel):
    name: str
    message: str
